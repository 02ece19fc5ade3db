"""
Declarative base shared by the ORM models in app.models.

Base.metadata only knows a table once its model module has been imported;
`import app.models` registers all of them.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names, e.g. the age check on cats becomes
# "ck_cats_age_non_negative" and the primary key "pk_cats".
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
