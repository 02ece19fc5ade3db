# app/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (InvalidValueError, NoSuchFieldError, NotFoundError)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific errors
# │   └── mapper.py                  # Map SQL-level / DB-specific errors to app-level errors

from .base import RepositoryError, InvalidValueError, NoSuchFieldError, NotFoundError, InvalidFieldError

__all__ = ["RepositoryError", "InvalidValueError", "NoSuchFieldError", "NotFoundError", "InvalidFieldError"]
