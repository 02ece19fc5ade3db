from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from app.database.base import Base


class Cat(Base):
    """
    SQLAlchemy model for Cat.

    Business fields are `name` and `age`; `id` is assigned on insert and the
    `created_on` / `updated_on` audit columns are maintained by the database.

    Two cats compare equal when their name and age match, even when they are
    separate rows with different ids.
    """
    __tablename__ = "cats"
    __table_args__ = (
        CheckConstraint("age >= 0", name="age_non_negative"),
    )

    # Surrogate key, unset (None) until the row is flushed
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    age: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )

    # --- Audit fields (never exposed as sortable/aggregatable fields) ---

    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    @staticmethod
    def builder() -> "CatBuilder":
        return CatBuilder()

    def sound(self) -> str:
        return "Meow"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Cat):
            return NotImplemented
        return (self.name, self.age) == (other.name, other.age)

    def __hash__(self) -> int:
        return hash((self.name, self.age))

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<Cat(id={self.id!r}, name={self.name!r}, age={self.age!r})>"


class CatBuilder:
    """
    Fluent construction of a transient Cat:

        cat = Cat.builder().name("Couscous").age(10).build()
    """

    def __init__(self) -> None:
        self._id: int | None = None
        self._name: str | None = None
        self._age: int | None = None

    def id(self, value: int | None) -> "CatBuilder":
        self._id = value
        return self

    def name(self, value: str) -> "CatBuilder":
        self._name = value
        return self

    def age(self, value: int) -> "CatBuilder":
        self._age = value
        return self

    def build(self) -> Cat:
        return Cat(id=self._id, name=self._name, age=self._age)
