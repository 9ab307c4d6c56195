"""SQLAlchemy declarative base and metadata."""

from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import Enum
from sqlalchemy.orm import DeclarativeBase

from trainer_aide.core.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Normalize to tz-aware UTC (SQLite hands back naive datetimes)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def str_enum(enum_cls: type[PyEnum]) -> Enum:
    """Store enum values (not names) as VARCHAR so rows read the same on any backend."""
    return Enum(
        enum_cls,
        values_callable=lambda e: [m.value for m in e],
        native_enum=False,
        length=32,
    )


def apply_changes(obj: "Base", values: dict) -> None:
    """Copy partial-update values onto a row. Null is refused for NOT NULL columns."""
    columns = obj.__table__.columns
    errors = [
        f"{key} cannot be null"
        for key, value in values.items()
        if value is None and key in columns and not columns[key].nullable
    ]
    if errors:
        raise ValidationError("Invalid update", errors)
    for key, value in values.items():
        setattr(obj, key, value)


class Base(DeclarativeBase):
    """Base for all ORM models."""

    pass
