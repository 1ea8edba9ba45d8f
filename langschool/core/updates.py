from typing import Any, Dict

from fastapi import status
from .errors import ApiError


def required_columns(db_obj) -> set:
    """Columns that may not be set to null: NOT NULL ones and those with a default."""
    return {
        column.key for column in db_obj.__table__.columns
        if not column.nullable or column.default is not None
    }


def update_fields(db_obj, data: Dict[str, Any]) -> None:
    """Copy the fields a client sent onto a row.

    An explicit ``null`` for a required column is refused with a 400 before
    anything is written.
    """
    refused = sorted(field for field, value in data.items() if value is None and field in required_columns(db_obj))
    if refused:
        raise ApiError(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Fields cannot be null: {', '.join(refused)}",
            extra={"fields": refused},
        )
    for field, value in data.items():
        setattr(db_obj, field, value)
