"""Base classes and shared conventions for trip board contracts.

Conventions (all contracts and API responses):
- **Instants**: always UTC, ISO 8601 in serialized form, suffix ``_utc``
- **Calendar days**: UTC dates, ``YYYY-MM-DD``
- **Minutes of day**: integers in ``[0, 1440]`` measured from UTC midnight
- **ICAO codes**: upper-case alphanumerics, at most 4 characters

Naive datetimes reaching a contract are interpreted as UTC.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict

MINUTES_PER_DAY = 1440


def as_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime (naive input is taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FirestoreModel(BaseModel):
    """Base model with Firestore-friendly serialization.

    - Enums serialize as string values (Firestore stores strings).
    - ``to_firestore()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_firestore()`` hydrates from a stored document dict.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_firestore(self) -> dict[str, Any]:
        """Dump to a Firestore-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_firestore(cls, data: dict[str, Any]) -> "FirestoreModel":
        """Create a model instance from a stored document dict."""
        return cls.model_validate(data)
