"""
Public user view

UserInfo is the only shape in which a user leaves the service. Timestamps
are stored as naive UTC and go out on the wire with an explicit offset.
"""

from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive UTC timestamp; aware values are converted"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserInfo(CamelModel):
    """Sanitized user - never carries password hash, salt or timestamps"""

    id: str
    email: str
    name: str
    avatar: Optional[str] = ""
    is_verified: bool = False
