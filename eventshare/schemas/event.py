from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventStatus(str, Enum):
    """Approval status of a study-session event."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class Event(BaseModel):
    """A study-session event as consumed by the share text generator."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    start_date: datetime
    end_date: datetime
    status: EventStatus
    link: str | None = None


class EventApiRecord(BaseModel):
    """Study-session record as returned by the admin events API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    url: str
    starts_at: datetime = Field(alias="datetime")
    ends_at: datetime | None = Field(default=None, alias="endDatetime")
    status: EventStatus
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    contact: str | None = None

    def to_event(self) -> Event:
        """Convert to an Event; a missing end time collapses onto the start."""
        return Event(
            id=self.id,
            title=self.title,
            start_date=self.starts_at,
            end_date=self.ends_at or self.starts_at,
            status=self.status,
            link=self.url,
        )


class EventListResponse(BaseModel):
    """Admin events API list payload."""

    count: int
    total: int
    events: list[EventApiRecord]

    def to_events(self) -> list[Event]:
        return [record.to_event() for record in self.events]
