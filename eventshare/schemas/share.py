from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventshare.schemas.event import Event, EventApiRecord

DEFAULT_BASE_MESSAGE = "📅 今月の広島IT勉強会"
DEFAULT_HASHTAGS: tuple[str, ...] = ("#広島IT", "#勉強会", "#プログラミング")


class GenerationConfig(BaseModel):
    """Inputs that shape every generated share text."""

    model_config = ConfigDict(frozen=True)

    destination_url: str
    hashtags: tuple[str, ...] = DEFAULT_HASHTAGS
    base_message: str = DEFAULT_BASE_MESSAGE

    @field_validator("base_message")
    @classmethod
    def default_when_blank(cls, value: str) -> str:
        # An empty message falls back to the calendar headline
        return value or DEFAULT_BASE_MESSAGE


class GenerationResult(BaseModel):
    """Generated share text plus how much of the event list made it in."""

    model_config = ConfigDict(frozen=True)

    share_text: str
    included_event_count: int = Field(ge=0)
    was_truncated: bool


class ShareTextRequest(BaseModel):
    """Request body for generating share text."""

    events: list[Event | EventApiRecord] = Field(default_factory=list)
    now: datetime | None = None

    def to_events(self) -> list[Event]:
        return [
            item.to_event() if isinstance(item, EventApiRecord) else item for item in self.events
        ]


class ShareTextResponse(BaseModel):
    """Generated share text plus a ready-to-open intent link."""

    share_text: str
    included_event_count: int
    was_truncated: bool
    length: int
    intent_url: str
    is_fallback: bool = False


class ShareConfigUpdate(BaseModel):
    """Partial configuration update; omitted fields keep their value."""

    destination_url: str | None = Field(default=None, min_length=1)
    hashtags: list[str] | None = None
    base_message: str | None = None
