from eventshare.schemas.event import Event, EventApiRecord, EventListResponse, EventStatus
from eventshare.schemas.share import (
    GenerationConfig,
    GenerationResult,
    ShareConfigUpdate,
    ShareTextRequest,
    ShareTextResponse,
)

__all__ = [
    "Event",
    "EventApiRecord",
    "EventListResponse",
    "EventStatus",
    "GenerationConfig",
    "GenerationResult",
    "ShareConfigUpdate",
    "ShareTextRequest",
    "ShareTextResponse",
]
