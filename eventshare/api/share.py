from fastapi import APIRouter

from eventshare.core.logging import get_logger
from eventshare.dependencies import Config, ShareGenerator
from eventshare.schemas.share import (
    GenerationConfig,
    ShareConfigUpdate,
    ShareTextRequest,
    ShareTextResponse,
)
from eventshare.services.social_utils import build_fallback_share_text, build_twitter_intent_url

logger = get_logger(__name__)

router = APIRouter()


@router.post("/share-text", response_model=ShareTextResponse)
async def generate_share_text(
    body: ShareTextRequest,
    generator: ShareGenerator,
    config: Config,
) -> ShareTextResponse:
    """
    Generate share text for this month's upcoming events.

    Accepts events either as share events or as raw admin API records.
    Events that cannot be compared (naive and aware times mixed) fall back
    to the short calendar text so the share button still works.
    """
    try:
        result = generator.generate(body.to_events(), now=body.now)
    except TypeError as e:
        logger.bind(events=len(body.events), error=str(e)).warning("share_text_fallback_used")
        share_text = build_fallback_share_text(generator.get_config().destination_url)
        return ShareTextResponse(
            share_text=share_text,
            included_event_count=0,
            was_truncated=False,
            length=len(share_text),
            intent_url=build_twitter_intent_url(share_text, config.share.intent_url),
            is_fallback=True,
        )

    logger.bind(
        events=len(body.events),
        included=result.included_event_count,
        truncated=result.was_truncated,
    ).info("share_text_requested")

    return ShareTextResponse(
        share_text=result.share_text,
        included_event_count=result.included_event_count,
        was_truncated=result.was_truncated,
        length=len(result.share_text),
        intent_url=build_twitter_intent_url(result.share_text, config.share.intent_url),
    )


@router.get("/share-text/config", response_model=GenerationConfig)
async def get_share_config(generator: ShareGenerator) -> GenerationConfig:
    """Return the active share text configuration."""
    return generator.get_config()


@router.put("/share-text/config", response_model=GenerationConfig)
async def update_share_config(
    body: ShareConfigUpdate,
    generator: ShareGenerator,
) -> GenerationConfig:
    """Update the share text configuration (clears cached results)."""
    return generator.update_config(**body.model_dump(exclude_none=True))
