from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from eventshare.core.datetime_utils import get_zone, to_local, utc_now
from eventshare.core.logging import get_logger
from eventshare.schemas.event import Event
from eventshare.schemas.share import (
    DEFAULT_BASE_MESSAGE,
    DEFAULT_HASHTAGS,
    GenerationConfig,
    GenerationResult,
)

from .cache import ResultCache, build_cache_key
from .filters import filter_eligible
from .formatter import format_and_sort_lines
from .truncation import BLOCK_SEPARATOR, truncate

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Asia/Tokyo"
NO_EVENTS_MESSAGE = "今月は予定されているイベントがありません。"
LINK_LABEL = "詳細はこちら"


def build_footer(config: GenerationConfig) -> str:
    """Link line and hashtags, separated by a blank line."""
    url_line = f"{LINK_LABEL}: {config.destination_url}"
    return f"{url_line}{BLOCK_SEPARATOR}{' '.join(config.hashtags)}"


def build_no_events_text(config: GenerationConfig) -> str:
    return BLOCK_SEPARATOR.join([config.base_message, NO_EVENTS_MESSAGE, build_footer(config)])


class ShareContentGenerator:
    """
    Turns the event list into share text for the calendar's share button.

    Filter -> format -> truncate, with results memoized in a ResultCache
    owned by the caller. Pass ``cache=None`` to always compute fresh.
    """

    def __init__(
        self,
        config: GenerationConfig,
        cache: ResultCache | None = None,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the generator.

        Args:
            config: Base message, hashtags and destination URL
            cache: Result cache shared with the caller (optional)
            timezone: Calendar timezone used to decide "this month"
            clock: Returns the current time (injectable for tests)
        """
        self._config = config
        self._cache = cache
        self._zone = get_zone(timezone)
        self._clock = clock

    @property
    def cache(self) -> ResultCache | None:
        return self._cache

    def get_config(self) -> GenerationConfig:
        """Return the current configuration."""
        return self._config

    def update_config(self, **changes: Any) -> GenerationConfig:
        """
        Merge changes into the configuration and clear the cache.

        Every cached result depends on the configuration, so nothing cached
        under the old one may be served afterwards.
        """
        self._config = GenerationConfig.model_validate({**self._config.model_dump(), **changes})
        if self._cache is not None:
            self._cache.clear()
        logger.bind(fields=sorted(changes)).info("share_config_updated")
        return self._config

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def cache_stats(self) -> dict[str, Any] | None:
        return self._cache.stats() if self._cache is not None else None

    def generate(
        self,
        events: Iterable[Event],
        config: GenerationConfig | None = None,
        now: datetime | None = None,
    ) -> GenerationResult:
        """
        Generate share text, serving repeated inputs from the cache.

        Args:
            events: Candidate events (any order, any status)
            config: Overrides the generator's configuration for this call
            now: Reference time (defaults to the clock, in calendar timezone)

        Returns:
            GenerationResult identical to a fresh computation
        """
        events = list(events)
        config = config if config is not None else self._config
        now = self._reference_time(now)

        if self._cache is None:
            return self._generate(events, config, now)

        key = build_cache_key(events, config, now.date())
        return self._cache.get_or_compute(key, lambda: self._generate(events, config, now))

    def generate_uncached(
        self,
        events: Iterable[Event],
        config: GenerationConfig | None = None,
        now: datetime | None = None,
    ) -> GenerationResult:
        """Generate share text without touching the cache."""
        config = config if config is not None else self._config
        return self._generate(list(events), config, self._reference_time(now))

    def _reference_time(self, now: datetime | None) -> datetime:
        if now is None:
            now = self._clock()
        return to_local(now, self._zone)

    def _generate(
        self,
        events: list[Event],
        config: GenerationConfig,
        now: datetime,
    ) -> GenerationResult:
        eligible = filter_eligible(events, now)

        if not eligible:
            logger.bind(candidates=len(events)).debug("share_text_no_events")
            return GenerationResult(
                share_text=build_no_events_text(config),
                included_event_count=0,
                was_truncated=False,
            )

        lines = format_and_sort_lines(eligible, now.tzinfo)
        result = truncate(
            config.base_message,
            lines,
            build_footer(config),
            destination_url=config.destination_url,
        )

        logger.bind(
            candidates=len(events),
            eligible=len(eligible),
            included=result.included_event_count,
            truncated=result.was_truncated,
            length=len(result.share_text),
        ).debug("share_text_generated")
        return result


def create_share_content_generator(
    destination_url: str,
    *,
    cache: ResultCache | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> ShareContentGenerator:
    """Create a generator with the default headline and hashtags."""
    config = GenerationConfig(
        destination_url=destination_url,
        hashtags=DEFAULT_HASHTAGS,
        base_message=DEFAULT_BASE_MESSAGE,
    )
    return ShareContentGenerator(
        config,
        cache=cache if cache is not None else ResultCache(),
        timezone=timezone,
    )
