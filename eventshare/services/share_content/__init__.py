"""Share text generation for the monthly events calendar."""

from eventshare.config import AppConfig

from .cache import CacheEntry, ResultCache, build_cache_key
from .filters import filter_eligible
from .formatter import format_and_sort_lines, format_date, format_line
from .generator import (
    ShareContentGenerator,
    build_footer,
    create_share_content_generator,
)
from .truncation import CHARACTER_LIMIT, build_omission_marker, truncate

__all__ = [
    "CHARACTER_LIMIT",
    "CacheEntry",
    "ResultCache",
    "ShareContentGenerator",
    "build_cache_key",
    "build_footer",
    "build_omission_marker",
    "build_share_content_generator",
    "create_share_content_generator",
    "filter_eligible",
    "format_and_sort_lines",
    "format_date",
    "format_line",
    "truncate",
]


def build_share_content_generator(config: AppConfig) -> ShareContentGenerator:
    """
    Build a generator and its cache from application config.

    The caller owns the returned generator; call ``generator.cache.dispose()``
    when done with it.
    """
    share = config.share
    cache = ResultCache(
        ttl_seconds=share.cache_ttl_seconds,
        max_size=share.cache_max_size,
    )
    return ShareContentGenerator(
        share.to_generation_config(),
        cache=cache,
        timezone=share.timezone,
    )
