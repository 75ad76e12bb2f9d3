"""
Shared utilities for handing share text to social platforms.

Used by the API and CLI to turn generated share text into a Twitter Web
Intent link, and to fall back to a short text when generation fails.
"""

import urllib.parse
from collections.abc import Iterable

from eventshare.schemas.share import DEFAULT_HASHTAGS
from eventshare.services.share_content.generator import LINK_LABEL
from eventshare.services.share_content.truncation import BLOCK_SEPARATOR

TWITTER_INTENT_URL = "https://twitter.com/intent/tweet"
CALENDAR_NAME = "広島IT勉強会カレンダー"

# Same unreserved set as JavaScript's encodeURIComponent
_INTENT_SAFE_CHARS = "!*'()"


def build_twitter_intent_url(text: str, intent_url: str = TWITTER_INTENT_URL) -> str:
    """
    Build a Twitter Web Intent URL that pre-fills a post.

    Args:
        text: Share text to pre-fill
        intent_url: Intent endpoint (configurable for alternate hosts)

    Returns:
        Intent URL with the text percent-encoded in the ``text`` parameter
    """
    return f"{intent_url}?text={urllib.parse.quote(text, safe=_INTENT_SAFE_CHARS)}"


def build_fallback_share_text(
    destination_url: str,
    message: str | None = None,
    hashtags: Iterable[str] = DEFAULT_HASHTAGS,
) -> str:
    """
    Short share text for when no generated text is available.

    With a message the text keeps the usual link line and hashtags; without
    one it is just the calendar name and the URL.

    Args:
        destination_url: Calendar page the post links to
        message: Optional headline to show instead of the calendar name
        hashtags: Hashtags appended after the link line (message form only)

    Returns:
        Fallback share text that always contains the destination URL
    """
    if not message:
        return f"{CALENDAR_NAME}\n{destination_url}"

    footer = f"{LINK_LABEL}: {destination_url}{BLOCK_SEPARATOR}{' '.join(hashtags)}"
    return BLOCK_SEPARATOR.join([message, footer])
