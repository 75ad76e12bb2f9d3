"""
Fit event lines into a single post.

Lines are taken as a strict prefix of the date-sorted list: the first line
that does not fit ends the event block, even if a shorter later line would.
Earlier events are the most time-sensitive, so they are never dropped in
favour of a later one.
"""

from collections.abc import Sequence

from eventshare.core.logging import get_logger
from eventshare.schemas.share import GenerationResult

logger = get_logger(__name__)

CHARACTER_LIMIT = 280
BLOCK_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"


def build_omission_marker(omitted_count: int) -> str:
    """Build the "...and N more events" line."""
    return f"...他{omitted_count}件のイベント"


def _fallback_text(base_message: str, destination_url: str) -> str:
    return f"{base_message}{BLOCK_SEPARATOR}{destination_url}"


def truncate(
    base_message: str,
    lines: Sequence[str],
    footer: str,
    *,
    destination_url: str,
) -> GenerationResult:
    """
    Fit as many event lines as possible between base message and footer.

    Layout is ``base + "\\n\\n" + lines + "\\n\\n" + footer``, or
    ``base + "\\n\\n" + footer`` when no line fits.

    Args:
        base_message: Headline placed first
        lines: Formatted event lines, earliest first
        footer: Link and hashtag block placed last
        destination_url: Link kept on its own when the footer cannot fit

    Returns:
        GenerationResult with the assembled text
    """
    # base + "\n\n" + footer
    fixed_overhead = len(base_message) + len(footer) + len(BLOCK_SEPARATOR)
    budget = CHARACTER_LIMIT - fixed_overhead

    if budget <= 0:
        # Base message and footer alone overflow; keep only the link
        logger.bind(
            base_length=len(base_message),
            footer_length=len(footer),
        ).warning("share_text_fallback")
        return GenerationResult(
            share_text=_fallback_text(base_message, destination_url),
            included_event_count=0,
            was_truncated=True,
        )

    # Each line costs itself plus one newline; the event block's extra
    # separator costs one more character on top of that
    included: list[str] = []
    used = len(BLOCK_SEPARATOR) - len(LINE_SEPARATOR)
    for line in lines:
        cost = len(line) + len(LINE_SEPARATOR)
        if used + cost > budget:
            break
        included.append(line)
        used += cost

    was_truncated = len(included) < len(lines)

    if was_truncated and included:
        # The replaced line counts as omitted too
        omitted_count = len(lines) - len(included) + 1
        marker = build_omission_marker(omitted_count)
        replaced = included[-1]
        # The marker must not grow the text past the verified budget
        if len(marker) <= len(replaced):
            included[-1] = marker
        else:
            logger.bind(marker=marker, replaced_length=len(replaced)).debug(
                "share_text_marker_skipped"
            )

    if included:
        event_block = LINE_SEPARATOR.join(included)
        share_text = f"{base_message}{BLOCK_SEPARATOR}{event_block}{BLOCK_SEPARATOR}{footer}"
    else:
        share_text = f"{base_message}{BLOCK_SEPARATOR}{footer}"

    # The last slot (marker, or the line the marker could not replace)
    # is not counted as a shown event
    included_count = max(len(included) - 1, 0) if was_truncated else len(included)

    return GenerationResult(
        share_text=share_text,
        included_event_count=included_count,
        was_truncated=was_truncated,
    )
