"""
Transcript Slot Conventions

Fixed texts and pure helpers that map motion fields onto thread messages and
back. Nothing in here talks to Discord or the Record Service.
"""

from typing import List, Optional, Sequence, Tuple

from antragsbot.errors import MalformedThreadError
from antragsbot.models.motion import MotionFields
from antragsbot.models.transcript import SlotLayout, TranscriptMessage

BODY_PREAMBLE = "Die Versammlung möge beschließen:"
BODY_PREFIX = BODY_PREAMBLE + "\n "

JUSTIFICATION_LABEL = "Begründung: "
JUSTIFICATION_PREFIX = JUSTIFICATION_LABEL + "\r"
DEFAULT_JUSTIFICATION = "Keine Begründung"

DESCRIPTION_LABEL = "Beschreibung: "
DESCRIPTION_PREFIX = DESCRIPTION_LABEL + "\r"
DEFAULT_DESCRIPTION = "Keine Beschreibung"

SUMMARY_SEPARATOR = " - "

MESSAGE_LIMIT = 2000  # Discord message content limit

# Longest raw form input that still fits its slot message
MAX_BODY_LENGTH = MESSAGE_LIMIT - len(BODY_PREFIX)
MAX_JUSTIFICATION_LENGTH = MESSAGE_LIMIT - len(JUSTIFICATION_PREFIX)
MAX_DESCRIPTION_LENGTH = MESSAGE_LIMIT - len(DESCRIPTION_PREFIX)


def format_body(text: str) -> str:
    """Prefix the operative text with the body preamble."""
    return BODY_PREFIX + text


def format_justification(text: Optional[str]) -> str:
    return JUSTIFICATION_PREFIX + (text or DEFAULT_JUSTIFICATION)


def format_description(text: Optional[str]) -> str:
    return DESCRIPTION_PREFIX + (text or DEFAULT_DESCRIPTION)


def _strip(content: str, prefix: str, default: Optional[str] = None) -> Optional[str]:
    if content.startswith(prefix):
        content = content[len(prefix):]
    if default is not None and content == default:
        return None
    return content


def strip_body(content: str) -> str:
    return _strip(content, BODY_PREFIX)


def strip_justification(content: str) -> Optional[str]:
    """Recover the raw justification; the default sentence maps back to None."""
    return _strip(content, JUSTIFICATION_PREFIX, DEFAULT_JUSTIFICATION)


def strip_description(content: str) -> Optional[str]:
    return _strip(content, DESCRIPTION_PREFIX, DEFAULT_DESCRIPTION)


def format_summary(title: str, proposer: str) -> str:
    """Parent-channel summary line anchoring a motion thread."""
    return f"{title}{SUMMARY_SEPARATOR}{proposer}"


def proposer_from_summary(content: str) -> str:
    """
    Extract the proposer display name from a summary line.

    The last segment wins, so titles containing the separator still resolve:
        "A - B - Carol" -> "Carol"
    """
    return content.split(SUMMARY_SEPARATOR)[-1]


def sort_transcript(messages: Sequence[TranscriptMessage]) -> List[TranscriptMessage]:
    """
    Order messages oldest first. Platform order must never be trusted.

    Equal timestamps fall back to the id; Discord snowflakes grow over time.
    """
    return sorted(messages, key=lambda msg: (msg.created_at, int(msg.id)))


def require_slots(messages: Sequence[TranscriptMessage], layout: SlotLayout) -> None:
    if len(messages) < layout.slot_count:
        raise MalformedThreadError(
            f"Der Thread hat {len(messages)} Nachrichten, erwartet werden "
            f"mindestens {layout.slot_count}."
        )


def render_slots(fields: MotionFields, layout: SlotLayout) -> List[str]:
    """
    Message contents for every slot after the starter, in slot order.

    Raises:
        ValueError: If the layout needs a body and none was given
    """
    if layout is SlotLayout.FULL:
        if not fields.body:
            raise ValueError("body must not be empty")
        return [format_body(fields.body), format_justification(fields.justification)]
    return [format_description(fields.justification)]


def read_slots(
    messages: Sequence[TranscriptMessage], layout: SlotLayout
) -> Tuple[Optional[str], Optional[str]]:
    """
    Recover (body, justification) from an ordered transcript.

    Args:
        messages: Transcript sorted oldest first, starter at index 0
        layout: Slot layout the thread was created with

    Returns:
        Tuple of raw body and justification, prefixes removed
    """
    require_slots(messages, layout)
    if layout is SlotLayout.FULL:
        return strip_body(messages[1].content), strip_justification(messages[2].content)
    return None, strip_description(messages[1].content)
