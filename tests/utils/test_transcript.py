"""
Unit Tests for Transcript Slot Conventions
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from antragsbot.errors import MalformedThreadError
from antragsbot.models.motion import MotionFields
from antragsbot.models.transcript import MessageKind, SlotLayout, TranscriptMessage
from antragsbot.utils.transcript import (
    BODY_PREAMBLE,
    DEFAULT_JUSTIFICATION,
    MAX_BODY_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_JUSTIFICATION_LENGTH,
    MESSAGE_LIMIT,
    format_body,
    format_description,
    format_justification,
    format_summary,
    proposer_from_summary,
    read_slots,
    render_slots,
    require_slots,
    sort_transcript,
    strip_body,
    strip_description,
    strip_justification,
)


def _message(idx: int, content: str = "", kind=MessageKind.DEFAULT) -> TranscriptMessage:
    return TranscriptMessage(
        id=str(idx),
        channel_id="1",
        content=content,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=idx),
        kind=kind,
    )


def test_format_body():
    assert format_body("to $5") == f"{BODY_PREAMBLE}\n to $5"


def test_format_justification_default():
    """Default sentence appears verbatim when no justification is given."""
    assert format_justification(None) == "Begründung: \rKeine Begründung"
    assert format_justification("") == "Begründung: \rKeine Begründung"


def test_format_description_default():
    assert format_description(None) == "Beschreibung: \rKeine Beschreibung"


def test_strip_recovers_raw_text():
    assert strip_body(format_body("Pizza für alle\nund Getränke")) == "Pizza für alle\nund Getränke"
    assert strip_justification(format_justification("weil Hunger")) == "weil Hunger"
    assert strip_description(format_description("Ablauf")) == "Ablauf"


def test_strip_default_sentence_to_none():
    assert strip_justification(format_justification(None)) is None
    assert strip_description(format_description(None)) is None


def test_strip_without_prefix_keeps_content():
    assert strip_body("hand edited") == "hand edited"
    assert strip_justification(DEFAULT_JUSTIFICATION) is None


def test_summary_round_trip():
    assert format_summary("Buy pizza", "Alice") == "Buy pizza - Alice"


@pytest.mark.parametrize(
    "content, expected",
    [
        ("Buy pizza - Alice", "Alice"),
        ("A - B - Carol", "Carol"),
        ("No separator", "No separator"),
    ],
)
def test_proposer_from_summary(content, expected):
    """Last segment wins even with multiple separators."""
    assert proposer_from_summary(content) == expected


def test_sort_transcript_from_arbitrary_order():
    messages = [_message(i) for i in range(6)]
    shuffled = messages[:]
    random.Random(7).shuffle(shuffled)

    ordered = sort_transcript(shuffled)

    assert [m.id for m in ordered] == [m.id for m in messages]
    for earlier, later in zip(ordered, ordered[1:]):
        assert earlier.created_at <= later.created_at


def test_sort_transcript_newest_first_input():
    messages = [_message(i) for i in range(3)]
    assert sort_transcript(list(reversed(messages))) == messages


def test_sort_transcript_breaks_timestamp_ties_by_id():
    first, second = _message(1001), _message(1002)
    second = second.model_copy(update={"created_at": first.created_at})

    ordered = sort_transcript([second, first])

    assert [m.id for m in ordered] == ["1001", "1002"]


def test_require_slots():
    require_slots([_message(0), _message(1), _message(2)], SlotLayout.FULL)
    require_slots([_message(0), _message(1)], SlotLayout.COMPACT)

    with pytest.raises(MalformedThreadError):
        require_slots([_message(0), _message(1)], SlotLayout.FULL)
    with pytest.raises(MalformedThreadError):
        require_slots([_message(0)], SlotLayout.COMPACT)


def test_render_slots_full():
    fields = MotionFields(title="Raise dues", body="to $5")
    assert render_slots(fields, SlotLayout.FULL) == [
        f"{BODY_PREAMBLE}\n to $5",
        "Begründung: \rKeine Begründung",
    ]


def test_render_slots_full_requires_body():
    with pytest.raises(ValueError):
        render_slots(MotionFields(title="Raise dues"), SlotLayout.FULL)


def test_render_slots_compact():
    fields = MotionFields(title="Begrüßung", justification="Kurze Vorstellung")
    assert render_slots(fields, SlotLayout.COMPACT) == ["Beschreibung: \rKurze Vorstellung"]


def test_read_slots_full():
    fields = MotionFields(title="T", body="Text", justification="Weil")
    transcript = [_message(0, kind=MessageKind.THREAD_STARTER)] + [
        _message(i + 1, content) for i, content in enumerate(render_slots(fields, SlotLayout.FULL))
    ]
    assert read_slots(transcript, SlotLayout.FULL) == ("Text", "Weil")


def test_read_slots_compact():
    transcript = [_message(0, kind=MessageKind.THREAD_STARTER), _message(1, format_description(None))]
    assert read_slots(transcript, SlotLayout.COMPACT) == (None, None)


def test_motion_fields_blank_values():
    fields = MotionFields(title="T", body="   ", justification="")
    assert fields.body is None
    assert fields.justification is None

    with pytest.raises(ValueError):
        MotionFields(title="  ")


def test_longest_form_input_fits_one_message():
    assert len(format_body("x" * MAX_BODY_LENGTH)) == MESSAGE_LIMIT
    assert len(format_justification("x" * MAX_JUSTIFICATION_LENGTH)) == MESSAGE_LIMIT
    assert len(format_description("x" * MAX_DESCRIPTION_LENGTH)) == MESSAGE_LIMIT
