# Shared data models
from antragsbot.models.motion import (
    Motion,
    MotionKind,
    MotionFields,
    FormDefaults,
    Person,
)
from antragsbot.models.transcript import (
    SlotLayout,
    MessageKind,
    TranscriptMessage,
    ThreadInfo,
    ThreadHandle,
    ReconciliationResult,
)

__all__ = [
    "Motion",
    "MotionKind",
    "MotionFields",
    "FormDefaults",
    "Person",
    "SlotLayout",
    "MessageKind",
    "TranscriptMessage",
    "ThreadInfo",
    "ThreadHandle",
    "ReconciliationResult",
]
