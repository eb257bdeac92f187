"""
Thread Transcript Models

Platform-agnostic view of a motion thread and of the results produced when the
transcript is projected or reconciled.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class SlotLayout(str, Enum):
    """
    Position-based mapping of transcript messages to motion fields.

    FULL:    starter, body, justification
    COMPACT: starter, description (agenda items, transcript only)
    """

    FULL = "full"
    COMPACT = "compact"

    @property
    def slot_count(self) -> int:
        return 3 if self is SlotLayout.FULL else 2

    @property
    def syncs_record(self) -> bool:
        """Whether threads in this layout have a canonical record."""
        return self is SlotLayout.FULL


class MessageKind(str, Enum):
    """Message type as far as the slot layout cares."""

    DEFAULT = "default"
    THREAD_STARTER = "thread_starter"  # Platform reference to the anchor message
    OTHER = "other"


class TranscriptMessage(BaseModel):
    """Single message of a thread or its parent channel."""

    id: str
    channel_id: str
    author_id: Optional[str] = None
    content: str = ""
    created_at: datetime
    kind: MessageKind = MessageKind.DEFAULT


class ThreadInfo(BaseModel):
    """Channel a command was invoked in."""

    id: str
    name: str
    parent_id: Optional[str] = None
    is_thread: bool = True


class ThreadHandle(BaseModel):
    """Result of projecting a new motion onto a thread."""

    thread_id: str
    summary_message_id: str
    message_ids: List[str] = Field(default_factory=list)  # Slots after the starter
    record_id: Optional[str] = None


class ReconciliationResult(BaseModel):
    """Outcome of applying an edit to every surface of a motion."""

    thread_id: str
    title: str
    slot_contents: List[str] = Field(default_factory=list)
    summary_content: Optional[str] = None
    proposer_name: Optional[str] = None
    proposer_ids: List[str] = Field(default_factory=list)
    record_id: Optional[str] = None
    failed_steps: List[str] = Field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.failed_steps
