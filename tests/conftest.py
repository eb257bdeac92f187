"""
Shared fixtures: in-memory stand-ins for Discord and the Record Service, and a
Correlation Store on a temporary SQLite file.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from antragsbot.errors import ChatPlatformError
from antragsbot.integrations.discord import ChatClient
from antragsbot.models.motion import Motion, Person
from antragsbot.models.transcript import MessageKind, ThreadInfo, TranscriptMessage
from antragsbot.services import (
    CorrelationStore,
    ProposerResolver,
    TranscriptProjector,
    TranscriptReconciler,
)

PARENT_CHANNEL = "100"
ALICE_USER = "u-alice"
ALICE = Person(id="p-1", name="Alice")


class FakeChatClient(ChatClient):
    """Discord-like channel store. Thread ids equal their anchor message ids."""

    def __init__(self):
        self.channels: Dict[str, List[TranscriptMessage]] = {PARENT_CHANNEL: []}
        self.thread_names: Dict[str, str] = {}
        self.thread_parents: Dict[str, str] = {}
        self.writes: List[tuple] = []
        self.fail_on: set = set()
        self.fetch_limits: List[Optional[int]] = []
        self._next_id = 1000
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise ChatPlatformError(f"{method} failed")

    def _new_message(self, channel_id: str, content: str, kind=MessageKind.DEFAULT) -> TranscriptMessage:
        self._next_id += 1
        self._clock += timedelta(seconds=1)
        message = TranscriptMessage(
            id=str(self._next_id),
            channel_id=channel_id,
            author_id="bot",
            content=content,
            created_at=self._clock,
            kind=kind,
        )
        self.channels.setdefault(channel_id, []).append(message)
        return message

    def thread(self, thread_id: str) -> ThreadInfo:
        return ThreadInfo(
            id=thread_id,
            name=self.thread_names[thread_id],
            parent_id=self.thread_parents.get(thread_id),
        )

    def add_thread(self, name: str, contents: List[str], starter: bool = True) -> ThreadInfo:
        """Thread created outside the projector, optional starter plus the given messages."""
        anchor = self._new_message(PARENT_CHANNEL, f"{name} - Alice")
        self.thread_names[anchor.id] = name
        self.thread_parents[anchor.id] = PARENT_CHANNEL
        self.channels[anchor.id] = []
        if starter:
            self._new_message(anchor.id, "", kind=MessageKind.THREAD_STARTER)
        for content in contents:
            self._new_message(anchor.id, content)
        return self.thread(anchor.id)

    def contents(self, channel_id: str) -> List[str]:
        return [m.content for m in self.channels[channel_id]]

    async def send_message(self, channel_id: str, content: str, tts: bool = False) -> str:
        self._check("send_message")
        self.writes.append(("send_message", channel_id, content))
        return self._new_message(channel_id, content).id

    async def create_thread_from_message(self, channel_id: str, message_id: str, name: str) -> str:
        self._check("create_thread_from_message")
        self.writes.append(("create_thread", channel_id, message_id, name))
        self.thread_names[message_id] = name
        self.thread_parents[message_id] = channel_id
        self.channels[message_id] = []
        self._new_message(message_id, "", kind=MessageKind.THREAD_STARTER)
        return message_id

    async def fetch_messages(
        self, channel_id: str, limit: Optional[int] = None, oldest_first: bool = False
    ) -> List[TranscriptMessage]:
        self._check("fetch_messages")
        self.fetch_limits.append(limit)
        messages = list(self.channels[channel_id])
        if not oldest_first:
            messages.reverse()
        return messages[:limit] if limit else messages

    async def fetch_message(self, channel_id: str, message_id: str) -> TranscriptMessage:
        self._check("fetch_message")
        for message in self.channels[channel_id]:
            if message.id == message_id:
                return message
        raise ChatPlatformError(f"Unknown message {message_id}")

    async def edit_message(self, channel_id: str, message_id: str, content: str) -> None:
        self._check("edit_message")
        self.writes.append(("edit_message", channel_id, message_id, content))
        messages = self.channels[channel_id]
        for idx, message in enumerate(messages):
            if message.id == message_id:
                messages[idx] = message.model_copy(update={"content": content})
                return
        raise ChatPlatformError(f"Unknown message {message_id}")

    async def rename_thread(self, thread_id: str, name: str) -> None:
        self._check("rename_thread")
        self.writes.append(("rename_thread", thread_id, name))
        self.thread_names[thread_id] = name


class FakeRecordService:
    """Record Service double with the RecordServiceClient coroutine API."""

    def __init__(self, roster: Optional[List[Person]] = None):
        self.records: Dict[str, Motion] = {}
        self.roster = roster or [ALICE, Person(id="p-2", name="Bob")]
        self.created: List[Motion] = []
        self.edited: List[Motion] = []
        self.deregistered: List[str] = []
        self.roster_calls = 0

    async def create_record(self, motion: Motion) -> Motion:
        record = motion.model_copy(update={"id": f"rec-{len(self.records) + 1}"})
        self.records[record.id] = record
        self.created.append(record)
        return record

    async def edit_record(self, motion: Motion) -> Motion:
        self.records[motion.id] = motion
        self.edited.append(motion)
        return motion

    async def list_persons(self) -> List[Person]:
        self.roster_calls += 1
        return list(self.roster)

    async def put_deregistration(self, name: str) -> None:
        self.deregistered.append(name)


@pytest.fixture
def chat():
    return FakeChatClient()


@pytest.fixture
def records():
    return FakeRecordService()


@pytest.fixture
def store(tmp_path):
    correlation_store = CorrelationStore(str(tmp_path / "correlation.db"))
    yield correlation_store
    correlation_store.close()


@pytest.fixture
def proposers(store, records):
    return ProposerResolver(store, records)


@pytest.fixture
def projector(chat, records, store):
    return TranscriptProjector(chat, records, store, tts=True)


@pytest.fixture
def reconciler(chat, records, store, proposers):
    return TranscriptReconciler(chat, records, store, proposers)
