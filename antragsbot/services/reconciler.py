"""
Transcript Reconciler

Prefill path:
Thread history -> ordered transcript -> form defaults

Edit path:
Ordered transcript -> rename thread -> overwrite slots -> overwrite summary
-> record id lookup -> proposer lookup -> replace record

Chat writes are attempted independently of each other; a failed write is
logged and reported in the result, nothing is rolled back.
"""

from typing import Awaitable, List, Optional
import logging

from antragsbot.errors import (
    ChatPlatformError,
    MalformedThreadError,
    MissingRecordMappingError,
)
from antragsbot.integrations.discord import ChatClient
from antragsbot.integrations.records import RecordServiceClient
from antragsbot.models.motion import FormDefaults, Motion, MotionFields
from antragsbot.models.transcript import (
    MessageKind,
    ReconciliationResult,
    SlotLayout,
    ThreadInfo,
    TranscriptMessage,
)
from antragsbot.services.correlation_store import CorrelationStore
from antragsbot.services.identity import ProposerResolver
from antragsbot.utils.transcript import (
    format_body,
    format_summary,
    proposer_from_summary,
    read_slots,
    render_slots,
    require_slots,
    sort_transcript,
)

logger = logging.getLogger(__name__)


class TranscriptReconciler:
    """Reads motion fields back from a thread and propagates edits."""

    def __init__(
        self,
        chat: ChatClient,
        records: RecordServiceClient,
        store: CorrelationStore,
        proposers: ProposerResolver,
    ):
        self.chat = chat
        self.records = records
        self.store = store
        self.proposers = proposers

    async def _load_transcript(self, thread: ThreadInfo, layout: SlotLayout) -> List[TranscriptMessage]:
        """Fetch the slot messages fresh and order them oldest first."""
        if not thread.is_thread:
            raise MalformedThreadError()

        if not layout.syncs_record and await self.store.get_record_for_thread(thread.id):
            raise MalformedThreadError(
                "Dieser Thread gehört zu einem Antrag. Nutze /antrag_bearbeiten."
            )

        # Only the slots are needed, not the discussion below them
        history = await self.chat.fetch_messages(
            thread.id, limit=layout.slot_count, oldest_first=True
        )
        messages = sort_transcript(history)
        require_slots(messages, layout)
        return messages

    async def prefill(self, thread: ThreadInfo, layout: SlotLayout = SlotLayout.FULL) -> FormDefaults:
        """
        Recover the current field values of a motion thread.

        Raises:
            MalformedThreadError: If the channel is no thread, the transcript is too
                short, or an agenda item edit targets a record-backed motion
        """
        messages = await self._load_transcript(thread, layout)
        body, justification = read_slots(messages, layout)
        return FormDefaults(title=thread.name, body=body, justification=justification)

    async def _attempt(self, result: ReconciliationResult, step: str, call: Awaitable[None]) -> None:
        try:
            await call
        except ChatPlatformError as e:
            logger.error(f"Edit step '{step}' failed on thread {result.thread_id}: {e}")
            result.failed_steps.append(step)

    async def _read_proposer(self, thread: ThreadInfo, starter: TranscriptMessage) -> Optional[str]:
        """Proposer named in the parent-channel summary, None if the thread has no anchor."""
        if starter.kind != MessageKind.THREAD_STARTER or not thread.parent_id:
            logger.warning(f"Thread {thread.id} has no starter message, summary left untouched")
            return None

        # The anchor message in the parent channel shares the thread's id
        summary = await self.chat.fetch_message(thread.parent_id, thread.id)
        return proposer_from_summary(summary.content)

    async def apply_edit(
        self,
        thread: ThreadInfo,
        fields: MotionFields,
        layout: SlotLayout = SlotLayout.FULL,
    ) -> ReconciliationResult:
        """
        Apply edited form values to the transcript, the summary message and
        the canonical record.

        Args:
            thread: Thread the edit was invoked in
            fields: Validated form values
            layout: Slot layout of the thread

        Returns:
            ReconciliationResult describing every surface written

        Raises:
            MalformedThreadError: If the transcript does not match the layout, or
                an agenda item edit targets a record-backed motion
            MissingRecordMappingError: If a full-layout thread has no record
        """
        slot_contents = render_slots(fields, layout)

        # Step 1: Fresh ordering, never a cached one
        messages = await self._load_transcript(thread, layout)

        record_id = None
        if layout.syncs_record:
            record_id = await self.store.get_record_for_thread(thread.id)
            if record_id is None:
                raise MissingRecordMappingError()

        result = ReconciliationResult(
            thread_id=thread.id,
            title=fields.title,
            slot_contents=slot_contents,
            record_id=record_id,
        )

        # Step 2: Thread title
        await self._attempt(result, "rename_thread", self.chat.rename_thread(thread.id, fields.title))

        # Step 3/4: Slot messages
        for slot, content in enumerate(slot_contents, start=1):
            await self._attempt(
                result,
                f"slot_{slot}",
                self.chat.edit_message(thread.id, messages[slot].id, content),
            )

        # Step 5: Summary message keeps its proposer, only the title changes
        result.proposer_name = await self._read_proposer(thread, messages[0])
        if result.proposer_name is not None:
            result.summary_content = format_summary(fields.title, result.proposer_name)
            await self._attempt(
                result,
                "summary",
                self.chat.edit_message(thread.parent_id, thread.id, result.summary_content),
            )

        if not layout.syncs_record:
            logger.info(f"Applied edit to agenda item thread {thread.id}")
            return result

        # Step 7/8: Proposers and record
        result.proposer_ids = await self.proposers.resolve(result.proposer_name)
        await self.records.edit_record(
            Motion(
                id=record_id,
                title=fields.title,
                body=format_body(fields.body),
                justification=fields.justification,
                proposers=result.proposer_ids,
            )
        )

        logger.info(
            f"Applied edit to thread {thread.id}, record {record_id}, "
            f"{len(result.failed_steps)} failed chat steps"
        )
        return result
