"""
Transcript Projector

Create path:
Form fields -> summary message -> thread -> slot messages -> record -> correlation

Every step is awaited before the next one starts and nothing is retried. A
failure after the summary message was sent leaves the earlier surfaces as they
are; the error propagates to the command.
"""

import logging

from antragsbot.integrations.discord import ChatClient
from antragsbot.integrations.records import RecordServiceClient
from antragsbot.models.motion import Motion, MotionFields, MotionKind, Person
from antragsbot.models.transcript import SlotLayout, ThreadHandle
from antragsbot.services.correlation_store import CorrelationStore
from antragsbot.utils.transcript import format_body, format_summary, render_slots

logger = logging.getLogger(__name__)


class TranscriptProjector:
    """Projects a new motion onto a thread and the canonical record store."""

    def __init__(
        self,
        chat: ChatClient,
        records: RecordServiceClient,
        store: CorrelationStore,
        tts: bool = True,
    ):
        self.chat = chat
        self.records = records
        self.store = store
        self.tts = tts

    async def project(
        self,
        channel_id: str,
        fields: MotionFields,
        proposer: Person,
        kind: MotionKind = MotionKind.NORMAL,
        layout: SlotLayout = SlotLayout.FULL,
    ) -> ThreadHandle:
        """
        Create the thread transcript for a motion and, for the full layout,
        its canonical record.

        Args:
            channel_id: Parent channel the summary message goes to
            fields: Validated form values
            proposer: Registered person proposing the motion
            kind: Motion category, stored on the record only
            layout: Slot layout of the new thread

        Returns:
            ThreadHandle with the ids of everything created
        """
        slot_contents = render_slots(fields, layout)

        # Step 1: Summary message anchors the thread
        summary_id = await self.chat.send_message(
            channel_id, format_summary(fields.title, proposer.name), tts=self.tts
        )

        # Step 2: Thread named after the motion
        thread_id = await self.chat.create_thread_from_message(
            channel_id, summary_id, fields.title
        )

        # Step 3/4: Slot messages in layout order
        message_ids = []
        for content in slot_contents:
            message_ids.append(
                await self.chat.send_message(thread_id, content, tts=self.tts)
            )

        handle = ThreadHandle(
            thread_id=thread_id,
            summary_message_id=summary_id,
            message_ids=message_ids,
        )

        if not layout.syncs_record:
            logger.info(f"Projected agenda item '{fields.title}' onto thread {thread_id}")
            return handle

        # Step 5: Canonical record, then correlation
        record = await self.records.create_record(
            Motion(
                title=fields.title,
                body=format_body(fields.body),
                justification=fields.justification,
                kind=kind,
                proposers=[proposer.id],
            )
        )
        await self.store.map_thread_to_record(thread_id, record.id)
        handle.record_id = record.id

        logger.info(
            f"Projected motion '{fields.title}' onto thread {thread_id}, record {record.id}"
        )
        return handle
