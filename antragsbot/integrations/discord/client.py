"""
Discord Chat Client

Responsibilities:
- Message send / edit / fetch in channels and threads
- Thread creation from an anchor message, thread rename
- Conversion of discord.py messages into TranscriptMessage
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

import discord

from antragsbot.errors import ChatPlatformError
from antragsbot.models.transcript import MessageKind, ThreadInfo, TranscriptMessage

logger = logging.getLogger(__name__)


class ChatClient(ABC):
    """Chat-platform primitives the motion workflow relies on."""

    @abstractmethod
    async def send_message(self, channel_id: str, content: str, tts: bool = False) -> str:
        """Send a message and return its id."""

    @abstractmethod
    async def create_thread_from_message(self, channel_id: str, message_id: str, name: str) -> str:
        """Open a thread anchored on an existing message and return the thread id."""

    @abstractmethod
    async def fetch_messages(
        self, channel_id: str, limit: Optional[int] = None, oldest_first: bool = False
    ) -> List[TranscriptMessage]:
        """Fetch channel history, newest first unless oldest_first is set."""

    @abstractmethod
    async def fetch_message(self, channel_id: str, message_id: str) -> TranscriptMessage:
        """Fetch a single message."""

    @abstractmethod
    async def edit_message(self, channel_id: str, message_id: str, content: str) -> None:
        """Replace the content of a message."""

    @abstractmethod
    async def rename_thread(self, thread_id: str, name: str) -> None:
        """Rename a thread."""


def thread_info(channel) -> ThreadInfo:
    """Describe the channel an interaction was invoked in."""
    if isinstance(channel, discord.Thread):
        return ThreadInfo(
            id=str(channel.id),
            name=channel.name,
            parent_id=str(channel.parent_id) if channel.parent_id else None,
            is_thread=True,
        )
    return ThreadInfo(
        id=str(channel.id),
        name=getattr(channel, "name", "") or "",
        is_thread=False,
    )


class DiscordChatClient(ChatClient):
    """discord.py implementation of the chat-platform primitives."""

    def __init__(self, client: discord.Client):
        self.client = client

    async def _get_channel(self, channel_id: str):
        channel = self.client.get_channel(int(channel_id))
        if channel is None:
            channel = await self.client.fetch_channel(int(channel_id))
        return channel

    @staticmethod
    def _to_transcript_message(message: discord.Message) -> TranscriptMessage:
        if message.type == discord.MessageType.thread_starter_message:
            kind = MessageKind.THREAD_STARTER
        elif message.type in (discord.MessageType.default, discord.MessageType.reply):
            kind = MessageKind.DEFAULT
        else:
            kind = MessageKind.OTHER

        return TranscriptMessage(
            id=str(message.id),
            channel_id=str(message.channel.id),
            author_id=str(message.author.id) if message.author else None,
            content=message.content or "",
            created_at=message.created_at,
            kind=kind,
        )

    async def send_message(self, channel_id: str, content: str, tts: bool = False) -> str:
        try:
            channel = await self._get_channel(channel_id)
            message = await channel.send(content, tts=tts)
            logger.debug(f"Sent message {message.id} to channel {channel_id}")
            return str(message.id)
        except discord.DiscordException as e:
            logger.error(f"Discord API error sending message to {channel_id}: {e}")
            raise ChatPlatformError(f"Nachricht konnte nicht gesendet werden: {e}") from e

    async def create_thread_from_message(self, channel_id: str, message_id: str, name: str) -> str:
        try:
            channel = await self._get_channel(channel_id)
            thread = await channel.create_thread(
                name=name, message=discord.Object(id=int(message_id))
            )
            logger.info(f"Created thread {thread.id} '{name}' from message {message_id}")
            return str(thread.id)
        except discord.DiscordException as e:
            logger.error(f"Discord API error creating thread from {message_id}: {e}")
            raise ChatPlatformError(f"Thread konnte nicht erstellt werden: {e}") from e

    async def fetch_messages(
        self, channel_id: str, limit: Optional[int] = None, oldest_first: bool = False
    ) -> List[TranscriptMessage]:
        try:
            channel = await self._get_channel(channel_id)
            messages = [
                self._to_transcript_message(message)
                async for message in channel.history(limit=limit, oldest_first=oldest_first)
            ]
            logger.debug(f"Fetched {len(messages)} messages from channel {channel_id}")
            return messages
        except discord.DiscordException as e:
            logger.error(f"Discord API error fetching history of {channel_id}: {e}")
            raise ChatPlatformError(f"Verlauf konnte nicht geladen werden: {e}") from e

    async def fetch_message(self, channel_id: str, message_id: str) -> TranscriptMessage:
        try:
            channel = await self._get_channel(channel_id)
            message = await channel.fetch_message(int(message_id))
            return self._to_transcript_message(message)
        except discord.DiscordException as e:
            logger.error(f"Discord API error fetching message {message_id}: {e}")
            raise ChatPlatformError(f"Nachricht konnte nicht geladen werden: {e}") from e

    async def edit_message(self, channel_id: str, message_id: str, content: str) -> None:
        try:
            channel = await self._get_channel(channel_id)
            await channel.get_partial_message(int(message_id)).edit(content=content)
            logger.debug(f"Edited message {message_id} in channel {channel_id}")
        except discord.DiscordException as e:
            logger.error(f"Discord API error editing message {message_id}: {e}")
            raise ChatPlatformError(f"Nachricht konnte nicht bearbeitet werden: {e}") from e

    async def rename_thread(self, thread_id: str, name: str) -> None:
        try:
            thread = await self._get_channel(thread_id)
            await thread.edit(name=name)
            logger.info(f"Renamed thread {thread_id} to '{name}'")
        except discord.DiscordException as e:
            logger.error(f"Discord API error renaming thread {thread_id}: {e}")
            raise ChatPlatformError(f"Thread konnte nicht umbenannt werden: {e}") from e
