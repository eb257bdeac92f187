"""
Discord Bot

Owns the shared, read-mostly handles (Discord connection, Record Service
session, Correlation Store) and the services built on top of them. Each
interaction runs as its own task against these handles.
"""

import logging

import discord
from discord import app_commands

from antragsbot.bot.commands import register_commands
from antragsbot.config import Settings
from antragsbot.integrations.discord import DiscordChatClient
from antragsbot.integrations.records import RecordServiceClient
from antragsbot.services import (
    CorrelationStore,
    ProposerResolver,
    TranscriptProjector,
    TranscriptReconciler,
)

logger = logging.getLogger(__name__)


class AntragBot(discord.Client):
    def __init__(self, settings: Settings, store: CorrelationStore):
        super().__init__(intents=discord.Intents.default())
        self.settings = settings
        self.tree = app_commands.CommandTree(self)

        self.store = store
        self.chat = DiscordChatClient(self)
        self.records = RecordServiceClient(
            base_url=settings.record_service_url,
            token=settings.record_service_token,
            timeout=settings.record_service_timeout,
        )
        self.proposers = ProposerResolver(store, self.records)
        self.projector = TranscriptProjector(
            self.chat, self.records, store, tts=settings.message_tts
        )
        self.reconciler = TranscriptReconciler(
            self.chat, self.records, store, self.proposers
        )

        register_commands(self)

    async def setup_hook(self) -> None:
        if self.settings.discord_guild_id:
            guild = discord.Object(id=self.settings.discord_guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} commands to guild {guild.id}")
        else:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} commands globally")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as {self.user} ({self.user.id if self.user else '?'})")
