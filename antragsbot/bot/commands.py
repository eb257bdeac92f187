"""
Slash Commands

/antrag, /antrag_bearbeiten  full motions (record-backed)
/top, /top_bearbeiten        agenda items (transcript only)
/registrieren, /abmelden     identity side commands

Every command that acts for a person passes the registration guard first.
"""

from typing import TYPE_CHECKING
import logging

import discord
from discord import app_commands

from antragsbot.bot.modals import MotionModal
from antragsbot.errors import AntragsbotError, IdentityNotFoundError
from antragsbot.integrations.discord import thread_info
from antragsbot.models.motion import MotionFields, MotionKind
from antragsbot.models.transcript import ReconciliationResult, SlotLayout
from antragsbot.services.identity import resolve_invoker

if TYPE_CHECKING:
    from antragsbot.bot.client import AntragBot

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Etwas ist schiefgelaufen. Bitte versuche es später erneut."

FAILED_STEP_LABELS = {
    "rename_thread": "Thread-Titel",
    "slot_1": "erste Nachricht",
    "slot_2": "zweite Nachricht",
    "summary": "Übersichtsnachricht",
}


async def send_private(interaction: discord.Interaction, content: str) -> None:
    """Ephemeral reply that works before and after the interaction was answered."""
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=True)
    else:
        await interaction.response.send_message(content, ephemeral=True)


async def report_error(interaction: discord.Interaction, error: Exception) -> None:
    if isinstance(error, app_commands.CommandInvokeError):
        error = error.original

    if isinstance(error, AntragsbotError):
        logger.info(f"Command failed for user {interaction.user.id}: {error.message}")
        content = error.message
    else:
        logger.exception("Unexpected error in command", exc_info=error)
        content = GENERIC_ERROR

    try:
        await send_private(interaction, content)
    except discord.HTTPException as e:
        logger.error(f"Could not report error to user {interaction.user.id}: {e}")


def describe_edit(result: ReconciliationResult) -> str:
    content = f"**{result.title}** wurde aktualisiert."
    if result.failed_steps:
        failed = ", ".join(FAILED_STEP_LABELS.get(step, step) for step in result.failed_steps)
        content += f"\nNicht aktualisiert: {failed}."
    return content


def register_commands(bot: "AntragBot") -> None:
    """Attach all slash commands to the bot's command tree."""
    tree = bot.tree

    async def guard(interaction: discord.Interaction):
        """Registered person behind the interaction, None after a private rejection."""
        try:
            return await resolve_invoker(bot.store, str(interaction.user.id))
        except IdentityNotFoundError as e:
            await send_private(interaction, e.message)
            return None

    async def start_create(interaction: discord.Interaction, layout: SlotLayout, kind: MotionKind):
        person = await guard(interaction)
        if person is None:
            return

        async def on_fields(modal_interaction: discord.Interaction, fields: MotionFields):
            await modal_interaction.response.defer(ephemeral=True, thinking=True)
            handle = await bot.projector.project(
                str(interaction.channel_id), fields, person, kind=kind, layout=layout
            )
            await modal_interaction.followup.send(
                f"**{fields.title}** wurde erstellt: <#{handle.thread_id}>", ephemeral=True
            )

        await interaction.response.send_modal(MotionModal(layout, on_fields, report_error))

    async def start_edit(interaction: discord.Interaction, layout: SlotLayout):
        person = await guard(interaction)
        if person is None:
            return

        thread = thread_info(interaction.channel)
        defaults = await bot.reconciler.prefill(thread, layout)

        async def on_fields(modal_interaction: discord.Interaction, fields: MotionFields):
            await modal_interaction.response.defer(ephemeral=True, thinking=True)
            logger.info(f"User {person.name} edits thread {thread.id}")
            result = await bot.reconciler.apply_edit(thread, fields, layout)
            await modal_interaction.followup.send(describe_edit(result), ephemeral=True)

        await interaction.response.send_modal(
            MotionModal(layout, on_fields, report_error, defaults=defaults)
        )

    @tree.command(name="antrag", description="Neuen Antrag stellen")
    @app_commands.describe(art="Art des Antrags")
    async def antrag(interaction: discord.Interaction, art: MotionKind = MotionKind.NORMAL):
        await start_create(interaction, SlotLayout.FULL, art)

    @tree.command(name="antrag_bearbeiten", description="Antrag in diesem Thread bearbeiten")
    async def antrag_bearbeiten(interaction: discord.Interaction):
        await start_edit(interaction, SlotLayout.FULL)

    @tree.command(name="top", description="Neuen Tagesordnungspunkt anlegen")
    async def top(interaction: discord.Interaction):
        await start_create(interaction, SlotLayout.COMPACT, MotionKind.NORMAL)

    @tree.command(name="top_bearbeiten", description="Tagesordnungspunkt in diesem Thread bearbeiten")
    async def top_bearbeiten(interaction: discord.Interaction):
        await start_edit(interaction, SlotLayout.COMPACT)

    @tree.command(name="registrieren", description="Discord-Konto mit deiner Person verknüpfen")
    @app_commands.describe(name="Name wie im Mitgliederverzeichnis")
    async def registrieren(interaction: discord.Interaction, name: str):
        await interaction.response.defer(ephemeral=True, thinking=True)
        person = await bot.proposers.find_in_roster(name.strip())
        if person is None:
            await interaction.followup.send(
                f"Keine Person namens **{name}** gefunden.", ephemeral=True
            )
            return
        await bot.store.link_person(str(interaction.user.id), person)
        await interaction.followup.send(f"Du bist als **{person.name}** registriert.", ephemeral=True)

    @tree.command(name="abmelden", description="Von der nächsten Sitzung abmelden")
    async def abmelden(interaction: discord.Interaction):
        person = await guard(interaction)
        if person is None:
            return
        await interaction.response.defer(ephemeral=True, thinking=True)
        await bot.records.put_deregistration(person.name)
        await interaction.followup.send(f"**{person.name}** wurde abgemeldet.", ephemeral=True)

    tree.error(report_error)
