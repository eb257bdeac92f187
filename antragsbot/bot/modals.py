"""
Motion Form

One modal serves both layouts and both paths; the slot layout decides which
inputs it shows, FormDefaults pre-fill it for edits.
"""

from typing import Awaitable, Callable, Optional

import discord

from antragsbot.models.motion import FormDefaults, MotionFields
from antragsbot.models.transcript import SlotLayout
from antragsbot.utils.transcript import (
    MAX_BODY_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_JUSTIFICATION_LENGTH,
)

SubmitHandler = Callable[[discord.Interaction, MotionFields], Awaitable[None]]
ErrorHandler = Callable[[discord.Interaction, Exception], Awaitable[None]]

MODAL_TITLES = {
    (SlotLayout.FULL, False): "Antrag erstellen",
    (SlotLayout.FULL, True): "Antrag bearbeiten",
    (SlotLayout.COMPACT, False): "Top erstellen",
    (SlotLayout.COMPACT, True): "Top bearbeiten",
}


class MotionModal(discord.ui.Modal):
    def __init__(
        self,
        layout: SlotLayout,
        on_fields: SubmitHandler,
        on_failure: ErrorHandler,
        defaults: Optional[FormDefaults] = None,
    ):
        super().__init__(title=MODAL_TITLES[(layout, defaults is not None)], timeout=600)
        self.layout = layout
        self.on_fields = on_fields
        self.on_failure = on_failure

        self.motion_title = discord.ui.TextInput(
            label="Titel",
            max_length=100,  # Discord thread name limit
            default=defaults.title if defaults else None,
        )
        self.add_item(self.motion_title)

        self.body = None
        if layout is SlotLayout.FULL:
            self.body = discord.ui.TextInput(
                label="Antragstext",
                style=discord.TextStyle.paragraph,
                max_length=MAX_BODY_LENGTH,
                default=defaults.body if defaults else None,
            )
            self.add_item(self.body)

        self.justification = discord.ui.TextInput(
            label="Begründung" if layout is SlotLayout.FULL else "Beschreibung",
            style=discord.TextStyle.paragraph,
            required=False,
            max_length=(
                MAX_JUSTIFICATION_LENGTH if layout is SlotLayout.FULL else MAX_DESCRIPTION_LENGTH
            ),
            default=defaults.justification if defaults else None,
        )
        self.add_item(self.justification)

    async def on_submit(self, interaction: discord.Interaction):
        fields = MotionFields(
            title=str(self.motion_title.value),
            body=str(self.body.value) if self.body is not None else None,
            justification=str(self.justification.value),
        )
        await self.on_fields(interaction, fields)

    async def on_error(self, interaction: discord.Interaction, error: Exception):
        await self.on_failure(interaction, error)
