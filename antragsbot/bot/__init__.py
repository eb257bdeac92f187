# Discord bot module
from antragsbot.bot.client import AntragBot

__all__ = ["AntragBot"]
