# Discord integration module
from antragsbot.integrations.discord.client import ChatClient, DiscordChatClient, thread_info

__all__ = ["ChatClient", "DiscordChatClient", "thread_info"]
