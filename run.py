"""
Uvicorn server runner. Serves the status API and runs the Discord bot in the
same event loop.

Usage:
    python run.py

Environment variables (set in .env file):
    DISCORD_TOKEN=... - Bot token (bot stays offline when empty)
    RECORD_SERVICE_URL=... - Base URL of the Record Service
    DEBUG=true - Enable debug logging
    PORT=8000 - Set server port (default: 8000)
    HOST=127.0.0.1 - Set server host (default: 127.0.0.1)
"""

import uvicorn
from antragsbot.config import get_settings

if __name__ == "__main__":
    import os

    # Load settings from .env file
    settings = get_settings()

    # Note: HOST and PORT can be overridden via environment variables
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))

    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name}...")
    print(f"Host: {host}")
    print(f"Port: {port}")
    print(f"Log Level: {log_level}")
    print(f"Discord Bot: {'enabled' if settings.discord_token else 'disabled (no DISCORD_TOKEN)'}")
    print(f"Correlation Store: {settings.database_path}")

    # No reload: a reloading worker would log the bot in twice
    uvicorn.run(
        "antragsbot.main:app",
        host=host,
        port=port,
        log_level=log_level,
        access_log=True,
    )
