import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from antragsbot.config import get_settings
from antragsbot.api.routes import motions
from antragsbot.bot import AntragBot
from antragsbot.services import CorrelationStore

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("antragsbot")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

# discord.py is chatty on DEBUG
logging.getLogger("discord").setLevel(logging.INFO)


def _log_bot_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Discord bot stopped: {error}", exc_info=error)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = CorrelationStore(settings.database_path)
    app.state.store = store
    app.state.bot = None

    bot_task = None
    if settings.discord_token:
        bot = AntragBot(settings, store)
        app.state.bot = bot
        bot_task = asyncio.create_task(bot.start(settings.discord_token))
        bot_task.add_done_callback(_log_bot_exit)
    else:
        logger.warning("DISCORD_TOKEN not set, Discord bot not started")

    try:
        yield
    finally:
        if app.state.bot is not None:
            await app.state.bot.close()
        if bot_task is not None and not bot_task.done():
            await bot_task
        store.close()


app = FastAPI(
    title=settings.app_name,
    description="Discord motion workflow bot",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(motions.router, prefix="/api/motions", tags=["Motions"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to Antragsbot - Discord motion workflow",
        "version": "0.1.0",
        "endpoints": {
            "motions": "/api/motions/{thread_id}",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check(request: Request):
    bot = getattr(request.app.state, "bot", None)
    return {
        "status": "healthy",
        "service": settings.app_name,
        "discord_connected": bool(bot is not None and bot.is_ready()),
    }
