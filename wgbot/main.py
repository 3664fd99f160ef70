"""Main entry point for the bot."""

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.fsm.storage.redis import RedisStorage
from aiogram.types import BotCommand
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from redis.asyncio import Redis
from redis.exceptions import RedisError

from wgbot.config.settings import settings
from wgbot.database.session import sessionmanager
from wgbot.handlers import start, admin, tasks, balance, expense, errors
from wgbot.middlewares import DatabaseMiddleware, AuthMiddleware, AdminMiddleware
from wgbot.services.scheduler_service import NotificationJobs, setup_scheduler
from wgbot.utils.constants import (
    CMD_START, CMD_HELP, CMD_MY_TASK, CMD_SCHEDULE, CMD_MY_BALANCE, CMD_ADD_EXPENSE, CMD_CANCEL
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def on_startup(bot: Bot, scheduler: AsyncIOScheduler):
    """Actions to perform on bot startup."""
    logger.info("Bot starting up...")

    commands = [
        BotCommand(command=CMD_START, description="Register your chat with the bot"),
        BotCommand(command=CMD_HELP, description="Show help"),
        BotCommand(command=CMD_MY_TASK, description="Your cleaning tasks this week"),
        BotCommand(command=CMD_SCHEDULE, description="Cleaning schedule"),
        BotCommand(command=CMD_MY_BALANCE, description="Your balance"),
        BotCommand(command=CMD_ADD_EXPENSE, description="Add a shared expense"),
        BotCommand(command=CMD_CANCEL, description="Cancel adding an expense"),
    ]

    await bot.set_my_commands(commands)
    logger.info("Bot commands set")

    scheduler.start()
    logger.info("Notification scheduler started")

    bot_info = await bot.get_me()
    logger.info(f"Bot started: @{bot_info.username}")


async def on_shutdown(scheduler: AsyncIOScheduler):
    """Actions to perform on bot shutdown."""
    logger.info("Bot shutting down...")

    if scheduler.running:
        scheduler.shutdown(wait=False)

    await sessionmanager.close()
    logger.info("Database connections closed")


async def create_storage() -> BaseStorage:
    """Redis FSM storage, or in-memory when Redis is not reachable."""
    redis = Redis.from_url(settings.redis_url)
    try:
        await redis.ping()
    except (RedisError, OSError) as e:
        logger.warning(f"Could not connect to Redis: {e}. Using memory storage.")
        await redis.aclose()
        return MemoryStorage()

    logger.info("Using Redis storage for FSM")
    return RedisStorage(redis=redis)


def create_dispatcher(storage: BaseStorage) -> Dispatcher:
    dp = Dispatcher(storage=storage)

    # Order matters: session first, then the user lookup that needs it
    for observer in (dp.message, dp.callback_query):
        observer.middleware(DatabaseMiddleware())
        observer.middleware(AuthMiddleware())
        observer.middleware(AdminMiddleware())

    # Expense router first so a command typed mid-dialog ends the dialog
    dp.include_router(expense.router)
    dp.include_router(start.router)
    dp.include_router(admin.router)
    dp.include_router(tasks.router)
    dp.include_router(balance.router)
    dp.include_router(errors.router)

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp


async def main():
    """Main function to run the bot."""
    sessionmanager.init(settings.database_url)
    logger.info("Database session manager initialized")

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML)
    )

    dp = create_dispatcher(await create_storage())

    jobs = NotificationJobs(bot, sessionmanager, settings)
    dp["jobs"] = jobs
    dp["scheduler"] = setup_scheduler(jobs, settings)

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()


def run():
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
