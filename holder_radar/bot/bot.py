"""Telegram bot lifecycle: aiogram 3.x polling mode.

The dispatcher carries the shared RPC client, thresholds and settings as
workflow data, so handlers receive them by injection instead of globals.
"""

from aiogram import Bot, Dispatcher
from loguru import logger

from config.settings import ReportThresholds, Settings
from holder_radar.bot.handlers import router
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient


def create_bot(settings: Settings) -> Bot:
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN not configured")
    return Bot(token=settings.telegram_bot_token)


def create_dispatcher(
    rpc_client: SolanaRpcClient,
    thresholds: ReportThresholds,
    settings: Settings,
) -> Dispatcher:
    dp = Dispatcher(rpc_client=rpc_client, thresholds=thresholds, settings=settings)
    dp.include_router(router)
    return dp


async def run_bot(bot: Bot, dp: Dispatcher) -> None:
    """Poll Telegram until cancelled."""
    logger.info("[BOT] Starting Telegram bot (polling mode)")
    try:
        await dp.start_polling(bot, handle_signals=False, close_bot_session=False)
    finally:
        await bot.session.close()
        logger.info("[BOT] Stopped")
