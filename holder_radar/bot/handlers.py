"""Telegram bot command handlers."""

from aiogram import Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import BaseFilter, Command, CommandObject
from aiogram.types import Message
from loguru import logger

from config.settings import ReportThresholds, Settings
from holder_radar.parsers.aggregator import ReportStyle
from holder_radar.parsers.exceptions import HolderRadarError
from holder_radar.parsers.report_pipeline import generate_report
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient

router = Router()

MAX_ADDRESS_LEN = 64

HELP_TEXT = (
    "Holder Radar Bot\n\n"
    "Commands:\n"
    "/check <MINT_ADDRESS> - Full holder report (top 5)\n"
    "/quick <MINT_ADDRESS> - Compact holder report (top 3)\n"
    "/help - Show this message"
)
PROCESSING_TEXT = "🔍 Fetching token holders... Please wait..."


class AdminFilter(BaseFilter):
    """Only allow messages from the configured admin user."""

    async def __call__(self, message: Message, settings: Settings) -> bool:
        admin_id = settings.telegram_admin_id
        if not admin_id:
            return True  # no admin configured = allow all
        return message.from_user is not None and message.from_user.id == admin_id


router.message.filter(AdminFilter())


@router.message(Command("start", "help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT)


@router.message(Command("check"))
async def cmd_check(
    message: Message,
    command: CommandObject,
    rpc_client: SolanaRpcClient,
    thresholds: ReportThresholds,
    settings: Settings,
) -> None:
    """Full holder report for a mint."""
    await _handle_report(message, command, rpc_client, thresholds, settings, ReportStyle.FULL)


@router.message(Command("quick"))
async def cmd_quick(
    message: Message,
    command: CommandObject,
    rpc_client: SolanaRpcClient,
    thresholds: ReportThresholds,
    settings: Settings,
) -> None:
    """Compact holder report for a mint."""
    await _handle_report(message, command, rpc_client, thresholds, settings, ReportStyle.COMPACT)


async def _handle_report(
    message: Message,
    command: CommandObject,
    rpc_client: SolanaRpcClient,
    thresholds: ReportThresholds,
    settings: Settings,
    style: ReportStyle,
) -> None:
    mint_address = (command.args or "").strip()[:MAX_ADDRESS_LEN]
    if not mint_address:
        await message.reply(
            "❌ Please provide a mint address!\n\n"
            f"Usage: /{command.command} <MINT_ADDRESS>"
        )
        return

    placeholder = await message.reply(PROCESSING_TEXT)
    try:
        text = await generate_report(
            mint_address,
            client=rpc_client,
            thresholds=thresholds,
            style=style,
            max_concurrent=settings.classify_max_concurrent,
            timeout_sec=settings.classify_timeout_sec,
        )
    except HolderRadarError as e:
        logger.warning(f"[BOT] Report failed for {mint_address[:12]}: {e}")
        text = f"❌ Error: {e}"

    try:
        await placeholder.delete()
    except TelegramAPIError as e:
        logger.debug(f"[BOT] Could not delete placeholder: {e}")

    await message.reply(text)
