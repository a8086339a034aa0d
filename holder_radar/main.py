"""Entry point for the holder-radar Telegram bot."""

import asyncio
import signal

from loguru import logger

from config.settings import ReportThresholds, settings
from holder_radar.bot.bot import create_bot, create_dispatcher, run_bot
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient
from holder_radar.utils.logger import setup_logger


async def main() -> None:
    setup_logger(level="INFO")
    logger.info("Starting holder-radar bot...")

    thresholds = ReportThresholds.from_settings(settings)
    rpc_client = SolanaRpcClient(
        settings.solana_rpc_url,
        commitment=settings.rpc_commitment,
        timeout=settings.rpc_timeout_sec,
        max_retries=settings.rpc_max_retries,
    )
    try:
        bot = create_bot(settings)
    except RuntimeError as e:
        logger.error(f"Cannot start: {e}")
        await rpc_client.close()
        return
    dp = create_dispatcher(rpc_client, thresholds, settings)

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    bot_task = asyncio.create_task(run_bot(bot, dp))

    done, pending = await asyncio.wait(
        [bot_task, asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    await rpc_client.close()
    logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
