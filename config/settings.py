from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Solana RPC
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_commitment: str = "confirmed"
    rpc_timeout_sec: float = 15.0
    rpc_max_retries: int = 2  # transport-level only (429 / timeouts)

    # Telegram bot
    telegram_bot_token: str = ""
    telegram_admin_id: int = 0

    # Report thresholds
    min_ui_amount: float = 2_000_000.0
    max_wallet_age_hours: int = 48
    min_sol_for_whale: float = 40.0

    # Classification fan-out: each holder = 2 RPC calls
    classify_max_concurrent: int = 20
    classify_timeout_sec: float = 30.0


@dataclass(frozen=True)
class ReportThresholds:
    """Read-only report thresholds, passed explicitly through the pipeline."""

    min_ui_amount: float = 2_000_000.0
    max_wallet_age_hours: int = 48
    min_sol_for_whale: float = 40.0

    @classmethod
    def from_settings(cls, s: Settings) -> "ReportThresholds":
        return cls(
            min_ui_amount=s.min_ui_amount,
            max_wallet_age_hours=s.max_wallet_age_hours,
            min_sol_for_whale=s.min_sol_for_whale,
        )


settings = Settings()
