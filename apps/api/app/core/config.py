from pathlib import Path

from openpayments_sdk.types import SigningConfig
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
API_VERSION = "1.0.0"


class Settings(BaseSettings):
    app_name: str = "openpayments-referral-api"
    app_env: str = "development"
    app_port: int = 3000

    op_wallet_address_url: str = "https://ilp.interledger-test.dev/seller_example"
    op_private_key_path: str = "private.key"
    op_key_id: str = "a56111ec-2936-45d7-b17b-9579dc77cfed"
    op_http_timeout_seconds: float = 10.0

    payment_link_web_base_url: str = "https://pay.interledger-test.dev/payment-choice"
    payment_link_deep_link_base: str = "openpayments://pay"

    referral_share_percent: int = 5
    payment_wait_max_attempts: int = 30
    payment_wait_interval_seconds: float = 2.0

    catalog_path: Path = BASE_DIR / "data" / "products.json"
    referral_sales_path: Path = BASE_DIR / "data" / "referral_sales.json"
    referral_transactions_path: Path = BASE_DIR / "data" / "referral_transactions.json"

    log_level: str = "INFO"

    cors_allow_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=(str(BASE_DIR / ".env"), ".env"),
        env_file_encoding="utf-8",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    def signing_config(self) -> SigningConfig:
        return SigningConfig(
            wallet_address_url=self.op_wallet_address_url,
            private_key_path=self.op_private_key_path,
            key_id=self.op_key_id,
        )


settings = Settings()
