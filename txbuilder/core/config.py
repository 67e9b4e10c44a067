# /txbuilder/core/config.py
import sys
from decimal import Decimal
from pydantic_settings import BaseSettings
from pydantic import SecretStr


class Settings(BaseSettings):
    # Network / market selection
    NETWORK: str = "mainnet"
    MARKET: str = "proto"
    RPC_URL: SecretStr | None = None

    # Contract addresses for NETWORK/MARKET; registered at import when all are set.
    LENDING_POOL_ADDRESS: str | None = None
    WETH_GATEWAY_ADDRESS: str | None = None
    SWAP_COLLATERAL_ADAPTER_ADDRESS: str | None = None
    REPAY_WITH_COLLATERAL_ADAPTER_ADDRESS: str | None = None
    FLASH_LIQUIDATION_ADAPTER_ADDRESS: str | None = None
    SYNTHETIX_PROXY_ADDRESS: str | None = None

    # Flash-loan math
    SURPLUS_PERCENT: Decimal = Decimal("0.05")

    # Operational Settings
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: SecretStr | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


try:
    settings = Settings()
except Exception as e:
    # Late import to avoid circular dependency only for logging the failure
    try:
        from txbuilder.core.logger import get_logger, configure_logging
        configure_logging()
        log = get_logger("TxBuilder.Config")
        log.critical("FAILED_TO_LOAD_SETTINGS", error=str(e))
    except Exception:
        print("FAILED_TO_LOAD_SETTINGS", e)
    sys.exit(1)
