# /txbuilder/core/addresses.py
# Per-network / per-market contract address registry.
from typing import Dict, Tuple

from pydantic import BaseModel, field_validator
from web3 import Web3

from txbuilder.core.config import settings
from txbuilder.core.logger import get_logger

log = get_logger(__name__)


class MarketAddresses(BaseModel):
    lending_pool: str
    weth_gateway: str
    swap_collateral_adapter: str
    repay_with_collateral_adapter: str
    flash_liquidation_adapter: str

    class Config:
        frozen = True

    @field_validator("*")
    @classmethod
    def _checksum(cls, value: str) -> str:
        return Web3.to_checksum_address(value)


_REGISTRY: Dict[Tuple[str, str], MarketAddresses] = {}


def register_market(network: str, market: str, addresses: MarketAddresses):
    _REGISTRY[(network.lower(), market.lower())] = addresses
    log.info("MARKET_REGISTERED", network=network, market=market, lending_pool=addresses.lending_pool)


def get_market_addresses(network: str | None = None, market: str | None = None) -> MarketAddresses:
    key = ((network or settings.NETWORK).lower(), (market or settings.MARKET).lower())
    try:
        return _REGISTRY[key]
    except KeyError:
        raise ValueError(f"No contract addresses registered for network={key[0]} market={key[1]}") from None


def _register_from_settings():
    configured = {
        "lending_pool": settings.LENDING_POOL_ADDRESS,
        "weth_gateway": settings.WETH_GATEWAY_ADDRESS,
        "swap_collateral_adapter": settings.SWAP_COLLATERAL_ADAPTER_ADDRESS,
        "repay_with_collateral_adapter": settings.REPAY_WITH_COLLATERAL_ADAPTER_ADDRESS,
        "flash_liquidation_adapter": settings.FLASH_LIQUIDATION_ADAPTER_ADDRESS,
    }
    missing = [name for name, value in configured.items() if not value]
    if len(missing) == len(configured):
        return
    if missing:
        log.warning("MARKET_ADDRESSES_INCOMPLETE", missing=missing)
        return
    register_market(settings.NETWORK, settings.MARKET, MarketAddresses(**configured))


_register_from_settings()
