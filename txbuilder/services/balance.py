# /txbuilder/services/balance.py
# Funds-sufficiency checks run before deposit and fixed-amount repay.
from typing import Protocol

from txbuilder.abis import SYNTHETIX_ABI
from txbuilder.core.config import settings
from txbuilder.core.contracts import ContractInterface, to_checksum
from txbuilder.core.logger import get_logger
from txbuilder.services.erc20 import ERC20Service

log = get_logger(__name__)


class BalanceValidator(Protocol):
    async def validate(self, user: str, reserve: str, amount: str) -> bool:
        ...


class TokenBalanceValidator:
    """Passes when the user's token balance covers ``amount`` (base units)."""
    def __init__(self, erc20: ERC20Service):
        self.erc20 = erc20

    async def validate(self, user: str, reserve: str, amount: str) -> bool:
        balance = await self.erc20.balance_of(reserve, user)
        return balance >= int(amount)


class SynthetixValidator:
    """
    SNX can be locked as collateral on Synthetix, so the plain balance overstates
    what a user can move. Only the SNX reserve is checked; others always pass.
    """
    def __init__(self, contracts: ContractInterface, snx_address: str | None = None):
        self.contracts = contracts
        self.snx_address = snx_address or settings.SYNTHETIX_PROXY_ADDRESS

    async def validate(self, user: str, reserve: str, amount: str) -> bool:
        if not self.snx_address or reserve.lower() != self.snx_address.lower():
            return True
        transferable = int(await self.contracts.call(self.snx_address, SYNTHETIX_ABI, "transferableSynthetix", to_checksum(user)))
        if transferable < int(amount):
            log.info("SNX_TRANSFERABLE_SHORTFALL", user=user, transferable=transferable, amount=amount)
            return False
        return True
