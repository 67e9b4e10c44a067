# /txbuilder/services/erc20.py
# Token metadata reads and approval planning.

from txbuilder.abis import ERC20_ABI
from txbuilder.core.amounts import to_base_units
from txbuilder.core.constants import (
    DEFAULT_APPROVE_AMOUNT,
    NATIVE_DECIMALS,
    ProtocolAction,
    TxType,
    is_native,
)
from txbuilder.core.contracts import to_checksum
from txbuilder.core.factory import TransactionFactory
from txbuilder.core.logger import APPROVALS_PLANNED, get_logger
from txbuilder.core.tx import Transaction

log = get_logger(__name__)


class ERC20Service:
    """
    Token reads (decimals, allowance, balance) and approval transactions.

    Nothing is cached: every action re-reads allowance and decimals.
    """
    def __init__(self, factory: TransactionFactory):
        self.factory = factory
        self.contracts = factory.contracts

    async def decimals_of(self, token: str) -> int:
        if is_native(token):
            return NATIVE_DECIMALS
        return int(await self.contracts.call(token, ERC20_ABI, "decimals"))

    async def allowance(self, token: str, owner: str, spender: str) -> int:
        return int(await self.contracts.call(token, ERC20_ABI, "allowance", to_checksum(owner), to_checksum(spender)))

    async def balance_of(self, token: str, owner: str) -> int:
        return int(await self.contracts.call(token, ERC20_ABI, "balanceOf", to_checksum(owner)))

    async def is_approved(self, token: str, owner: str, spender: str, amount: str) -> bool:
        """True when ``spender`` may already move ``amount`` (human units, "-1" = everything)."""
        decimals = await self.decimals_of(token)
        required = int(to_base_units(amount, decimals))
        allowance = await self.allowance(token, owner, spender)
        return allowance >= required

    def approve(self, owner: str, token: str, spender: str, amount: str = DEFAULT_APPROVE_AMOUNT) -> Transaction:
        return self.factory.build(
            to=token,
            abi=ERC20_ABI,
            method="approve",
            args=[to_checksum(spender), int(amount)],
            sender=owner,
            tx_type=TxType.ERC20_APPROVAL,
            action=ProtocolAction.approval,
        )

    async def plan_approval(self, token: str, owner: str, spender: str, amount: str) -> Transaction | None:
        """Returns an approval for the default ceiling when the current allowance is short, else None."""
        if await self.is_approved(token, owner, spender, amount):
            return None
        log.debug("APPROVAL_REQUIRED", token=token, owner=owner, spender=spender, amount=amount)
        APPROVALS_PLANNED.labels("erc20").inc()
        return self.approve(owner, token, spender, DEFAULT_APPROVE_AMOUNT)
