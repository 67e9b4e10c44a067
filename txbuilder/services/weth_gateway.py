# /txbuilder/services/weth_gateway.py
# Native-currency path: the gateway wraps/unwraps ETH around lending pool calls.
from typing import List

from txbuilder.abis import DEBT_TOKEN_ABI, WETH_GATEWAY_ABI
from txbuilder.core.amounts import convert, to_base_units
from txbuilder.core.constants import (
    MAX_UINT_AMOUNT,
    NATIVE_DECIMALS,
    USE_ALL_AMOUNT,
    InterestRate,
    ProtocolAction,
    TxType,
    rate_mode_code,
)
from txbuilder.core.contracts import to_checksum
from txbuilder.core.errors import ValidationError
from txbuilder.core.factory import TransactionFactory
from txbuilder.core.logger import APPROVALS_PLANNED, get_logger
from txbuilder.core.tx import Transaction
from txbuilder.services.erc20 import ERC20Service

log = get_logger(__name__)


class WETHGatewayService:
    def __init__(self, factory: TransactionFactory, erc20: ERC20Service, gateway_address: str):
        self.factory = factory
        self.contracts = factory.contracts
        self.erc20 = erc20
        self.gateway_address = to_checksum(gateway_address)

    def _call(self, method: str, args: list, sender: str, action: ProtocolAction,
              prior: List[Transaction] = (), value: int = 0) -> Transaction:
        return self.factory.build(
            to=self.gateway_address,
            abi=WETH_GATEWAY_ABI,
            method=method,
            args=args,
            sender=sender,
            value=value,
            action=action,
            prior=prior,
        )

    async def deposit_eth(self, lending_pool: str, user: str, amount: str,
                          on_behalf_of: str | None = None, referral_code: int | None = None) -> List[Transaction]:
        converted = int(convert(amount, NATIVE_DECIMALS))
        tx = self._call(
            "depositETH",
            [to_checksum(lending_pool), to_checksum(on_behalf_of or user), referral_code or 0],
            sender=user,
            action=ProtocolAction.deposit,
            value=converted,
        )
        return [tx]

    async def withdraw_eth(self, lending_pool: str, user: str, amount: str, a_token_address: str,
                           on_behalf_of: str | None = None) -> List[Transaction]:
        txs: List[Transaction] = []
        converted = int(to_base_units(amount, NATIVE_DECIMALS))

        # The gateway pulls aWETH from the user before unwrapping.
        approval = await self.erc20.plan_approval(a_token_address, user, self.gateway_address, amount)
        if approval:
            txs.append(approval)

        txs.append(self._call(
            "withdrawETH",
            [to_checksum(lending_pool), converted, to_checksum(on_behalf_of or user)],
            sender=user,
            action=ProtocolAction.withdrawETH,
            prior=txs,
        ))
        return txs

    async def borrow_eth(self, lending_pool: str, user: str, amount: str, debt_token_address: str,
                         interest_rate_mode: InterestRate, referral_code: int | None = None) -> List[Transaction]:
        txs: List[Transaction] = []
        converted = int(convert(amount, NATIVE_DECIMALS))

        # The gateway borrows on the user's behalf, so it needs credit delegation.
        delegated = int(await self.contracts.call(
            debt_token_address, DEBT_TOKEN_ABI, "borrowAllowance", to_checksum(user), self.gateway_address
        ))
        if delegated < converted:
            log.debug("CREDIT_DELEGATION_REQUIRED", user=user, debt_token=debt_token_address, delegated=delegated)
            APPROVALS_PLANNED.labels("credit_delegation").inc()
            txs.append(self.factory.build(
                to=debt_token_address,
                abi=DEBT_TOKEN_ABI,
                method="approveDelegation",
                args=[self.gateway_address, int(MAX_UINT_AMOUNT)],
                sender=user,
                tx_type=TxType.ERC20_APPROVAL,
                action=ProtocolAction.creditDelegationApproval,
            ))

        txs.append(self._call(
            "borrowETH",
            [to_checksum(lending_pool), converted, rate_mode_code(interest_rate_mode), referral_code or 0],
            sender=user,
            action=ProtocolAction.borrowETH,
            prior=txs,
        ))
        return txs

    async def repay_eth(self, lending_pool: str, user: str, amount: str, interest_rate_mode: InterestRate,
                        on_behalf_of: str | None = None) -> List[Transaction]:
        # The repaid ETH travels as msg.value, so "everything" has no payable form.
        if str(amount).strip() == USE_ALL_AMOUNT:
            raise ValidationError(["amount"])
        converted = int(convert(amount, NATIVE_DECIMALS))
        tx = self._call(
            "repayETH",
            [to_checksum(lending_pool), converted, rate_mode_code(interest_rate_mode), to_checksum(on_behalf_of or user)],
            sender=user,
            action=ProtocolAction.repayETH,
            value=converted,
        )
        return [tx]
