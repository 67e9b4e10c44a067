# /txbuilder/services/flashloan.py
# Flash-loan math and the parameter blobs each receiving adapter decodes.

from decimal import Decimal
from typing import List, Sequence

from eth_abi import encode
from pydantic import BaseModel

from txbuilder.abis import LENDING_POOL_ABI
from txbuilder.core.amounts import convert, exact_context, format_decimal, parse_decimal
from txbuilder.core.constants import SURPLUS, ProtocolAction
from txbuilder.core.contracts import to_checksum
from txbuilder.core.factory import TransactionFactory
from txbuilder.core.logger import get_logger
from txbuilder.core.tx import Transaction
from txbuilder.core.types import PermitSignature

log = get_logger(__name__)

SWAP_COLLATERAL_PARAMS_TYPES = [
    "address[]", "uint256[]", "bool[]", "uint256[]", "uint256[]", "uint8[]", "bytes32[]", "bytes32[]", "bool[]",
]
REPAY_WITH_COLLATERAL_PARAMS_TYPES = [
    "address", "uint256", "uint256", "uint256", "uint256", "uint8", "bytes32", "bytes32", "bool",
]
FLASH_LIQUIDATION_PARAMS_TYPES = ["address", "address", "address", "uint256", "bool"]

# Mode 0: the flash loan must be repaid in the same transaction, no debt is opened.
NO_DEBT_MODE = 0


class FlashLoanRequest(BaseModel):
    receiver: str
    assets: List[str]
    amounts: List[str]
    on_behalf_of: str
    params: bytes
    referral_code: int = 0

    @property
    def modes(self) -> List[int]:
        return [NO_DEBT_MODE] * len(self.assets)


class FlashLoanParamsEncoder:
    def __init__(self, factory: TransactionFactory, lending_pool: str):
        self.factory = factory
        self.contracts = factory.contracts
        self.lending_pool = to_checksum(lending_pool)

    async def get_premium(self) -> int:
        """Flash-loan premium in basis points. Governance can change it, so it is read per call."""
        return int(await self.contracts.call(self.lending_pool, LENDING_POOL_ABI, "FLASHLOAN_PREMIUM_TOTAL"))

    @staticmethod
    def amount_after_fee(amount: str, premium_bps: int) -> str:
        base = int(amount)
        return str(base - base * int(premium_bps) // 10000)

    @staticmethod
    def amount_with_surplus(amount: str, surplus_percent=SURPLUS) -> str:
        with exact_context():
            value = parse_decimal(amount)
            return format_decimal(value + value * Decimal(str(surplus_percent)) / 100)

    @staticmethod
    def flash_liquidation_surplus(amount: str) -> str:
        # Surplus scales with the square of the cover, unlike SURPLUS used by the other adapters.
        with exact_context():
            value = parse_decimal(amount)
            return format_decimal(value + value * value / 100)

    @staticmethod
    def minimum_received(to_amount: str, max_slippage: str, decimals: int) -> str:
        with exact_context():
            value = parse_decimal(to_amount)
            bound = value - value * parse_decimal(max_slippage) / 100
        return convert(format_decimal(bound), decimals)

    @staticmethod
    def encode_swap_collateral_params(to_asset: str, min_received: str, swap_all: bool,
                                      permit: PermitSignature, use_eth_path: bool) -> bytes:
        amount, deadline, v, r, s = permit.as_tuple()
        return encode(SWAP_COLLATERAL_PARAMS_TYPES, [
            [to_checksum(to_asset)],
            [int(min_received)],
            [bool(swap_all)],
            [amount],
            [deadline],
            [v],
            [r],
            [s],
            [bool(use_eth_path)],
        ])

    @staticmethod
    def encode_repay_with_collateral_params(from_asset: str, collateral_amount: str, rate_mode: int,
                                            permit: PermitSignature, use_eth_path: bool) -> bytes:
        amount, deadline, v, r, s = permit.as_tuple()
        return encode(REPAY_WITH_COLLATERAL_PARAMS_TYPES, [
            to_checksum(from_asset),
            int(collateral_amount),
            int(rate_mode),
            amount,
            deadline,
            v,
            r,
            s,
            bool(use_eth_path),
        ])

    @staticmethod
    def encode_flash_liquidation_params(collateral_asset: str, borrowed_asset: str, user: str,
                                        debt_cover: str, use_eth_path: bool) -> bytes:
        return encode(FLASH_LIQUIDATION_PARAMS_TYPES, [
            to_checksum(collateral_asset),
            to_checksum(borrowed_asset),
            to_checksum(user),
            int(debt_cover),
            bool(use_eth_path),
        ])

    def build_flash_loan(self, request: FlashLoanRequest, sender: str, action: ProtocolAction,
                         prior: Sequence[Transaction] = ()) -> Transaction:
        log.debug(
            "FLASHLOAN_ENCODED",
            receiver=request.receiver,
            assets=request.assets,
            amounts=request.amounts,
            action=action.value,
        )
        return self.factory.build(
            to=self.lending_pool,
            abi=LENDING_POOL_ABI,
            method="flashLoan",
            args=[
                to_checksum(request.receiver),
                [to_checksum(a) for a in request.assets],
                [int(a) for a in request.amounts],
                request.modes,
                to_checksum(request.on_behalf_of),
                request.params,
                request.referral_code,
            ],
            sender=sender,
            action=action,
            prior=prior,
        )
