# /txbuilder/services/adapters.py
# Direct (non flash-loan) entry points of the swap-collateral and repay-with-collateral adapters.
from typing import List

from txbuilder.abis import LIQUIDITY_SWAP_ADAPTER_ABI, REPAY_WITH_COLLATERAL_ADAPTER_ABI
from txbuilder.core.constants import ProtocolAction
from txbuilder.core.contracts import to_checksum
from txbuilder.core.factory import TransactionFactory
from txbuilder.core.tx import Transaction
from txbuilder.core.types import PermitSignature


class LiquiditySwapAdapterService:
    def __init__(self, factory: TransactionFactory, adapter_address: str):
        self.factory = factory
        self.adapter_address = to_checksum(adapter_address)

    def swap_and_deposit(
        self,
        *,
        user: str,
        asset_to_swap_from: str,
        asset_to_swap_to: str,
        amount_to_swap: str,
        min_amount_to_receive: str,
        permit_params: PermitSignature,
        use_eth_path: bool = False,
        prior: List[Transaction] = (),
    ) -> Transaction:
        return self.factory.build(
            to=self.adapter_address,
            abi=LIQUIDITY_SWAP_ADAPTER_ABI,
            method="swapAndDeposit",
            args=[
                [to_checksum(asset_to_swap_from)],
                [to_checksum(asset_to_swap_to)],
                [int(amount_to_swap)],
                [int(min_amount_to_receive)],
                [permit_params.as_tuple()],
                [bool(use_eth_path)],
            ],
            sender=user,
            action=ProtocolAction.swapCollateral,
            prior=prior,
        )


class RepayWithCollateralAdapterService:
    def __init__(self, factory: TransactionFactory, adapter_address: str):
        self.factory = factory
        self.adapter_address = to_checksum(adapter_address)

    def swap_and_repay(
        self,
        *,
        user: str,
        collateral_asset: str,
        debt_asset: str,
        collateral_amount: str,
        debt_repay_amount: str,
        debt_rate_mode: int,
        permit: PermitSignature,
        use_eth_path: bool = False,
        prior: List[Transaction] = (),
    ) -> Transaction:
        return self.factory.build(
            to=self.adapter_address,
            abi=REPAY_WITH_COLLATERAL_ADAPTER_ABI,
            method="swapAndRepay",
            args=[
                to_checksum(collateral_asset),
                to_checksum(debt_asset),
                int(collateral_amount),
                int(debt_repay_amount),
                int(debt_rate_mode),
                permit.as_tuple(),
                bool(use_eth_path),
            ],
            sender=user,
            action=ProtocolAction.repayCollateral,
            prior=prior,
        )
