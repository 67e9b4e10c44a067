# /txbuilder/services/lending_pool.py
# Composes the ordered transaction batch for every lending pool action.
from typing import List, Sequence

from txbuilder.abis import LENDING_POOL_ABI
from txbuilder.core.addresses import MarketAddresses
from txbuilder.core.amounts import convert, get_tx_value, to_base_units
from txbuilder.core.constants import (
    MAX_UINT_AMOUNT,
    SURPLUS,
    USE_ALL_AMOUNT,
    ProtocolAction,
    is_native,
    rate_mode_code,
)
from txbuilder.core.contracts import ContractInterface, to_checksum
from txbuilder.core.decorators import instrumented_action
from txbuilder.core.errors import InsufficientFundsError, MissingParameterError
from txbuilder.core.factory import TransactionFactory
from txbuilder.core.gas import GasEstimationChain
from txbuilder.core.gas_estimator import GasEstimator
from txbuilder.core.tx import Transaction
from txbuilder.core.types import (
    BorrowParams,
    DepositParams,
    FlashLiquidationParams,
    LiquidationCallParams,
    PermitSignature,
    RepayParams,
    RepayWithCollateralParams,
    SetUsageAsCollateralParams,
    SwapBorrowRateModeParams,
    SwapCollateralParams,
    WithdrawParams,
)
from txbuilder.core.validators import (
    is_borrow_rate_mode,
    is_eth_address,
    is_percentage,
    is_positive_amount,
    is_positive_or_minus_one_amount,
    is_referral_code,
    validate,
)
from txbuilder.services.adapters import LiquiditySwapAdapterService, RepayWithCollateralAdapterService
from txbuilder.services.balance import BalanceValidator, SynthetixValidator
from txbuilder.services.erc20 import ERC20Service
from txbuilder.services.flashloan import FlashLoanParamsEncoder, FlashLoanRequest
from txbuilder.services.weth_gateway import WETHGatewayService


class LendingPool:
    """
    Builds the transactions behind each lending pool action.

    Every action validates its request, routes the native-currency placeholder
    reserve through the WETH gateway, and otherwise converts amounts, prepends
    an approval when the allowance is short, and encodes the pool call. Each
    returned transaction carries a deferred gas estimate bound to the
    transactions placed before it.
    """
    def __init__(
        self,
        factory: TransactionFactory,
        erc20: ERC20Service,
        balance_validator: BalanceValidator,
        weth_gateway: WETHGatewayService,
        swap_adapter: LiquiditySwapAdapterService,
        repay_adapter: RepayWithCollateralAdapterService,
        flashloan: FlashLoanParamsEncoder,
        addresses: MarketAddresses,
        surplus=SURPLUS,
    ):
        self.factory = factory
        self.erc20 = erc20
        self.balance_validator = balance_validator
        self.weth_gateway = weth_gateway
        self.swap_adapter = swap_adapter
        self.repay_adapter = repay_adapter
        self.flashloan = flashloan
        self.addresses = addresses
        self.lending_pool_address = addresses.lending_pool
        self.surplus = surplus

    def _pool_call(self, method: str, args: list, sender: str, action: ProtocolAction,
                   prior: Sequence[Transaction] = (), value: int = 0) -> Transaction:
        return self.factory.build(
            to=self.lending_pool_address,
            abi=LENDING_POOL_ABI,
            method=method,
            args=args,
            sender=sender,
            value=value,
            action=action,
            prior=prior,
        )

    async def _ensure_funds(self, user: str, reserve: str, amount: str):
        if not await self.balance_validator.validate(user, reserve, amount):
            raise InsufficientFundsError(user, reserve, amount)

    @instrumented_action(ProtocolAction.deposit)
    async def deposit(self, params: DepositParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
            ("amount", params.amount, is_positive_amount),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            ("referral_code", params.referral_code, is_referral_code),
            optional=("on_behalf_of", "referral_code"),
        ).raise_for_errors()

        if is_native(params.reserve):
            return await self.weth_gateway.deposit_eth(
                self.lending_pool_address, params.user, params.amount, params.on_behalf_of, params.referral_code
            )

        txs: List[Transaction] = []
        decimals = await self.erc20.decimals_of(params.reserve)
        converted = convert(params.amount, decimals)
        await self._ensure_funds(params.user, params.reserve, converted)

        approval = await self.erc20.plan_approval(params.reserve, params.user, self.lending_pool_address, params.amount)
        if approval:
            txs.append(approval)

        txs.append(self._pool_call(
            "deposit",
            [to_checksum(params.reserve), int(converted), to_checksum(params.on_behalf_of or params.user),
             params.referral_code or 0],
            sender=params.user,
            action=ProtocolAction.deposit,
            prior=txs,
            value=get_tx_value(params.reserve, converted),
        ))
        return txs

    @instrumented_action(ProtocolAction.withdraw)
    async def withdraw(self, params: WithdrawParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
            ("amount", params.amount, is_positive_or_minus_one_amount),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            ("a_token_address", params.a_token_address, is_eth_address),
            optional=("on_behalf_of", "a_token_address"),
        ).raise_for_errors()

        if is_native(params.reserve):
            if not params.a_token_address:
                raise MissingParameterError(
                    "a_token_address", "To withdraw ETH you need to pass the aWETH token address"
                )
            return await self.weth_gateway.withdraw_eth(
                self.lending_pool_address, params.user, params.amount, params.a_token_address, params.on_behalf_of
            )

        decimals = await self.erc20.decimals_of(params.reserve)
        converted = to_base_units(params.amount, decimals)
        return [self._pool_call(
            "withdraw",
            [to_checksum(params.reserve), int(converted), to_checksum(params.on_behalf_of or params.user)],
            sender=params.user,
            action=ProtocolAction.withdraw,
        )]

    @instrumented_action(ProtocolAction.borrow)
    async def borrow(self, params: BorrowParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
            ("amount", params.amount, is_positive_amount),
            ("interest_rate_mode", params.interest_rate_mode, is_borrow_rate_mode),
            ("debt_token_address", params.debt_token_address, is_eth_address),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            ("referral_code", params.referral_code, is_referral_code),
            optional=("debt_token_address", "on_behalf_of", "referral_code"),
        ).raise_for_errors()

        if is_native(params.reserve):
            if not params.debt_token_address:
                raise MissingParameterError(
                    "debt_token_address",
                    "To borrow ETH you need to pass the stable or variable WETH debt token address "
                    "matching the interest rate mode",
                )
            return await self.weth_gateway.borrow_eth(
                self.lending_pool_address, params.user, params.amount, params.debt_token_address,
                params.interest_rate_mode, params.referral_code,
            )

        decimals = await self.erc20.decimals_of(params.reserve)
        converted = convert(params.amount, decimals)
        return [self._pool_call(
            "borrow",
            [to_checksum(params.reserve), int(converted), rate_mode_code(params.interest_rate_mode),
             params.referral_code or 0, to_checksum(params.on_behalf_of or params.user)],
            sender=params.user,
            action=ProtocolAction.borrow,
        )]

    @instrumented_action(ProtocolAction.repay)
    async def repay(self, params: RepayParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
            ("amount", params.amount, is_positive_or_minus_one_amount),
            ("interest_rate_mode", params.interest_rate_mode, is_borrow_rate_mode),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            optional=("on_behalf_of",),
        ).raise_for_errors()

        if is_native(params.reserve):
            return await self.weth_gateway.repay_eth(
                self.lending_pool_address, params.user, params.amount, params.interest_rate_mode, params.on_behalf_of
            )

        txs: List[Transaction] = []
        decimals = await self.erc20.decimals_of(params.reserve)
        converted = to_base_units(params.amount, decimals)
        # Repay-all is capped on-chain at the outstanding debt, so there is nothing to pre-check.
        if params.amount.strip() != USE_ALL_AMOUNT:
            await self._ensure_funds(params.user, params.reserve, converted)

        approval = await self.erc20.plan_approval(params.reserve, params.user, self.lending_pool_address, params.amount)
        if approval:
            txs.append(approval)

        txs.append(self._pool_call(
            "repay",
            [to_checksum(params.reserve), int(converted), rate_mode_code(params.interest_rate_mode),
             to_checksum(params.on_behalf_of or params.user)],
            sender=params.user,
            action=ProtocolAction.repay,
            prior=txs,
            value=get_tx_value(params.reserve, converted),
        ))
        return txs

    @instrumented_action(ProtocolAction.swapBorrowRateMode)
    async def swap_borrow_rate_mode(self, params: SwapBorrowRateModeParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
            ("interest_rate_mode", params.interest_rate_mode, is_borrow_rate_mode),
        ).raise_for_errors()

        return [self._pool_call(
            "swapBorrowRateMode",
            [to_checksum(params.reserve), rate_mode_code(params.interest_rate_mode)],
            sender=params.user,
            action=ProtocolAction.swapBorrowRateMode,
        )]

    @instrumented_action(ProtocolAction.setUsageAsCollateral)
    async def set_usage_as_collateral(self, params: SetUsageAsCollateralParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("reserve", params.reserve, is_eth_address),
        ).raise_for_errors()

        return [self._pool_call(
            "setUserUseReserveAsCollateral",
            [to_checksum(params.reserve), bool(params.usage_as_collateral)],
            sender=params.user,
            action=ProtocolAction.setUsageAsCollateral,
        )]

    @instrumented_action(ProtocolAction.liquidationCall, user_field="liquidator")
    async def liquidation_call(self, params: LiquidationCallParams) -> List[Transaction]:
        validate(
            ("liquidator", params.liquidator, is_eth_address),
            ("liquidated_user", params.liquidated_user, is_eth_address),
            ("debt_reserve", params.debt_reserve, is_eth_address),
            ("collateral_reserve", params.collateral_reserve, is_eth_address),
            ("purchase_amount", params.purchase_amount, is_positive_amount),
        ).raise_for_errors()

        txs: List[Transaction] = []
        decimals = await self.erc20.decimals_of(params.debt_reserve)
        converted = MAX_UINT_AMOUNT if params.liquidate_all else convert(params.purchase_amount, decimals)

        if not is_native(params.debt_reserve):
            approval = await self.erc20.plan_approval(
                params.debt_reserve, params.liquidator, self.lending_pool_address, params.purchase_amount
            )
            if approval:
                txs.append(approval)

        txs.append(self._pool_call(
            "liquidationCall",
            [to_checksum(params.collateral_reserve), to_checksum(params.debt_reserve),
             to_checksum(params.liquidated_user), int(converted), bool(params.get_a_token)],
            sender=params.liquidator,
            action=ProtocolAction.liquidationCall,
            prior=txs,
            value=get_tx_value(params.debt_reserve, converted),
        ))
        return txs

    @instrumented_action(ProtocolAction.swapCollateral)
    async def swap_collateral(self, params: SwapCollateralParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("from_asset", params.from_asset, is_eth_address),
            ("from_a_token", params.from_a_token, is_eth_address),
            ("to_asset", params.to_asset, is_eth_address),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            ("from_amount", params.from_amount, is_positive_amount),
            ("to_amount", params.to_amount, is_positive_amount),
            ("max_slippage", params.max_slippage, is_percentage),
            ("referral_code", params.referral_code, is_referral_code),
            optional=("on_behalf_of", "referral_code"),
        ).raise_for_errors()

        txs: List[Transaction] = []
        permit = params.permit_signature or PermitSignature.empty()
        adapter = self.addresses.swap_collateral_adapter

        approval = await self.erc20.plan_approval(params.from_a_token, params.user, adapter, params.from_amount)
        if approval:
            txs.append(approval)

        from_decimals = await self.erc20.decimals_of(params.from_asset)
        converted = convert(params.from_amount, from_decimals)
        to_decimals = await self.erc20.decimals_of(params.to_asset)
        min_received = self.flashloan.minimum_received(params.to_amount, params.max_slippage, to_decimals)

        if params.flash:
            premium = await self.flashloan.get_premium()
            if params.swap_all:
                flash_amount = convert(self.flashloan.amount_with_surplus(params.from_amount, self.surplus), from_decimals)
            else:
                flash_amount = self.flashloan.amount_after_fee(converted, premium)

            request = FlashLoanRequest(
                receiver=adapter,
                assets=[params.from_asset],
                amounts=[flash_amount],
                on_behalf_of=params.on_behalf_of or params.user,
                params=self.flashloan.encode_swap_collateral_params(
                    params.to_asset, min_received, params.swap_all, permit, params.use_eth_path
                ),
                referral_code=params.referral_code or 0,
            )
            txs.append(self.flashloan.build_flash_loan(request, params.user, ProtocolAction.swapCollateral, prior=txs))
            return txs

        txs.append(self.swap_adapter.swap_and_deposit(
            user=params.user,
            asset_to_swap_from=params.from_asset,
            asset_to_swap_to=params.to_asset,
            amount_to_swap=MAX_UINT_AMOUNT if params.swap_all else converted,
            min_amount_to_receive=min_received,
            permit_params=permit,
            use_eth_path=params.use_eth_path,
            prior=txs,
        ))
        return txs

    @instrumented_action(ProtocolAction.repayCollateral)
    async def repay_with_collateral(self, params: RepayWithCollateralParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("from_asset", params.from_asset, is_eth_address),
            ("from_a_token", params.from_a_token, is_eth_address),
            ("asset_to_repay", params.asset_to_repay, is_eth_address),
            ("on_behalf_of", params.on_behalf_of, is_eth_address),
            ("repay_with_amount", params.repay_with_amount, is_positive_amount),
            ("repay_amount", params.repay_amount, is_positive_amount),
            ("referral_code", params.referral_code, is_referral_code),
            optional=("on_behalf_of", "referral_code"),
        ).raise_for_errors()

        txs: List[Transaction] = []
        permit = params.permit_signature or PermitSignature.empty()
        adapter = self.addresses.repay_with_collateral_adapter

        approval = await self.erc20.plan_approval(params.from_a_token, params.user, adapter, params.repay_with_amount)
        if approval:
            txs.append(approval)

        from_decimals = await self.erc20.decimals_of(params.from_asset)
        converted_repay_with = convert(params.repay_with_amount, from_decimals)

        decimals = await self.erc20.decimals_of(params.asset_to_repay)
        if params.repay_all_debt:
            converted_repay = convert(self.flashloan.amount_with_surplus(params.repay_amount, self.surplus), decimals)
        else:
            converted_repay = convert(params.repay_amount, decimals)

        rate_mode = rate_mode_code(params.rate_mode)

        if params.flash:
            request = FlashLoanRequest(
                receiver=adapter,
                assets=[params.asset_to_repay],
                amounts=[converted_repay],
                on_behalf_of=params.on_behalf_of or params.user,
                params=self.flashloan.encode_repay_with_collateral_params(
                    params.from_asset, converted_repay_with, rate_mode, permit, params.use_eth_path
                ),
                referral_code=params.referral_code or 0,
            )
            txs.append(self.flashloan.build_flash_loan(request, params.user, ProtocolAction.repayCollateral, prior=txs))
            return txs

        txs.append(self.repay_adapter.swap_and_repay(
            user=params.user,
            collateral_asset=params.from_asset,
            debt_asset=params.asset_to_repay,
            collateral_amount=converted_repay_with,
            debt_repay_amount=converted_repay,
            debt_rate_mode=rate_mode,
            permit=permit,
            use_eth_path=params.use_eth_path,
            prior=txs,
        ))
        return txs

    @instrumented_action(ProtocolAction.liquidationFlash, user_field="initiator")
    async def flash_liquidation(self, params: FlashLiquidationParams) -> List[Transaction]:
        validate(
            ("user", params.user, is_eth_address),
            ("collateral_asset", params.collateral_asset, is_eth_address),
            ("borrowed_asset", params.borrowed_asset, is_eth_address),
            ("debt_token_cover", params.debt_token_cover, is_positive_amount),
            ("initiator", params.initiator, is_eth_address),
        ).raise_for_errors()

        decimals = await self.erc20.decimals_of(params.borrowed_asset)
        converted_debt = convert(params.debt_token_cover, decimals)

        if params.liquidate_all:
            debt_cover = MAX_UINT_AMOUNT
            flash_amount = convert(self.flashloan.flash_liquidation_surplus(params.debt_token_cover), decimals)
        else:
            debt_cover = converted_debt
            flash_amount = converted_debt

        request = FlashLoanRequest(
            receiver=self.addresses.flash_liquidation_adapter,
            assets=[params.borrowed_asset],
            amounts=[flash_amount],
            on_behalf_of=params.initiator,
            params=self.flashloan.encode_flash_liquidation_params(
                params.collateral_asset, params.borrowed_asset, params.user, debt_cover, params.use_eth_path
            ),
            referral_code=0,
        )
        return [self.flashloan.build_flash_loan(request, params.initiator, ProtocolAction.liquidationFlash)]


def create_lending_pool(
    contracts: ContractInterface,
    estimator: GasEstimator,
    addresses: MarketAddresses,
    balance_validator: BalanceValidator | None = None,
    surplus=SURPLUS,
) -> LendingPool:
    """Wires a LendingPool and its collaborators around one contract interface and gas estimator."""
    factory = TransactionFactory(contracts, GasEstimationChain(estimator))
    erc20 = ERC20Service(factory)
    return LendingPool(
        factory=factory,
        erc20=erc20,
        balance_validator=balance_validator or SynthetixValidator(contracts),
        weth_gateway=WETHGatewayService(factory, erc20, addresses.weth_gateway),
        swap_adapter=LiquiditySwapAdapterService(factory, addresses.swap_collateral_adapter),
        repay_adapter=RepayWithCollateralAdapterService(factory, addresses.repay_with_collateral_adapter),
        flashloan=FlashLoanParamsEncoder(factory, addresses.lending_pool),
        addresses=addresses,
        surplus=surplus,
    )
