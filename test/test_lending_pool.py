# Batch composition for every lending pool action, against canned chain reads.
import pytest
from eth_abi import decode

from txbuilder.abis import (
    DEBT_TOKEN_ABI,
    ERC20_ABI,
    LIQUIDITY_SWAP_ADAPTER_ABI,
    REPAY_WITH_COLLATERAL_ADAPTER_ABI,
    WETH_GATEWAY_ABI,
)
from txbuilder.core.constants import (
    API_ETH_MOCK_ADDRESS,
    MAX_UINT_AMOUNT,
    InterestRate,
    ProtocolAction,
    TxType,
)
from txbuilder.core.errors import InsufficientFundsError, MissingParameterError, ValidationError
from txbuilder.core.types import (
    BorrowParams,
    DepositParams,
    FlashLiquidationParams,
    LiquidationCallParams,
    RepayParams,
    RepayWithCollateralParams,
    SetUsageAsCollateralParams,
    SwapBorrowRateModeParams,
    SwapCollateralParams,
    WithdrawParams,
)
from txbuilder.core.config import settings
from txbuilder.services.flashloan import (
    FLASH_LIQUIDATION_PARAMS_TYPES,
    REPAY_WITH_COLLATERAL_PARAMS_TYPES,
    SWAP_COLLATERAL_PARAMS_TYPES,
)
from txbuilder.services.lending_pool import create_lending_pool

LENDING_POOL = "0x7d2768dE32b0b80b7a3454c06BdAc94A69DDc7A9"
WETH_GATEWAY = "0x2222222222222222222222222222222222222222"
SWAP_ADAPTER = "0x3333333333333333333333333333333333333333"
REPAY_ADAPTER = "0x4444444444444444444444444444444444444444"
FLASH_LIQUIDATION_ADAPTER = "0x5555555555555555555555555555555555555555"
USER = "0x1111111111111111111111111111111111111111"
OTHER = "0x9999999999999999999999999999999999999999"
USDC_ADDR = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH_ADDR = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
A_WETH = "0x6666666666666666666666666666666666666666"
DEBT_WETH = "0x7777777777777777777777777777777777777777"
A_USDC = "0x8888888888888888888888888888888888888888"
MAX = int(MAX_UINT_AMOUNT)


@pytest.fixture
def usdc(contracts):
    contracts.set_decimals(USDC_ADDR, 6)
    contracts.set_allowance(USDC_ADDR, USER, LENDING_POOL, 0)
    return USDC_ADDR


# --- deposit ---

@pytest.mark.asyncio
async def test_deposit_prepends_approval_when_allowance_short(pool, contracts, usdc):
    txs = await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="10"))

    assert [t.tx_type for t in txs] == [TxType.ERC20_APPROVAL, TxType.DLP_ACTION]
    assert txs[0].to == USDC_ADDR
    method, args = contracts.decode(USDC_ADDR, ERC20_ABI, txs[0].data)
    assert (method, args["spender"]) == ("approve", LENDING_POOL)

    assert txs[1].to == LENDING_POOL
    assert txs[1].sender == USER
    assert txs[1].value == 0
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[1].data)
    assert method == "deposit"
    assert args["asset"] == USDC_ADDR
    assert args["amount"] == 10_000_000
    assert args["onBehalfOf"] == USER
    assert args["referralCode"] == 0


@pytest.mark.asyncio
async def test_deposit_without_approval_when_allowance_covers(pool, contracts, usdc):
    contracts.set_allowance(USDC_ADDR, USER, LENDING_POOL, 10_000_000)
    txs = await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="10", on_behalf_of=OTHER, referral_code=7))

    assert len(txs) == 1
    _, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert args["onBehalfOf"] == OTHER
    assert args["referralCode"] == 7


@pytest.mark.asyncio
async def test_deposit_insufficient_funds_returns_nothing(pool, balance, estimator, usdc):
    balance.result = False
    with pytest.raises(InsufficientFundsError) as exc:
        await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="10"))
    assert str(exc.value) == "Not enough funds to execute operation"
    assert balance.calls == [(USER, USDC_ADDR, "10000000")]
    assert estimator.requests == []


@pytest.mark.asyncio
async def test_native_deposit_goes_through_the_gateway(pool, contracts):
    txs = await pool.deposit(DepositParams(user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1.5"))

    assert len(txs) == 1
    assert txs[0].to == WETH_GATEWAY
    assert txs[0].value == 15 * 10**17
    method, args = contracts.decode(WETH_GATEWAY, WETH_GATEWAY_ABI, txs[0].data)
    assert method == "depositETH"
    assert args["lendingPool"] == LENDING_POOL
    assert args["onBehalfOf"] == USER
    assert contracts.reads == []


@pytest.mark.asyncio
@pytest.mark.parametrize("field,overrides", [
    ("amount", {"amount": "0"}),
    ("amount", {"amount": "-5"}),
    ("reserve", {"reserve": "0x123"}),
    ("on_behalf_of", {"on_behalf_of": "nope"}),
])
async def test_deposit_rejects_invalid_input_before_any_read(pool, contracts, field, overrides):
    params = {"user": USER, "reserve": USDC_ADDR, "amount": "1", **overrides}
    with pytest.raises(ValidationError) as exc:
        await pool.deposit(DepositParams(**params))
    assert exc.value.fields == [field]
    assert contracts.reads == []


# --- withdraw ---

@pytest.mark.asyncio
async def test_withdraw_all_uses_max_uint(pool, contracts, usdc):
    txs = await pool.withdraw(WithdrawParams(user=USER, reserve=usdc, amount="-1"))

    assert len(txs) == 1
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "withdraw"
    assert args["amount"] == MAX
    assert args["to"] == USER


@pytest.mark.asyncio
async def test_native_withdraw_requires_a_token(pool, contracts):
    with pytest.raises(MissingParameterError) as exc:
        await pool.withdraw(WithdrawParams(user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1"))
    assert exc.value.field == "a_token_address"
    assert contracts.reads == []


@pytest.mark.asyncio
async def test_native_withdraw_approves_the_gateway_for_a_token(pool, contracts):
    contracts.set_decimals(A_WETH, 18)
    contracts.set_allowance(A_WETH, USER, WETH_GATEWAY, 0)

    txs = await pool.withdraw(WithdrawParams(
        user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1", a_token_address=A_WETH
    ))

    assert [t.action for t in txs] == [ProtocolAction.approval, ProtocolAction.withdrawETH]
    assert txs[0].to == A_WETH
    _, args = contracts.decode(A_WETH, ERC20_ABI, txs[0].data)
    assert args["spender"] == WETH_GATEWAY
    method, args = contracts.decode(WETH_GATEWAY, WETH_GATEWAY_ABI, txs[1].data)
    assert method == "withdrawETH"
    assert args["amount"] == 10**18


# --- borrow ---

@pytest.mark.asyncio
@pytest.mark.parametrize("mode,code", [(InterestRate.STABLE, 1), (InterestRate.VARIABLE, 2)])
async def test_borrow_encodes_rate_mode(pool, contracts, usdc, mode, code):
    txs = await pool.borrow(BorrowParams(user=USER, reserve=usdc, amount="100", interest_rate_mode=mode))

    assert len(txs) == 1
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "borrow"
    assert args["amount"] == 100_000_000
    assert args["interestRateMode"] == code
    assert args["onBehalfOf"] == USER


@pytest.mark.asyncio
async def test_borrow_rejects_rate_mode_none(pool, usdc):
    with pytest.raises(ValidationError) as exc:
        await pool.borrow(BorrowParams(user=USER, reserve=usdc, amount="1", interest_rate_mode=InterestRate.NONE))
    assert exc.value.fields == ["interest_rate_mode"]


@pytest.mark.asyncio
async def test_native_borrow_requires_debt_token(pool, contracts):
    with pytest.raises(MissingParameterError) as exc:
        await pool.borrow(BorrowParams(
            user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1", interest_rate_mode=InterestRate.VARIABLE
        ))
    assert exc.value.field == "debt_token_address"
    assert contracts.reads == []


@pytest.mark.asyncio
async def test_native_borrow_delegates_credit_when_short(pool, contracts):
    contracts.set_borrow_allowance(DEBT_WETH, USER, WETH_GATEWAY, 0)

    txs = await pool.borrow(BorrowParams(
        user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1",
        interest_rate_mode=InterestRate.VARIABLE, debt_token_address=DEBT_WETH,
    ))

    assert [t.action for t in txs] == [ProtocolAction.creditDelegationApproval, ProtocolAction.borrowETH]
    method, args = contracts.decode(DEBT_WETH, DEBT_TOKEN_ABI, txs[0].data)
    assert method == "approveDelegation"
    assert args["delegatee"] == WETH_GATEWAY
    assert args["amount"] == MAX
    method, args = contracts.decode(WETH_GATEWAY, WETH_GATEWAY_ABI, txs[1].data)
    assert method == "borrowETH"
    assert args["amount"] == 10**18


@pytest.mark.asyncio
async def test_native_borrow_skips_delegation_when_allowed(pool, contracts):
    contracts.set_borrow_allowance(DEBT_WETH, USER, WETH_GATEWAY, MAX)
    txs = await pool.borrow(BorrowParams(
        user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="1",
        interest_rate_mode=InterestRate.STABLE, debt_token_address=DEBT_WETH,
    ))
    assert [t.action for t in txs] == [ProtocolAction.borrowETH]


# --- repay ---

@pytest.mark.asyncio
async def test_repay_all_skips_funds_check(pool, contracts, balance, usdc):
    txs = await pool.repay(RepayParams(
        user=USER, reserve=usdc, amount="-1", interest_rate_mode=InterestRate.VARIABLE
    ))

    assert balance.calls == []
    assert len(txs) == 2
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[1].data)
    assert method == "repay"
    assert args["amount"] == MAX
    assert args["rateMode"] == 2


@pytest.mark.asyncio
async def test_repay_fixed_amount_checks_funds(pool, balance, usdc):
    await pool.repay(RepayParams(user=USER, reserve=usdc, amount="5", interest_rate_mode=InterestRate.STABLE))
    assert balance.calls == [(USER, USDC_ADDR, "5000000")]


@pytest.mark.asyncio
async def test_native_repay_attaches_value(pool, contracts):
    txs = await pool.repay(RepayParams(
        user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="2", interest_rate_mode=InterestRate.VARIABLE
    ))
    assert txs[0].to == WETH_GATEWAY
    assert txs[0].value == 2 * 10**18
    method, _ = contracts.decode(WETH_GATEWAY, WETH_GATEWAY_ABI, txs[0].data)
    assert method == "repayETH"


@pytest.mark.asyncio
async def test_native_repay_all_is_rejected(pool):
    with pytest.raises(ValidationError):
        await pool.repay(RepayParams(
            user=USER, reserve=API_ETH_MOCK_ADDRESS, amount="-1", interest_rate_mode=InterestRate.VARIABLE
        ))


# --- pass-through actions ---

@pytest.mark.asyncio
async def test_swap_borrow_rate_mode_needs_no_reads(pool, contracts):
    txs = await pool.swap_borrow_rate_mode(SwapBorrowRateModeParams(
        user=USER, reserve=USDC_ADDR, interest_rate_mode=InterestRate.STABLE
    ))
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "swapBorrowRateMode"
    assert args["rateMode"] == 1
    assert contracts.reads == []


@pytest.mark.asyncio
async def test_set_usage_as_collateral(pool, contracts):
    txs = await pool.set_usage_as_collateral(SetUsageAsCollateralParams(
        user=USER, reserve=USDC_ADDR, usage_as_collateral=False
    ))
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "setUserUseReserveAsCollateral"
    assert args["useAsCollateral"] is False
    assert contracts.reads == []


# --- liquidation ---

@pytest.mark.asyncio
async def test_liquidation_all_covers_max_and_reads_only_debt_decimals(pool, contracts, usdc):
    contracts.set_allowance(USDC_ADDR, USER, LENDING_POOL, MAX)

    txs = await pool.liquidation_call(LiquidationCallParams(
        liquidator=USER, liquidated_user=OTHER, debt_reserve=usdc, collateral_reserve=WETH_ADDR,
        purchase_amount="1", get_a_token=True, liquidate_all=True,
    ))

    assert len(txs) == 1
    assert txs[0].sender == USER
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "liquidationCall"
    assert args["collateralAsset"] == WETH_ADDR
    assert args["debtAsset"] == USDC_ADDR
    assert args["user"] == OTHER
    assert args["debtToCover"] == MAX
    assert args["receiveAToken"] is True
    assert all(r[0] != WETH_ADDR.lower() for r in contracts.reads)


@pytest.mark.asyncio
async def test_liquidation_with_native_debt_attaches_value(pool, contracts):
    txs = await pool.liquidation_call(LiquidationCallParams(
        liquidator=USER, liquidated_user=OTHER, debt_reserve=API_ETH_MOCK_ADDRESS,
        collateral_reserve=USDC_ADDR, purchase_amount="1",
    ))
    assert len(txs) == 1
    assert txs[0].value == 10**18
    assert contracts.reads == []


# --- swap collateral ---

@pytest.fixture
def swap_setup(contracts):
    contracts.set_decimals(USDC_ADDR, 6)
    contracts.set_decimals(WETH_ADDR, 18)
    contracts.set_decimals(A_USDC, 6)
    contracts.set_allowance(A_USDC, USER, SWAP_ADAPTER, 0)
    contracts.set_premium(LENDING_POOL, 9)


def _swap_params(**overrides):
    params = dict(
        user=USER, from_asset=USDC_ADDR, from_a_token=A_USDC, to_asset=WETH_ADDR,
        from_amount="1", to_amount="100", max_slippage="1", flash=True,
    )
    params.update(overrides)
    return SwapCollateralParams(**params)


@pytest.mark.asyncio
async def test_swap_collateral_flash_borrows_amount_net_of_premium(pool, contracts, swap_setup):
    txs = await pool.swap_collateral(_swap_params())

    assert [t.action for t in txs] == [ProtocolAction.approval, ProtocolAction.swapCollateral]
    _, args = contracts.decode(A_USDC, ERC20_ABI, txs[0].data)
    assert args["spender"] == SWAP_ADAPTER

    method, args = contracts.decode_pool_call(LENDING_POOL, txs[1].data)
    assert method == "flashLoan"
    assert args["receiverAddress"] == SWAP_ADAPTER
    assert args["assets"] == [USDC_ADDR]
    assert args["amounts"] == [999100]
    assert args["modes"] == [0]
    assert args["onBehalfOf"] == USER
    decoded = decode(SWAP_COLLATERAL_PARAMS_TYPES, args["params"])
    assert [a.lower() for a in decoded[0]] == [WETH_ADDR.lower()]
    assert list(decoded[1]) == [99 * 10**18]
    assert list(decoded[2]) == [False]


@pytest.mark.asyncio
async def test_swap_collateral_flash_swap_all_adds_surplus(pool, contracts, swap_setup):
    txs = await pool.swap_collateral(_swap_params(swap_all=True))

    _, args = contracts.decode_pool_call(LENDING_POOL, txs[-1].data)
    assert args["amounts"] == [1000500]
    assert list(decode(SWAP_COLLATERAL_PARAMS_TYPES, args["params"])[2]) == [True]


@pytest.mark.asyncio
async def test_swap_collateral_refetches_premium(pool, contracts, swap_setup):
    first = await pool.swap_collateral(_swap_params())
    contracts.set_premium(LENDING_POOL, 5)
    second = await pool.swap_collateral(_swap_params())

    assert contracts.decode_pool_call(LENDING_POOL, first[-1].data)[1]["amounts"] == [999100]
    assert contracts.decode_pool_call(LENDING_POOL, second[-1].data)[1]["amounts"] == [999500]
    assert len([r for r in contracts.reads if r[1] == "FLASHLOAN_PREMIUM_TOTAL"]) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("swap_all,amount", [(False, 1_000_000), (True, MAX)])
async def test_swap_collateral_direct_calls_adapter(pool, contracts, swap_setup, swap_all, amount):
    txs = await pool.swap_collateral(_swap_params(flash=False, swap_all=swap_all))

    assert txs[-1].to == SWAP_ADAPTER
    method, args = contracts.decode(SWAP_ADAPTER, LIQUIDITY_SWAP_ADAPTER_ABI, txs[-1].data)
    assert method == "swapAndDeposit"
    assert args["assetToSwapFromList"] == [USDC_ADDR]
    assert args["assetToSwapToList"] == [WETH_ADDR]
    assert args["amountToSwapList"] == [amount]
    assert args["minAmountsToReceive"] == [99 * 10**18]
    assert not any(r[1] == "FLASHLOAN_PREMIUM_TOTAL" for r in contracts.reads)


# --- repay with collateral ---

@pytest.fixture
def repay_setup(contracts):
    contracts.set_decimals(USDC_ADDR, 6)
    contracts.set_decimals(WETH_ADDR, 18)
    contracts.set_decimals(A_WETH, 18)
    contracts.set_allowance(A_WETH, USER, REPAY_ADAPTER, MAX)


def _repay_params(**overrides):
    params = dict(
        user=USER, from_asset=WETH_ADDR, from_a_token=A_WETH, asset_to_repay=USDC_ADDR,
        repay_with_amount="2", repay_amount="100", rate_mode=InterestRate.VARIABLE, flash=True,
    )
    params.update(overrides)
    return RepayWithCollateralParams(**params)


@pytest.mark.asyncio
async def test_repay_with_collateral_flash(pool, contracts, repay_setup):
    txs = await pool.repay_with_collateral(_repay_params())

    assert len(txs) == 1
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "flashLoan"
    assert args["receiverAddress"] == REPAY_ADAPTER
    assert args["assets"] == [USDC_ADDR]
    assert args["amounts"] == [100_000_000]
    decoded = decode(REPAY_WITH_COLLATERAL_PARAMS_TYPES, args["params"])
    assert decoded[0].lower() == WETH_ADDR.lower()
    assert decoded[1] == 2 * 10**18
    assert decoded[2] == 2


@pytest.mark.asyncio
async def test_repay_with_collateral_all_debt_adds_surplus(pool, contracts, repay_setup):
    txs = await pool.repay_with_collateral(_repay_params(repay_all_debt=True))
    _, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert args["amounts"] == [100_050_000]


@pytest.mark.asyncio
async def test_repay_with_collateral_direct(pool, contracts, repay_setup):
    txs = await pool.repay_with_collateral(_repay_params(flash=False, rate_mode=None))

    assert txs[0].to == REPAY_ADAPTER
    method, args = contracts.decode(REPAY_ADAPTER, REPAY_WITH_COLLATERAL_ADAPTER_ABI, txs[0].data)
    assert method == "swapAndRepay"
    assert args["collateralAsset"] == WETH_ADDR
    assert args["debtAsset"] == USDC_ADDR
    assert args["collateralAmount"] == 2 * 10**18
    assert args["debtRepayAmount"] == 100_000_000
    assert args["debtRateMode"] == 0


# --- flash liquidation ---

@pytest.mark.asyncio
@pytest.mark.parametrize("liquidate_all,flash_amount,cover", [
    (False, 2_000_000, 2_000_000),
    (True, 2_040_000, MAX),
])
async def test_flash_liquidation(pool, contracts, liquidate_all, flash_amount, cover):
    contracts.set_decimals(USDC_ADDR, 6)

    txs = await pool.flash_liquidation(FlashLiquidationParams(
        user=OTHER, collateral_asset=WETH_ADDR, borrowed_asset=USDC_ADDR,
        debt_token_cover="2", initiator=USER, liquidate_all=liquidate_all,
    ))

    assert len(txs) == 1
    assert txs[0].sender == USER
    assert txs[0].action == ProtocolAction.liquidationFlash
    method, args = contracts.decode_pool_call(LENDING_POOL, txs[0].data)
    assert method == "flashLoan"
    assert args["receiverAddress"] == FLASH_LIQUIDATION_ADAPTER
    assert args["amounts"] == [flash_amount]
    assert args["onBehalfOf"] == USER
    assert args["referralCode"] == 0
    _, _, user, debt_cover, _ = decode(FLASH_LIQUIDATION_PARAMS_TYPES, args["params"])
    assert user.lower() == OTHER.lower()
    assert debt_cover == cover
    assert not any(r[1] == "FLASHLOAN_PREMIUM_TOTAL" for r in contracts.reads)


# --- batch properties ---

@pytest.mark.asyncio
async def test_same_request_builds_same_batch(pool, usdc):
    params = DepositParams(user=USER, reserve=usdc, amount="3.25")
    first = await pool.deposit(params)
    second = await pool.deposit(params)
    assert [t.to_tx_params() for t in first] == [t.to_tx_params() for t in second]


@pytest.mark.asyncio
async def test_gas_is_deferred_and_sees_earlier_approval(pool, estimator, usdc):
    """
    GIVEN a deposit that needs an approval
    WHEN the batch is built
    THEN no estimate runs until the deposit's gas is awaited, and the approval is passed along
    """
    txs = await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="1"))
    assert estimator.requests == []

    await txs[1].gas()

    prior, tx, action = estimator.requests[0]
    assert prior == [txs[0].to_tx_params()]
    assert tx == txs[1].to_tx_params()
    assert action == ProtocolAction.deposit


@pytest.mark.asyncio
async def test_read_failures_propagate(pool, contracts):
    contracts.set_failure(USDC_ADDR, "decimals", ConnectionError("node unreachable"))
    with pytest.raises(ConnectionError):
        await pool.deposit(DepositParams(user=USER, reserve=USDC_ADDR, amount="1"))


@pytest.mark.asyncio
async def test_default_funds_check_only_reads_for_snx(contracts, estimator, market, usdc, monkeypatch):
    monkeypatch.setattr(settings, "SYNTHETIX_PROXY_ADDRESS", None)
    pool = create_lending_pool(contracts, estimator, market)

    txs = await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="1"))

    assert len(txs) == 2
    assert not any(r[1] == "balanceOf" for r in contracts.reads)


@pytest.mark.asyncio
async def test_liquidation_prepends_debt_approval_when_allowance_short(pool, contracts, estimator, usdc):
    txs = await pool.liquidation_call(LiquidationCallParams(
        liquidator=USER, liquidated_user=OTHER, debt_reserve=usdc, collateral_reserve=WETH_ADDR,
        purchase_amount="1",
    ))

    assert [t.action for t in txs] == [ProtocolAction.approval, ProtocolAction.liquidationCall]
    assert txs[0].to == USDC_ADDR
    _, args = contracts.decode(USDC_ADDR, ERC20_ABI, txs[0].data)
    assert args["spender"] == LENDING_POOL
    _, args = contracts.decode_pool_call(LENDING_POOL, txs[1].data)
    assert args["debtToCover"] == 1_000_000

    await txs[1].gas()
    assert estimator.requests[0][0] == [txs[0].to_tx_params()]


@pytest.mark.asyncio
async def test_repay_with_collateral_approves_a_token_to_adapter_when_short(pool, contracts, repay_setup):
    contracts.set_allowance(A_WETH, USER, REPAY_ADAPTER, 0)

    txs = await pool.repay_with_collateral(_repay_params())

    assert [t.tx_type for t in txs] == [TxType.ERC20_APPROVAL, TxType.DLP_ACTION]
    assert txs[0].to == A_WETH
    method, args = contracts.decode(A_WETH, ERC20_ABI, txs[0].data)
    assert (method, args["spender"], args["amount"]) == ("approve", REPAY_ADAPTER, MAX)
    method, _ = contracts.decode_pool_call(LENDING_POOL, txs[1].data)
    assert method == "flashLoan"


@pytest.mark.asyncio
async def test_swap_collateral_rejects_slippage_over_100_percent(pool, contracts, swap_setup):
    with pytest.raises(ValidationError) as exc:
        await pool.swap_collateral(_swap_params(max_slippage="150"))
    assert exc.value.fields == ["max_slippage"]
    assert contracts.reads == []


@pytest.mark.asyncio
async def test_referral_code_must_fit_uint16(pool, contracts, usdc):
    with pytest.raises(ValidationError) as exc:
        await pool.deposit(DepositParams(user=USER, reserve=usdc, amount="1", referral_code=70000))
    assert exc.value.fields == ["referral_code"]
    assert contracts.reads == []
