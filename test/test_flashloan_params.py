# Flash-loan numeric adjustments and adapter parameter schemas.
from decimal import Decimal

from eth_abi import decode

from txbuilder.core.constants import ZERO_BYTES32
from txbuilder.core.types import PermitSignature
from txbuilder.services.flashloan import (
    FLASH_LIQUIDATION_PARAMS_TYPES,
    REPAY_WITH_COLLATERAL_PARAMS_TYPES,
    SWAP_COLLATERAL_PARAMS_TYPES,
    FlashLoanParamsEncoder,
    FlashLoanRequest,
)

WETH_ADDR = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC_ADDR = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USER = "0x1111111111111111111111111111111111111111"


def test_premium_is_subtracted_in_basis_points():
    assert FlashLoanParamsEncoder.amount_after_fee("1000000", 9) == "999100"
    assert FlashLoanParamsEncoder.amount_after_fee("1000000", 0) == "1000000"


def test_premium_rounds_fee_down():
    # 1234 * 9 / 10000 = 1.1106 -> fee of 1
    assert FlashLoanParamsEncoder.amount_after_fee("1234", 9) == "1233"


def test_surplus_adds_percent_of_amount():
    assert Decimal(FlashLoanParamsEncoder.amount_with_surplus("100", "0.05")) == Decimal("100.05")
    assert Decimal(FlashLoanParamsEncoder.amount_with_surplus("1", "10")) == Decimal("1.1")


def test_minimum_received_applies_slippage_in_destination_units():
    assert FlashLoanParamsEncoder.minimum_received("100", "1", 0) == "99"
    assert FlashLoanParamsEncoder.minimum_received("100", "0.5", 6) == "99500000"


def test_flash_liquidation_surplus_squares_the_cover():
    assert Decimal(FlashLoanParamsEncoder.flash_liquidation_surplus("2")) == Decimal("2.04")
    assert Decimal(FlashLoanParamsEncoder.flash_liquidation_surplus("10")) == Decimal("11")


def test_flash_loan_modes_are_always_zero():
    request = FlashLoanRequest(
        receiver=USER, assets=[USDC_ADDR, WETH_ADDR], amounts=["1", "2"], on_behalf_of=USER, params=b"",
    )
    assert request.modes == [0, 0]


def test_swap_collateral_schema_with_placeholder_permit():
    blob = FlashLoanParamsEncoder.encode_swap_collateral_params(
        WETH_ADDR, "99", True, PermitSignature.empty(), False
    )
    decoded = decode(SWAP_COLLATERAL_PARAMS_TYPES, blob)
    to_asset, min_received, swap_all, permit_amount, deadline, v, r, s, use_eth_path = decoded
    assert [a.lower() for a in to_asset] == [WETH_ADDR.lower()]
    assert list(min_received) == [99]
    assert list(swap_all) == [True]
    assert list(permit_amount) == [0] and list(deadline) == [0] and list(v) == [0]
    assert list(r) == [bytes.fromhex(ZERO_BYTES32[2:])]
    assert list(s) == [bytes(32)]
    assert list(use_eth_path) == [False]


def test_repay_with_collateral_schema_with_permit():
    permit = PermitSignature(amount="5", deadline="1700000000", v=27, r="0x" + "ab" * 32, s="0x" + "cd" * 32)
    blob = FlashLoanParamsEncoder.encode_repay_with_collateral_params(USDC_ADDR, "5000000", 2, permit, True)
    decoded = decode(REPAY_WITH_COLLATERAL_PARAMS_TYPES, blob)
    assert decoded[0].lower() == USDC_ADDR.lower()
    assert decoded[1:6] == (5000000, 2, 5, 1700000000, 27)
    assert decoded[6] == bytes.fromhex("ab" * 32)
    assert decoded[7] == bytes.fromhex("cd" * 32)
    assert decoded[8] is True


def test_flash_liquidation_schema():
    blob = FlashLoanParamsEncoder.encode_flash_liquidation_params(WETH_ADDR, USDC_ADDR, USER, "42", False)
    collateral, borrowed, user, cover, use_eth_path = decode(FLASH_LIQUIDATION_PARAMS_TYPES, blob)
    assert (collateral.lower(), borrowed.lower(), user.lower()) == (WETH_ADDR.lower(), USDC_ADDR.lower(), USER)
    assert cover == 42
    assert use_eth_path is False
