# /txbuilder/core/constants.py
from enum import Enum

from txbuilder.core.config import settings

# Placeholder the lending pool API uses for the chain's native coin.
API_ETH_MOCK_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MAX_UINT_AMOUNT = str(2**256 - 1)
DEFAULT_APPROVE_AMOUNT = MAX_UINT_AMOUNT
USE_ALL_AMOUNT = "-1"

NATIVE_DECIMALS = 18

# Percent added on top of flash-borrowed amounts so repay/swap completion covers fees.
SURPLUS = settings.SURPLUS_PERCENT

ZERO_BYTES32 = "0x" + "00" * 32


class InterestRate(str, Enum):
    NONE = "None"
    STABLE = "Stable"
    VARIABLE = "Variable"


RATE_MODE_CODES = {
    InterestRate.NONE: 0,
    InterestRate.STABLE: 1,
    InterestRate.VARIABLE: 2,
}


class TxType(str, Enum):
    ERC20_APPROVAL = "ERC20_APPROVAL"
    DLP_ACTION = "DLP_ACTION"


class ProtocolAction(str, Enum):
    default = "default"
    deposit = "deposit"
    withdraw = "withdraw"
    withdrawETH = "withdrawETH"
    borrow = "borrow"
    borrowETH = "borrowETH"
    repay = "repay"
    repayETH = "repayETH"
    swapBorrowRateMode = "swapBorrowRateMode"
    setUsageAsCollateral = "setUsageAsCollateral"
    liquidationCall = "liquidationCall"
    liquidationFlash = "liquidationFlash"
    swapCollateral = "swapCollateral"
    repayCollateral = "repayCollateral"
    approval = "approval"
    creditDelegationApproval = "creditDelegationApproval"


# Used when a batch still holds unsubmitted transactions a node cannot estimate against.
GAS_LIMIT_RECOMMENDATIONS = {
    ProtocolAction.default: 210_000,
    ProtocolAction.deposit: 300_000,
    ProtocolAction.withdraw: 230_000,
    ProtocolAction.withdrawETH: 640_000,
    ProtocolAction.borrow: 300_000,
    ProtocolAction.borrowETH: 450_000,
    ProtocolAction.repay: 300_000,
    ProtocolAction.repayETH: 350_000,
    ProtocolAction.swapBorrowRateMode: 210_000,
    ProtocolAction.setUsageAsCollateral: 210_000,
    ProtocolAction.liquidationCall: 700_000,
    ProtocolAction.liquidationFlash: 850_000,
    ProtocolAction.swapCollateral: 700_000,
    ProtocolAction.repayCollateral: 700_000,
    ProtocolAction.approval: 65_000,
    ProtocolAction.creditDelegationApproval: 55_000,
}


def is_native(reserve: str) -> bool:
    return reserve.lower() == API_ETH_MOCK_ADDRESS.lower()


def rate_mode_code(mode: InterestRate | None) -> int:
    if mode is None:
        return 0
    return RATE_MODE_CODES[InterestRate(mode)]
