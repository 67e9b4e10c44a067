# /txbuilder/core/types.py
# Request shapes accepted by the lending pool service.
from pydantic import BaseModel

from txbuilder.core.constants import InterestRate, ZERO_BYTES32


class PermitSignature(BaseModel):
    amount: str
    deadline: str
    v: int
    r: str
    s: str

    @classmethod
    def empty(cls) -> "PermitSignature":
        """Zero-valued placeholder keeping encoded calls the same shape without a permit."""
        return cls(amount="0", deadline="0", v=0, r=ZERO_BYTES32, s=ZERO_BYTES32)

    def as_tuple(self) -> tuple:
        return (int(self.amount), int(self.deadline), self.v, _bytes32(self.r), _bytes32(self.s))


def _bytes32(value: str) -> bytes:
    raw = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    return raw.rjust(32, b"\x00")


class DepositParams(BaseModel):
    user: str
    reserve: str
    amount: str
    on_behalf_of: str | None = None
    referral_code: int | None = None


class WithdrawParams(BaseModel):
    user: str
    reserve: str
    amount: str
    on_behalf_of: str | None = None
    a_token_address: str | None = None


class BorrowParams(BaseModel):
    user: str
    reserve: str
    amount: str
    interest_rate_mode: InterestRate
    debt_token_address: str | None = None
    on_behalf_of: str | None = None
    referral_code: int | None = None


class RepayParams(BaseModel):
    user: str
    reserve: str
    amount: str
    interest_rate_mode: InterestRate
    on_behalf_of: str | None = None


class SwapBorrowRateModeParams(BaseModel):
    user: str
    reserve: str
    interest_rate_mode: InterestRate


class SetUsageAsCollateralParams(BaseModel):
    user: str
    reserve: str
    usage_as_collateral: bool


class LiquidationCallParams(BaseModel):
    liquidator: str
    liquidated_user: str
    debt_reserve: str
    collateral_reserve: str
    purchase_amount: str
    get_a_token: bool = False
    liquidate_all: bool = False


class SwapCollateralParams(BaseModel):
    user: str
    from_asset: str
    from_a_token: str
    to_asset: str
    from_amount: str
    to_amount: str
    max_slippage: str
    flash: bool = False
    permit_signature: PermitSignature | None = None
    swap_all: bool = False
    on_behalf_of: str | None = None
    referral_code: int | None = None
    use_eth_path: bool = False


class RepayWithCollateralParams(BaseModel):
    user: str
    from_asset: str
    from_a_token: str
    asset_to_repay: str
    repay_with_amount: str
    repay_amount: str
    permit_signature: PermitSignature | None = None
    repay_all_debt: bool = False
    rate_mode: InterestRate | None = None
    on_behalf_of: str | None = None
    referral_code: int | None = None
    flash: bool = False
    use_eth_path: bool = False


class FlashLiquidationParams(BaseModel):
    user: str
    collateral_asset: str
    borrowed_asset: str
    debt_token_cover: str
    initiator: str
    liquidate_all: bool = False
    use_eth_path: bool = False
