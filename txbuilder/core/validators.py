# /txbuilder/core/validators.py
# Explicit precondition checks run at the top of every lending pool action.
from typing import Any, Callable, List, Tuple

from pydantic import BaseModel, Field
from web3 import Web3

from txbuilder.core.amounts import parse_decimal
from txbuilder.core.constants import USE_ALL_AMOUNT, InterestRate
from txbuilder.core.errors import AmountFormatError, ValidationError


class ValidationResult(BaseModel):
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self):
        if self.errors:
            raise ValidationError(self.errors)


def is_eth_address(value: Any, optional: bool = False) -> bool:
    if value is None:
        return optional
    return isinstance(value, str) and Web3.is_address(value)


def is_positive_amount(value: Any, optional: bool = False) -> bool:
    if value is None:
        return optional
    try:
        return parse_decimal(value) > 0
    except AmountFormatError:
        return False


def is_positive_or_minus_one_amount(value: Any, optional: bool = False) -> bool:
    if str(value).strip() == USE_ALL_AMOUNT:
        return True
    return is_positive_amount(value, optional)


Check = Tuple[str, Any, Callable[..., bool]]


def validate(*checks: Check, optional: Tuple[str, ...] = ()) -> ValidationResult:
    """
    Runs ``(field_name, value, predicate)`` checks and collects failing field names.

    Fields listed in ``optional`` pass when their value is None.
    """
    result = ValidationResult()
    for name, value, predicate in checks:
        if not predicate(value, optional=name in optional):
            result.errors.append(name)
    return result


def is_non_negative_amount(value: Any, optional: bool = False) -> bool:
    if value is None:
        return optional
    try:
        parse_decimal(value)
        return True
    except AmountFormatError:
        return False


def is_borrow_rate_mode(value: Any, optional: bool = False) -> bool:
    if value is None:
        return optional
    return value in (InterestRate.STABLE, InterestRate.VARIABLE)


def is_percentage(value: Any, optional: bool = False) -> bool:
    if value is None:
        return optional
    try:
        return parse_decimal(value) <= 100
    except AmountFormatError:
        return False


def is_referral_code(value: Any, optional: bool = False) -> bool:
    # uint16 on-chain
    if value is None:
        return optional
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFFFF
