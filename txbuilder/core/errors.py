# /txbuilder/core/errors.py
from typing import List


class TxBuilderError(Exception):
    """Base class for every error raised while composing a batch."""


class ValidationError(TxBuilderError):
    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Invalid parameters: {', '.join(self.fields)}")


class MissingParameterError(TxBuilderError):
    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing required parameter: {field}")


class AmountFormatError(TxBuilderError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Not a valid non-negative decimal amount: {amount!r}")


class InsufficientFundsError(TxBuilderError):
    def __init__(self, user: str, reserve: str, amount: str):
        self.user = user
        self.reserve = reserve
        self.amount = amount
        super().__init__("Not enough funds to execute operation")
