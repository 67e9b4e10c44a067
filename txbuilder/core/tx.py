# /txbuilder/core/tx.py
# Unsigned transaction descriptors. Nothing here signs or broadcasts.
from typing import Any, Awaitable, Callable, Dict, List

from pydantic import BaseModel

from txbuilder.core.constants import ProtocolAction, TxType


class GasEstimate(BaseModel):
    gas_limit: int
    gas_price: int


class Transaction(BaseModel):
    """One call of a batch, ready to be signed by the caller."""
    to: str
    data: str
    sender: str
    value: int = 0
    tx_type: TxType = TxType.DLP_ACTION
    action: ProtocolAction = ProtocolAction.default
    # Deferred: nothing touches the node until the caller awaits it.
    gas: Callable[[], Awaitable[GasEstimate]]

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    def to_tx_params(self) -> Dict[str, Any]:
        return {
            "from": self.sender,
            "to": self.to,
            "data": self.data,
            "value": self.value,
        }


TransactionBatch = List[Transaction]
