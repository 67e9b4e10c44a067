# /txbuilder/core/factory.py
from typing import List, Sequence

from txbuilder.core.constants import ProtocolAction, TxType
from txbuilder.core.contracts import ContractInterface, to_checksum
from txbuilder.core.gas import GasEstimationChain
from txbuilder.core.tx import Transaction


class TransactionFactory:
    """Turns (contract, method, args) into a Transaction with a bound gas estimate."""
    def __init__(self, contracts: ContractInterface, gas_chain: GasEstimationChain):
        self.contracts = contracts
        self.gas_chain = gas_chain

    def build(
        self,
        *,
        to: str,
        abi: List[dict],
        method: str,
        args: Sequence,
        sender: str,
        value: int = 0,
        tx_type: TxType = TxType.DLP_ACTION,
        action: ProtocolAction = ProtocolAction.default,
        prior: Sequence[Transaction] = (),
    ) -> Transaction:
        to = to_checksum(to)
        sender = to_checksum(sender)
        data = self.contracts.encode(to, abi, method, *args)
        params = {"from": sender, "to": to, "data": data, "value": int(value)}
        return Transaction(
            to=to,
            data=data,
            sender=sender,
            value=int(value),
            tx_type=tx_type,
            action=action,
            gas=self.gas_chain.bind(prior, lambda: dict(params), action),
        )
