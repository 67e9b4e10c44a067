# /txbuilder/core/gas_estimator.py
# Gas estimation backends. GasEstimationChain forwards to one of these.

from typing import Any, Dict, List, Protocol

from web3 import AsyncWeb3

from txbuilder.core.constants import GAS_LIMIT_RECOMMENDATIONS, ProtocolAction
from txbuilder.core.logger import get_logger
from txbuilder.core.tx import GasEstimate

log = get_logger(__name__)


class GasEstimator(Protocol):
    async def estimate(
        self, prior: List[Dict[str, Any]], tx: Dict[str, Any], action: ProtocolAction
    ) -> GasEstimate:
        ...


class Web3GasEstimator:
    """
    Estimates against current chain state with eth_estimateGas.

    A node cannot see transactions that have not been mined yet, so when the
    batch still holds earlier calls (typically an approval) the recommended
    limit for the action is returned instead of a node estimate.
    """
    def __init__(self, w3: AsyncWeb3):
        self.w3 = w3
        log.info("GAS_ESTIMATOR_INITIALIZED", backend="estimate_gas")

    async def get_gas_price(self) -> int:
        return await self.w3.eth.gas_price

    async def estimate(self, prior, tx, action=ProtocolAction.default) -> GasEstimate:
        gas_price = await self.get_gas_price()
        if prior:
            limit = GAS_LIMIT_RECOMMENDATIONS.get(action, GAS_LIMIT_RECOMMENDATIONS[ProtocolAction.default])
            log.debug("GAS_LIMIT_RECOMMENDED", action=action.value, pending=len(prior), gas_limit=limit)
            return GasEstimate(gas_limit=limit, gas_price=gas_price)
        limit = await self.w3.eth.estimate_gas(tx)
        return GasEstimate(gas_limit=int(limit), gas_price=gas_price)


class SimulationGasEstimator:
    """Replays the earlier batch calls and the new one in a single eth_simulateV1 block."""
    def __init__(self, w3: AsyncWeb3, block: str = "latest"):
        self.w3 = w3
        self.block = block
        log.info("GAS_ESTIMATOR_INITIALIZED", backend="eth_simulateV1")

    @staticmethod
    def _rpc_call(tx: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "from": tx["from"],
            "to": tx["to"],
            "data": tx["data"],
            "value": hex(int(tx.get("value", 0))),
        }

    async def estimate(self, prior, tx, action=ProtocolAction.default) -> GasEstimate:
        calls = [self._rpc_call(t) for t in prior] + [self._rpc_call(tx)]
        response = await self.w3.provider.make_request(
            "eth_simulateV1", [{"blockStateCalls": [{"calls": calls}]}, self.block]
        )
        if response.get("error"):
            log.error("GAS_SIMULATION_RPC_ERROR", action=action.value, error=response["error"])
            raise ValueError(response["error"])

        last_call = response["result"][0]["calls"][-1]
        if int(last_call.get("status", "0x1"), 16) == 0:
            log.error("GAS_SIMULATION_REVERTED", action=action.value, error=last_call.get("error"))
            raise ValueError(f"Simulated call reverted: {last_call.get('error')}")

        gas_price = await self.w3.eth.gas_price
        return GasEstimate(gas_limit=int(last_call["gasUsed"], 16), gas_price=gas_price)
