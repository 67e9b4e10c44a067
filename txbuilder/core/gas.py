# /txbuilder/core/gas.py
from typing import Any, Awaitable, Callable, Dict, Sequence

from txbuilder.core.constants import ProtocolAction
from txbuilder.core.gas_estimator import GasEstimator
from txbuilder.core.tx import GasEstimate, Transaction


class GasEstimationChain:
    """
    Binds a not-yet-sent call to the calls placed before it in the same batch.

    The returned coroutine function is never awaited here. Each await forwards
    the earlier calls plus the new one to the estimator, so an approval earlier
    in the batch counts as applied.
    """
    def __init__(self, estimator: GasEstimator):
        self.estimator = estimator

    def bind(
        self,
        prior: Sequence[Transaction],
        raw_call_builder: Callable[[], Dict[str, Any]],
        action: ProtocolAction = ProtocolAction.default,
    ) -> Callable[[], Awaitable[GasEstimate]]:
        prior = tuple(prior)

        async def estimate() -> GasEstimate:
            return await self.estimator.estimate(
                [t.to_tx_params() for t in prior], raw_call_builder(), action
            )

        return estimate
