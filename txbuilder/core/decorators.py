# /txbuilder/core/decorators.py
# Reusable decorators shared by the lending pool actions.
import functools

from txbuilder.core.constants import ProtocolAction
from txbuilder.core.errors import TxBuilderError
from txbuilder.core.logger import BATCHES_BUILT, BUILD_FAILURES, get_logger, request_context

log = get_logger(__name__)


def instrumented_action(action: ProtocolAction, user_field: str = "user"):
    """
    Binds action/user to the log context and counts built or failed batches.

    Errors are re-raised untouched; no partial batch ever reaches the caller.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, params):
            with request_context(action.value, getattr(params, user_field, None)):
                try:
                    txs = await func(self, params)
                except TxBuilderError as e:
                    BUILD_FAILURES.labels(action.value, type(e).__name__).inc()
                    log.warning("ACTION_BUILD_REJECTED", error=str(e))
                    raise
                except Exception as e:
                    BUILD_FAILURES.labels(action.value, type(e).__name__).inc()
                    log.error("ACTION_BUILD_FAILED", error=str(e), exc_info=True)
                    raise
                BATCHES_BUILT.labels(action.value).inc()
                log.debug("ACTION_BATCH_BUILT", size=len(txs), tx_types=[t.tx_type.value for t in txs])
                return txs
        return wrapper
    return decorator
