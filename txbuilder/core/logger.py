import logging
import structlog
from structlog.contextvars import bound_contextvars
import sentry_sdk
from prometheus_client import Counter
from txbuilder.core.config import settings

# --- Prometheus Metrics ---
BATCHES_BUILT = Counter("txbuilder_batches_built_total", "Transaction batches returned to callers", ["action"])
APPROVALS_PLANNED = Counter("txbuilder_approvals_planned_total", "Approval transactions prepended to a batch", ["kind"])
BUILD_FAILURES = Counter("txbuilder_build_failures_total", "Action builds that raised", ["action", "error"])


def configure_logging():
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN.get_secret_value(), traces_sample_rate=1.0)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)


def request_context(action: str, user: str):
    """Tags every log line emitted while building one batch."""
    return bound_contextvars(action=action, user=user)


configure_logging()
log = get_logger("TxBuilder.System")
