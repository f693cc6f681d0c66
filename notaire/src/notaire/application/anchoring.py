"""
Runs optional anchoring steps.

Each step is bounded by a timeout and turned into an AnchorOutcome.
Optional backend failures never escape from here.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from notaire.domain.exceptions import (
    BackendUnavailableError,
    ChainTimeoutError,
    TransactionRevertedError,
    UploadRejectedError,
)
from notaire.domain.value_objects.anchor_outcome import (
    AnchorOutcome,
    Anchored,
    Skipped,
    SkipReason,
)
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import anchor_steps_total

logger = get_logger(__name__)

T = TypeVar("T")


async def run_optional_step(
    step: str,
    call: Callable[[], Awaitable[T]],
    timeout: float,
) -> AnchorOutcome:
    """
    Run one optional step.

    Args:
        step: Step name for logs and metrics (e.g. "media_upload")
        call: Zero-argument coroutine factory performing the step
        timeout: Upper bound in seconds

    Returns:
        Anchored(value) on success, Skipped(reason) otherwise
    """
    try:
        value = await asyncio.wait_for(call(), timeout=timeout)
    except asyncio.TimeoutError:
        return skip(step, SkipReason.TIMEOUT, f"no answer within {timeout:.1f}s")
    except ChainTimeoutError as e:
        return skip(step, SkipReason.TIMEOUT, e.message)
    except TransactionRevertedError as e:
        return skip(step, SkipReason.REVERTED, e.message)
    except UploadRejectedError as e:
        return skip(step, SkipReason.REJECTED, e.message)
    except BackendUnavailableError as e:
        return skip(step, SkipReason.UNAVAILABLE, e.message)
    except Exception as e:
        logger.exception(f"Unexpected failure in optional step {step}")
        return skip(step, SkipReason.UNAVAILABLE, f"{type(e).__name__}: {e}")

    anchor_steps_total.labels(step=step, outcome="anchored").inc()
    logger.debug(f"Optional step {step} anchored: {value}")
    return Anchored(value)


def skip(step: str, reason: SkipReason, detail: str = "") -> Skipped:
    """Record an optional step as skipped."""
    anchor_steps_total.labels(step=step, outcome=reason.value).inc()

    if reason in (SkipReason.NOT_CONFIGURED, SkipReason.UPSTREAM_SKIPPED):
        logger.debug(f"Optional step {step} skipped: {reason.value}")
    else:
        logger.warning(f"Optional step {step} skipped ({reason.value}): {detail}")

    return Skipped(reason=reason, detail=detail)
