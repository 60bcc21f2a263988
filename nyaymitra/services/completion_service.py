import asyncio
import logging
import time
from typing import Awaitable

from nyaymitra.core.errors import InterpretationError, InterpretationErrorKind
from nyaymitra.core.models import Completion

logger = logging.getLogger(__name__)


async def timed_completion(call: Awaitable[Completion], *, timeout_s: float, purpose: str) -> tuple[Completion, int]:
    """Await a completion call under a timeout; returns (completion, latency_ms).

    Any backend failure, including the timeout, becomes UPSTREAM_FAILURE. No retries.
    """
    start = time.monotonic()
    try:
        completion = await asyncio.wait_for(call, timeout=timeout_s)
    except asyncio.TimeoutError as e:
        logger.error("%s timed out after %ss", purpose, timeout_s)
        raise InterpretationError(
            InterpretationErrorKind.UPSTREAM_FAILURE, f"{purpose} timed out after {timeout_s}s"
        ) from e
    except Exception as e:
        logger.error("%s failed: %s", purpose, e)
        raise InterpretationError(
            InterpretationErrorKind.UPSTREAM_FAILURE, f"{purpose} failed: {e}"
        ) from e
    latency_ms = int((time.monotonic() - start) * 1000)
    logger.info("%s completed latency_ms=%d tokens=%d chars=%d",
                purpose, latency_ms, completion.tokens_used, len(completion.text))
    return completion, latency_ms
