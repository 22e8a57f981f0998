"""Serial stage execution with a guaranteed terminal finalizer."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Sequence

from .stage_contracts import (
    SequenceOutcome,
    Stage,
    StageContext,
    StageResult,
    StageStatus,
)

logger = logging.getLogger(__name__)


async def run_stages(stages: Sequence[Stage], context: StageContext) -> SequenceOutcome:
    """Run `stages` one after another, stopping at the first one that does not pass.

    A failed stage is reported once through the context's outcome recorder. A
    stage cut off by its deadline is not reported here; the finalizer reports
    it, along with any other run that ends without a verdict.
    """
    results: list[StageResult] = []
    try:
        for index, stage in enumerate(stages):
            logger.info("Stage %d/%d: %s", index + 1, len(stages), stage.name)
            result = await _run_stage(stage, context)
            results.append(result)
            if result.status == StageStatus.FAILED:
                context.outcome.record_failure(f"{stage.name}: {result.error_message}")
            if not result.ok:
                results.extend(StageResult.skipped(skipped.name) for skipped in stages[index + 1 :])
                break
    finally:
        await finish_run(context)
    return SequenceOutcome(results=tuple(results), succeeded=context.outcome.succeeded)


async def finish_run(context: StageContext) -> None:
    """Emit the missing failure verdict, if any, and release the shared session."""
    if context.outcome.finalize():
        logger.error("No verdict was recorded during the run; reported it as failed.")
    await context.release_session()


async def _run_stage(stage: Stage, context: StageContext) -> StageResult:
    started = time.monotonic()
    deadline = asyncio.timeout(stage.timeout_seconds)
    try:
        async with deadline:
            result = await stage.run(context)
    except TimeoutError as exc:
        elapsed = time.monotonic() - started
        if deadline.expired():
            logger.error("Stage %r timed out after %.1fs", stage.name, elapsed)
            return StageResult.timed_out(stage.name, stage.timeout_seconds, elapsed)
        logger.error("Stage %r failed: %s", stage.name, exc)
        return StageResult.failed(stage.name, exc, elapsed)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        elapsed = time.monotonic() - started
        logger.exception("Stage %r raised", stage.name)
        return StageResult.failed(stage.name, exc, elapsed)

    elapsed = time.monotonic() - started
    if result.ok:
        logger.info("Stage %r passed in %.1fs", stage.name, elapsed)
    else:
        logger.error("Stage %r failed: %s", stage.name, result.error_message)
    return dataclasses.replace(result, stage_name=stage.name, duration_seconds=elapsed)
