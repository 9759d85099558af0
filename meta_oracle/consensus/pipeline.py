"""
Three-phase evaluation pipeline.

Signal phase -> (Reasoning phase || Verification phase)

Each phase fans out one task per oracle of its role and waits for all of
them. Reasoning and verification only read the immutable signal tuple
from the signal phase, so they run side by side once that barrier is
passed. Every oracle call is bounded by a timeout; a call that times out
or fails is recorded as an abstention and dropped from its phase.
"""

import asyncio
from typing import Awaitable, Optional, Sequence, TypeVar

import structlog
from pydantic import BaseModel, Field

from meta_oracle.errors import (
    ContractViolationError,
    FailureReason,
    MetaOracleError,
    OracleTimeoutError,
)
from meta_oracle.models import Abstention, Signal, Verdict
from meta_oracle.oracles.base import Oracle

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0


async def _gather_or_cancel(*coros: Awaitable[T]) -> list[T]:
    """Like asyncio.gather, but a failure cancels and awaits the siblings before propagating."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class PipelineOutput(BaseModel):
    """Everything one run produced, before aggregation."""

    signals: tuple[Signal, ...] = Field(default_factory=tuple)
    verdicts: list[Verdict] = Field(default_factory=list)
    verifications: list[Verdict] = Field(default_factory=list)
    abstentions: list[Abstention] = Field(default_factory=list)


class Pipeline:
    """Runs the three phases over a set of oracles."""

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout_seconds = timeout_seconds

    async def run(
        self,
        signal_oracles: Sequence[Oracle],
        reasoning_oracles: Sequence[Oracle],
        verification_oracles: Sequence[Oracle],
    ) -> PipelineOutput:
        abstentions: list[Abstention] = []

        # Phase 1: signal collection
        signals = await self._collect_signals(signal_oracles, abstentions)

        # Phases 2 and 3 share the same signal snapshot
        verdicts, verifications = await _gather_or_cancel(
            self._judge(reasoning_oracles, signals, abstentions),
            self._judge(verification_oracles, signals, abstentions),
        )

        logger.info(
            "Pipeline completed",
            signals=len(signals),
            verdicts=len(verdicts),
            verifications=len(verifications),
            abstentions=len(abstentions),
        )

        return PipelineOutput(
            signals=signals,
            verdicts=verdicts,
            verifications=verifications,
            abstentions=abstentions,
        )

    async def _collect_signals(
        self,
        oracles: Sequence[Oracle],
        abstentions: list[Abstention],
    ) -> tuple[Signal, ...]:
        results = await _gather_or_cancel(
            *(self._call(o, o.observe(), abstentions) for o in oracles)
        )
        signals: list[Signal] = []
        for batch in results:
            if batch:
                signals.extend(batch)
        return tuple(signals)

    async def _judge(
        self,
        oracles: Sequence[Oracle],
        signals: tuple[Signal, ...],
        abstentions: list[Abstention],
    ) -> list[Verdict]:
        results = await _gather_or_cancel(
            *(self._call(o, o.reason(signals), abstentions) for o in oracles)
        )
        return [v for v in results if v is not None]

    async def _call(
        self,
        oracle: Oracle,
        call: Awaitable[T],
        abstentions: list[Abstention],
    ) -> Optional[T]:
        """Await one oracle call, turning timeouts and failures into abstentions."""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            err = OracleTimeoutError(oracle.id, self.timeout_seconds)
            logger.warning("Oracle timed out", oracle_id=oracle.id, role=oracle.role.value, error=str(err))
            abstentions.append(self._abstain(oracle, err.reason, str(err)))
        except ContractViolationError:
            raise
        except MetaOracleError as e:
            logger.warning("Oracle failed", oracle_id=oracle.id, reason=e.reason.value, error=str(e))
            abstentions.append(self._abstain(oracle, e.reason, str(e)))
        except Exception as e:
            logger.warning("Oracle raised", oracle_id=oracle.id, role=oracle.role.value, error=str(e))
            abstentions.append(self._abstain(oracle, FailureReason.ERROR, str(e)))
        return None

    @staticmethod
    def _abstain(oracle: Oracle, reason: FailureReason, detail: str) -> Abstention:
        return Abstention(oracle_id=oracle.id, role=oracle.role, reason=reason, detail=detail)
