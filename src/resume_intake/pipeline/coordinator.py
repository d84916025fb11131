"""Tier selection for structured contact extraction.

The coordinator is a small explicit state machine::

    init -> primary-attempted -> success -> done
    init -> primary-attempted -> fallback-triggered -> fallback-attempted -> done
    init -> fallback-attempted -> done            (no credential configured)

The two tiers never run concurrently. The heuristic tier is total, so every
run reaches ``done``. Whichever tier produced it, the result is normalized
before it is returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resume_intake.core.types import (
    ContactInformation,
    ExtractionAttempt,
    ExtractionOutcome,
    ExtractionState,
    FailureKind,
    Success,
    Tier,
)
from resume_intake.exceptions import AIResponseError
from resume_intake.pipeline.heuristics import HeuristicContactExtractor
from resume_intake.pipeline.normalize import normalize_contact_information

if TYPE_CHECKING:
    from resume_intake.pipeline.primary import PrimaryContactExtractor

log = logging.getLogger(__name__)


class _Trace:
    """Accumulates the visited states of one coordinator run."""

    def __init__(self) -> None:
        self.states: list[ExtractionState] = [ExtractionState.INIT]

    def enter(self, state: ExtractionState) -> None:
        log.debug("Extraction state %s -> %s", self.states[-1].value, state.value)
        self.states.append(state)


class StructuredExtractionCoordinator:
    """Chooses between the primary and heuristic tiers and normalizes output."""

    def __init__(
        self,
        primary: PrimaryContactExtractor | None,
        fallback: HeuristicContactExtractor | None = None,
    ) -> None:
        self.primary = primary
        self.fallback = fallback or HeuristicContactExtractor()

    async def run(self, corpus: str) -> ExtractionOutcome:
        trace = _Trace()

        if self.primary is None or not self.primary.available:
            log.info("No model credential configured; using heuristic extraction")
            return self._run_fallback(
                corpus,
                trace,
                kind=FailureKind.NO_CREDENTIAL,
                reason="no model credential configured",
            )

        trace.enter(ExtractionState.PRIMARY_ATTEMPTED)
        result = await self.primary.extract(corpus)
        if isinstance(result, Success):
            trace.enter(ExtractionState.SUCCESS)
            trace.enter(ExtractionState.DONE)
            log.info("Contact information extracted by the primary tier")
            return ExtractionOutcome(
                contact=normalize_contact_information(result.value),
                attempt=ExtractionAttempt(tier=Tier.PRIMARY, states=tuple(trace.states)),
            )

        error = result.error
        kind = (
            FailureKind.RESPONSE
            if isinstance(error, AIResponseError)
            else FailureKind.SERVICE
        )
        trace.enter(ExtractionState.FALLBACK_TRIGGERED)
        log.warning("Falling back to heuristic extraction: %s", error)
        return self._run_fallback(corpus, trace, kind=kind, reason=str(error))

    def _run_fallback(
        self,
        corpus: str,
        trace: _Trace,
        *,
        kind: FailureKind,
        reason: str,
    ) -> ExtractionOutcome:
        trace.enter(ExtractionState.FALLBACK_ATTEMPTED)
        contact: ContactInformation = self.fallback.extract(corpus)
        trace.enter(ExtractionState.DONE)
        return ExtractionOutcome(
            contact=normalize_contact_information(contact),
            attempt=ExtractionAttempt(
                tier=Tier.FALLBACK,
                states=tuple(trace.states),
                fallback_reason=reason,
                failure_kind=kind,
            ),
        )
