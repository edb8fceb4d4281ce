"""Run quality scorers over a finished agent run."""

from __future__ import annotations

import asyncio
import logging

from engine.judge import Scorer
from engine.scorers import default_scorers
from schemas.response import AgentRun, EvaluationReport

logger = logging.getLogger("socialia.evaluation")


def select_scorers(scorer_ids: list[str] | None = None) -> list[Scorer]:
    """Resolve scorer ids against the registry; ``KeyError`` names any unknown id."""
    registry = default_scorers()
    if scorer_ids is None:
        return list(registry.values())

    unknown = [sid for sid in scorer_ids if sid not in registry]
    if unknown:
        raise KeyError(f"Unknown scorer id(s): {', '.join(unknown)}")
    return [registry[sid] for sid in dict.fromkeys(scorer_ids)]


async def evaluate_run(
    run: AgentRun,
    scorer_ids: list[str] | None = None,
    *,
    scorers: list[Scorer] | None = None,
) -> EvaluationReport:
    """Score *run* with every selected scorer concurrently.

    A scorer that fails contributes an entry to ``errors`` and no score; the
    others are unaffected.
    """
    selected = scorers if scorers is not None else select_scorers(scorer_ids)
    results = await asyncio.gather(*(s.run(run) for s in selected), return_exceptions=True)

    report = EvaluationReport()
    for scorer, result in zip(selected, results):
        if isinstance(result, Exception):
            logger.error("Scorer %s failed: %s", scorer.id, result)
            report.errors[scorer.id] = f"{type(result).__name__}: {result}"
        elif isinstance(result, BaseException):
            raise result
        else:
            report.scores[scorer.id] = result

    logger.info("Evaluation complete — %d scored, %d failed", len(report.scores), len(report.errors))
    return report
