"""LLM-as-judge scorer framework.

A judge scorer runs four stages over a finished ``AgentRun``:

1. ``preprocess``  pull the user request and final reply text out of the run
2. ``analyze``     send the rubric prompt to the judge model and validate the
                   JSON reply against ``verdict_model``
3. ``generate_score``   pure: verdict → number
4. ``generate_reason``  pure: verdict + score → human-readable string

Only ``analyze`` touches the network.  ``score_verdict`` runs stages 3-4 on
an injected verdict.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from config import settings
from engine.run_utils import get_assistant_message_from_run_output, get_user_message_from_run_input
from schemas.response import AgentRun, ScoreRecord
from services.llm_service import JUDGE_MODEL, LLMError, chat_completion_json

logger = logging.getLogger("socialia.engine.judge")


class JudgeParseError(LLMError):
    """The judge replied with JSON that does not match the verdict schema."""


class Scorer:
    """Anything that turns an ``AgentRun`` into a ``ScoreRecord``."""

    id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str] = ""

    async def run(self, run: AgentRun) -> ScoreRecord:
        raise NotImplementedError


class JudgeScorer(Scorer):
    instructions: ClassVar[str]
    prompt_template: ClassVar[str]
    verdict_model: ClassVar[type[BaseModel]]

    def __init__(self, *, model: str | None = None) -> None:
        self.model = model or JUDGE_MODEL

    # ── Stage 1 ────────────────────────────────────────────────────────

    def preprocess(self, run: AgentRun) -> dict[str, str]:
        return {
            "user_text": get_user_message_from_run_input(run) or "",
            "assistant_text": get_assistant_message_from_run_output(run) or "",
        }

    def build_prompt(self, preprocessed: dict[str, str]) -> str:
        return self.prompt_template.format(**preprocessed)

    # ── Stage 2 ────────────────────────────────────────────────────────

    async def analyze(self, preprocessed: dict[str, str]) -> Any:
        data = await chat_completion_json(
            self.instructions,
            self.build_prompt(preprocessed),
            model=self.model,
            temperature=settings.judge_temperature,
        )
        try:
            return self.verdict_model.model_validate(data)
        except ValidationError as exc:
            logger.error("%s: judge reply does not match %s: %s", self.id, self.verdict_model.__name__, data)
            raise JudgeParseError(
                f"{self.id}: judge reply does not match {self.verdict_model.__name__}: {exc}"
            ) from exc

    # ── Stages 3-4 ─────────────────────────────────────────────────────

    def generate_score(self, verdict: Any) -> float:
        raise NotImplementedError

    def generate_reason(self, verdict: Any, score: float) -> str:
        raise NotImplementedError

    def score_verdict(self, verdict: Any) -> ScoreRecord:
        score = max(0.0, min(1.0, self.generate_score(verdict)))
        return ScoreRecord(scorer_id=self.id, score=score, explanation=self.generate_reason(verdict, score))

    async def run(self, run: AgentRun) -> ScoreRecord:
        verdict = await self.analyze(self.preprocess(run))
        record = self.score_verdict(verdict)
        logger.info("%s → %.3f", self.id, record.score)
        return record
