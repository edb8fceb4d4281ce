"""Response schemas and run records for the Socialia API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ── Blog content ───────────────────────────────────────────────────────

class BlogPost(BaseModel):
    """A post fetched from a Hashnode publication."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    author: str
    content: str = Field(description="Markdown body of the post.")
    source_url: str = Field(alias="sourceUrl")


class BlogToolOutput(BaseModel):
    """What the fetch tool hands back to the agent.  Never an exception."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: str
    content: str
    summary_status: str = Field(
        alias="summaryStatus",
        description='"Success" or a human-readable error.',
    )

    @property
    def ok(self) -> bool:
        return self.summary_status == "Success"


class SummaryResult(BaseModel):
    summary: str


# ── Agent run records ──────────────────────────────────────────────────

class ToolInvocation(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: dict[str, Any] | None = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Literal["system", "user", "assistant", "tool"]
    content: str = ""
    tool_invocations: list[ToolInvocation] = Field(default_factory=list, alias="toolInvocations")


class AgentRun(BaseModel):
    """End-to-end input/output pair of one agent conversation turn."""

    input: list[ChatMessage] = Field(default_factory=list)
    output: list[ChatMessage] = Field(default_factory=list)


# ── Scoring ────────────────────────────────────────────────────────────

class ScoreRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scorer_id: str = Field(alias="scorerId")
    score: float = Field(ge=0.0, le=1.0)
    explanation: str


class EvaluationReport(BaseModel):
    """Scores keyed by scorer id.  Failed scorers appear under ``errors`` only."""

    scores: dict[str, ScoreRecord] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)


class AgentResponse(BaseModel):
    text: str
    run: AgentRun
    evaluation: EvaluationReport | None = None


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
