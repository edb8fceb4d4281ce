"""Request schemas for the Socialia API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from schemas.response import AgentRun, ChatMessage


class SummarizeRequest(BaseModel):
    """Input of the fetch → summarize pipeline."""

    post_slug: str = Field(
        ...,
        min_length=1,
        alias="postSlug",
        description="The URL slug of the post.",
    )
    hostname: str = Field(
        ...,
        min_length=1,
        description="The blog domain (e.g. engineering.hashnode.com).",
    )

    model_config = {"populate_by_name": True}


class BlogToolInput(BaseModel):
    """Arguments of the agent-callable fetch tool.

    Either ``url`` or both ``postSlug`` and ``hostname`` should be given. The
    tool reports a missing combination in its output instead of rejecting it.
    """

    url: str | None = Field(default=None, description="The full Hashnode blog post URL.")
    post_slug: str | None = Field(default=None, alias="postSlug", description="The URL slug of the post.")
    hostname: str | None = Field(default=None, description="The blog domain.")

    model_config = {"populate_by_name": True}


class AgentRequest(BaseModel):
    """A conversation turn for the blog summary agent."""

    messages: list[ChatMessage] = Field(..., min_length=1)
    evaluate: bool = Field(
        default=True,
        description="Grade the finished run with the agent's judge scorers (accuracy, summarization quality, conciseness).",
    )


class EvaluateRequest(BaseModel):
    """Score an already-finished agent run."""

    run: AgentRun
    scorers: list[str] | None = Field(
        default=None,
        description="Scorer ids to run; all registered scorers when omitted.",
    )
