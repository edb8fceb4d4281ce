"""Socialia — Hashnode blog summary assistant.

FastAPI application entry-point.
"""

from __future__ import annotations

import logging
import secrets
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from engine.agent import BlogAgent
from engine.evaluation import evaluate_run, select_scorers
from engine.fetcher import PostNotFoundError, lookup_post
from engine.pipeline import run_pipeline
from engine.run_utils import get_assistant_message_from_run_output
from engine.scorers import AGENT_SCORER_IDS
from schemas.request import AgentRequest, BlogToolInput, EvaluateRequest, SummarizeRequest
from schemas.response import (
    AgentResponse,
    BlogToolOutput,
    ErrorResponse,
    EvaluationReport,
    SummaryResult,
)

VERSION = "0.1.0"

# ── Logging ────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("socialia")


# ── Internal-token auth dependency ─────────────────────────────────────

async def verify_internal_token(
    x_internal_token: str | None = Header(default=None),
) -> None:
    """Reject requests that don't carry the shared internal token.

    Skipped when ``INTERNAL_TOKEN`` is not configured (dev mode).
    """
    expected = settings.internal_token
    if not expected:
        return  # no token configured → open access (dev only)
    if not x_internal_token or not secrets.compare_digest(x_internal_token, expected):
        raise HTTPException(status_code=401, detail="Invalid or missing internal token.")


# ── Lifespan ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    logger.info(
        "Socialia starting — provider=%s auth=%s max_content_chars=%d",
        settings.llm_provider,
        "enabled" if settings.internal_token else "disabled (dev)",
        settings.max_content_chars,
    )
    yield
    logger.info("Socialia shutting down.")


# ── App ────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Socialia",
    description="Fetches Hashnode blog posts, summarizes them with an LLM agent and scores the summaries.",
    version=VERSION,
    lifespan=lifespan,
)

# Parse allowed_origins (comma-separated string → list)
_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_RESPONSES = {401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


# ── Routes ─────────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "engine": "socialia",
        "version": VERSION,
        "provider": settings.llm_provider,
    }


@app.post(
    "/summarize",
    response_model=SummaryResult,
    responses={404: {"model": ErrorResponse}, **_ERROR_RESPONSES},
    summary="Fetch a Hashnode post and summarize it",
    dependencies=[Depends(verify_internal_token)],
)
async def summarize_post(payload: SummarizeRequest) -> SummaryResult:
    try:
        return await run_pipeline(payload.post_slug, payload.hostname)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Pipeline failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post(
    "/tools/get-hashnode-summary",
    response_model=BlogToolOutput,
    response_model_by_alias=True,
    summary="Fetch a Hashnode post the way the agent tool does",
    description="Never fails on a missing or unreachable post; the outcome is reported in summaryStatus.",
    dependencies=[Depends(verify_internal_token)],
)
async def blog_tool(payload: BlogToolInput) -> BlogToolOutput:
    return await lookup_post(url=payload.url, post_slug=payload.post_slug, hostname=payload.hostname)


@app.post(
    "/agent/generate",
    response_model=AgentResponse,
    response_model_by_alias=True,
    responses=_ERROR_RESPONSES,
    summary="Talk to the blog summary agent",
    dependencies=[Depends(verify_internal_token)],
)
async def agent_generate(payload: AgentRequest) -> AgentResponse:
    try:
        run = await BlogAgent().chat(payload.messages)
    except Exception as exc:
        logger.exception("Agent run failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    evaluation = await evaluate_run(run, list(AGENT_SCORER_IDS)) if payload.evaluate else None
    return AgentResponse(
        text=get_assistant_message_from_run_output(run),
        run=run,
        evaluation=evaluation,
    )


@app.post(
    "/evaluate",
    response_model=EvaluationReport,
    response_model_by_alias=True,
    responses=_ERROR_RESPONSES,
    summary="Score a finished agent run",
    dependencies=[Depends(verify_internal_token)],
)
async def evaluate(payload: EvaluateRequest) -> EvaluationReport:
    try:
        scorers = select_scorers(payload.scorers)
    except KeyError as exc:
        raise HTTPException(status_code=422, detail=exc.args[0]) from exc
    return await evaluate_run(payload.run, scorers=scorers)


# ── Dev runner ─────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=True,
    )
