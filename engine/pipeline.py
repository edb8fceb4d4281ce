"""Pipeline orchestrator — fetch a Hashnode post, then summarize it."""

from __future__ import annotations

import logging
import time

from engine.agent import BlogAgent
from engine.fetcher import fetch_post
from engine.summarizer import summarize
from schemas.response import SummaryResult

logger = logging.getLogger("socialia.pipeline")

WORKFLOW_ID = "blog-summary-workflow"


async def run_pipeline(
    post_slug: str,
    hostname: str,
    *,
    agent: BlogAgent | None = None,
) -> SummaryResult:
    """Execute the two-step blog summary workflow.

    Parameters
    ----------
    post_slug : str
        The URL slug of the post.
    hostname : str
        The publication domain, e.g. ``engineering.hashnode.com``.
    agent : BlogAgent | None
        Agent used for step 2; a default ``BlogAgent`` when omitted.

    Returns
    -------
    SummaryResult
        The agent's summary.

    Raises
    ------
    PostNotFoundError
        If the post does not exist.  No summary is attempted.
    """
    t0 = time.perf_counter()

    # ── Step 1 — fetch-blog-content ────────────────────────────────────
    post = await fetch_post(post_slug, hostname)
    logger.info("Step 1 complete — '%s' by %s (%d chars)", post.title, post.author, len(post.content))

    # ── Step 2 — generate-summary ──────────────────────────────────────
    result = await summarize(post, agent)

    elapsed = time.perf_counter() - t0
    logger.info("%s complete in %.2fs — %d chars of summary", WORKFLOW_ID, elapsed, len(result.summary))
    return result
