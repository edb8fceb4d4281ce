"""Blog post summarization."""

from __future__ import annotations

import logging

from config import settings
from engine.agent import BlogAgent
from engine.fetcher import truncate_content
from prompts.system_prompt import SUMMARY_PROMPT_TEMPLATE
from schemas.response import BlogPost, SummaryResult

logger = logging.getLogger("socialia.engine.summarizer")


def build_summary_prompt(post: BlogPost) -> str:
    """Fill the summary template; the body is cut to ``max_content_chars``."""
    return SUMMARY_PROMPT_TEMPLATE.format(
        title=post.title,
        author=post.author,
        url=post.source_url,
        content=truncate_content(post.content),
    )


async def summarize(post: BlogPost, agent: BlogAgent | None = None) -> SummaryResult:
    """Return the agent's structured summary of *post*."""
    agent = agent or BlogAgent()
    if len(post.content) > settings.max_content_chars:
        logger.info("Truncating '%s' from %d characters", post.title, len(post.content))
    text = await agent.generate(build_summary_prompt(post))
    return SummaryResult(summary=text)
