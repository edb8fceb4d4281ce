"""Content fetching — one Hashnode lookup, two calling conventions.

``lookup_post`` is the agent-tool convention: it never raises and reports
problems through ``summaryStatus`` so the agent can answer conversationally.
``fetch_post`` is the pipeline convention: a missing post aborts the run.
"""

from __future__ import annotations

import logging

from config import settings
from schemas.response import BlogPost, BlogToolOutput
from services.hashnode_client import query_post, resolve_post_location

logger = logging.getLogger("socialia.engine.fetcher")

SUCCESS_STATUS = "Success"


class PostNotFoundError(LookupError):
    """Raised by the strict fetch when Hashnode has no post at host/slug."""

    def __init__(self, host: str, slug: str) -> None:
        super().__init__(f'Post not found on {host} (slug "{slug}")')
        self.host = host
        self.slug = slug


def truncate_content(content: str, limit: int | None = None) -> str:
    """Cut *content* to the configured character budget.  Silent by design."""
    max_chars = limit if limit is not None else settings.max_content_chars
    return content[:max_chars]


async def fetch_post(post_slug: str, hostname: str) -> BlogPost:
    """Fetch a post or raise ``PostNotFoundError``."""
    post = await query_post(hostname, post_slug)
    if post is None:
        raise PostNotFoundError(hostname, post_slug)
    return post


async def lookup_post(
    *,
    url: str | None = None,
    post_slug: str | None = None,
    hostname: str | None = None,
) -> BlogToolOutput:
    """Fetch a post by URL or by slug + hostname, encoding every failure in the result."""
    try:
        if url:
            host, slug = resolve_post_location(url)
        elif post_slug and hostname:
            host, slug = hostname, post_slug
        else:
            return BlogToolOutput(
                title="Error",
                author="N/A",
                content="",
                summary_status="Error: Provide the full post URL, or both the post slug and the hostname.",
            )

        post = await query_post(host, slug)
        if post is None:
            return BlogToolOutput(
                title="Not Found",
                author="N/A",
                content="",
                summary_status=f'Error: Post not found. Tried host: "{host}" and slug: "{slug}".',
            )

        return BlogToolOutput(
            title=post.title,
            author=post.author,
            content=truncate_content(post.content),
            summary_status=SUCCESS_STATUS,
        )
    except Exception as exc:
        logger.warning("Blog lookup failed (url=%s slug=%s host=%s): %s", url, post_slug, hostname, exc)
        return BlogToolOutput(
            title="Error",
            author="N/A",
            content="",
            summary_status=f"Failed to parse URL or connect to API: {str(exc) or type(exc).__name__}",
        )
