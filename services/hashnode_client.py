"""Hashnode GraphQL client.

One query, one attempt: callers decide whether a missing post is an error.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from config import settings
from schemas.response import BlogPost

logger = logging.getLogger("socialia.hashnode")

HASHNODE_BARE_DOMAIN = "hashnode.com"
BLOG_PATH_PREFIX = "/blog"

POST_QUERY = """
query GetPost($host: String!, $slug: String!) {
  publication(host: $host) {
    post(slug: $slug) {
      title
      author { name }
      content { markdown }
    }
  }
}
"""


def resolve_post_location(url: str) -> tuple[str, str]:
    """Split a post URL into the ``(host, slug)`` pair the API expects.

    Posts on Hashnode's own blog (``hashnode.com/blog/...``) live under the
    ``hashnode.com/blog`` publication host rather than ``hashnode.com``.
    """
    parsed = urlparse(url.strip())
    host = parsed.hostname
    if not host:
        raise ValueError(f"Invalid URL (no hostname): {url!r}")

    if host == HASHNODE_BARE_DOMAIN and parsed.path.startswith(BLOG_PATH_PREFIX):
        host = f"{HASHNODE_BARE_DOMAIN}{BLOG_PATH_PREFIX}"

    path_parts = [part for part in parsed.path.split("/") if part]
    if not path_parts:
        raise ValueError(f"Invalid URL (no post slug in path): {url!r}")

    return host, path_parts[-1]


def _extract_post(payload: dict[str, Any]) -> dict[str, Any] | None:
    data = payload.get("data") or {}
    publication = data.get("publication") or {}
    return publication.get("post")


async def _post_query(client: httpx.AsyncClient, host: str, slug: str) -> dict[str, Any]:
    resp = await client.post(
        settings.hashnode_api_url,
        json={"query": POST_QUERY, "variables": {"host": host, "slug": slug}},
        headers={"Content-Type": "application/json"},
    )
    resp.raise_for_status()
    return resp.json()


async def query_post(
    host: str,
    slug: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> BlogPost | None:
    """Fetch a post by publication host and slug.

    Returns ``None`` when the publication or post does not exist.  Transport
    errors and non-2xx responses raise ``httpx.HTTPError``; a non-JSON body
    raises ``ValueError``.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=settings.hashnode_timeout_sec) as owned:
            payload = await _post_query(owned, host, slug)
    else:
        payload = await _post_query(client, host, slug)

    if payload.get("errors"):
        logger.warning("Hashnode returned GraphQL errors for %s/%s: %s", host, slug, payload["errors"])

    post = _extract_post(payload)
    if not post:
        logger.info("Post not found — host=%s slug=%s", host, slug)
        return None

    return BlogPost(
        title=post["title"],
        author=(post.get("author") or {}).get("name", ""),
        content=(post.get("content") or {}).get("markdown", ""),
        source_url=f"https://{host}/{slug}",
    )
