"""Thin wrapper around LLM providers (Groq / OpenAI / Azure / local-compatible)."""

from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI, AsyncAzureOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config import settings

logger = logging.getLogger("socialia.llm")


def _build_client() -> tuple[AsyncOpenAI, str, str]:
    """Return (async_client, agent_model, judge_model) based on the configured provider."""
    provider = settings.llm_provider.lower()

    if provider == "azure":
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            api_version="2024-12-01-preview",
        )
        agent_model = settings.azure_openai_deployment
        judge_model = settings.azure_openai_judge_deployment or agent_model
    elif provider == "local":
        client = AsyncOpenAI(
            base_url=settings.local_llm_base_url,
            api_key="not-needed",
        )
        agent_model = settings.local_llm_model
        judge_model = settings.local_judge_model
    elif provider == "openai":
        client = AsyncOpenAI(api_key=settings.openai_api_key)
        agent_model = settings.openai_model
        judge_model = settings.openai_judge_model
    else:  # default: groq
        client = AsyncOpenAI(
            base_url=settings.groq_base_url,
            api_key=settings.groq_api_key,
        )
        agent_model = settings.groq_model
        judge_model = settings.groq_judge_model

    return client, agent_model, judge_model


_client, AGENT_MODEL, JUDGE_MODEL = _build_client()


class LLMError(Exception):
    """Raised when the LLM call fails after retries or returns unusable output."""


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_exception_type(Exception),
    reraise=True,
)
async def chat_completion(
    system_prompt: str,
    user_message: str,
    *,
    model: str | None = None,
    temperature: float | None = None,
    response_format: dict[str, Any] | None = None,
) -> str:
    """Send a chat-completion request and return the assistant's text reply.

    Parameters
    ----------
    system_prompt : str
        The system-level instruction.
    user_message : str
        The user-level content.
    model : str, optional
        Model name; defaults to the configured agent model.
    temperature : float, optional
        Sampling temperature; defaults to ``settings.agent_temperature``.
    response_format : dict, optional
        If supplied, passed as ``response_format`` to the API (e.g. JSON mode).

    Returns
    -------
    str
        Raw text content of the assistant reply.
    """
    temp = temperature if temperature is not None else settings.agent_temperature

    kwargs: dict[str, Any] = {
        "model": model or AGENT_MODEL,
        "temperature": temp,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
    }
    if response_format is not None:
        kwargs["response_format"] = response_format

    try:
        response = await _client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content
        if content is None:
            raise LLMError("LLM returned empty content.")
        return content.strip()
    except Exception as exc:
        logger.exception("LLM call failed: %s", exc)
        raise


async def chat_completion_json(
    system_prompt: str,
    user_message: str,
    *,
    model: str | None = None,
    temperature: float | None = None,
) -> dict[str, Any]:
    """Like ``chat_completion`` but forces JSON output and parses it."""
    raw = await chat_completion(
        system_prompt,
        user_message,
        model=model,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse LLM JSON: %s\nRaw: %s", exc, raw[:500])
        raise LLMError(f"LLM returned invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LLMError(f"LLM returned JSON {type(data).__name__}, expected an object.")
    return data


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_exception_type(Exception),
    reraise=True,
)
async def chat_completion_with_tools(
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]],
    *,
    model: str | None = None,
    temperature: float | None = None,
) -> Any:
    """Send a multi-turn request with function tools and return the assistant message.

    The returned object exposes ``content`` and ``tool_calls`` as in the
    OpenAI chat-completions response.
    """
    temp = temperature if temperature is not None else settings.agent_temperature

    try:
        response = await _client.chat.completions.create(
            model=model or AGENT_MODEL,
            temperature=temp,
            messages=messages,
            tools=tools,
            tool_choice="auto",
        )
        return response.choices[0].message
    except Exception as exc:
        logger.exception("LLM tool call failed: %s", exc)
        raise
