"""Helpers that pull plain text and tool usage out of an ``AgentRun``."""

from __future__ import annotations

from schemas.response import AgentRun


def get_user_message_from_run_input(run: AgentRun) -> str:
    """Return the content of the last user message, or ``""``."""
    for message in reversed(run.input):
        if message.role == "user":
            return message.content
    return ""


def get_assistant_message_from_run_output(run: AgentRun) -> str:
    """Return the last non-empty assistant reply, or ``""``."""
    for message in reversed(run.output):
        if message.role == "assistant" and message.content.strip():
            return message.content
    return ""


def extract_tool_names(run: AgentRun) -> list[str]:
    """Names of every tool invoked during the run, in call order."""
    return [
        invocation.name
        for message in run.output
        for invocation in message.tool_invocations
    ]
