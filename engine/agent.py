"""Hashnode blog summary agent.

The agent is standing instructions plus one tool wrapped around the LLM
service.  ``generate`` is prompt-in/text-out; ``chat`` runs the
tool-calling loop for conversational requests.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from config import settings
from engine.fetcher import lookup_post
from prompts.system_prompt import AGENT_INSTRUCTIONS
from schemas.response import AgentRun, BlogToolOutput, ChatMessage, ToolInvocation
from services.llm_service import LLMError, chat_completion, chat_completion_with_tools

logger = logging.getLogger("socialia.engine.agent")

BLOG_TOOL_NAME = "get_hashnode_summary"

BLOG_TOOL_SPEC: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": BLOG_TOOL_NAME,
        "description": (
            "Fetches a Hashnode blog post (title, author, markdown content) using its full URL, "
            "or using its slug and the publication hostname."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "The full Hashnode blog post URL"},
                "postSlug": {"type": "string", "description": "The URL slug of the post"},
                "hostname": {
                    "type": "string",
                    "description": "The blog domain (e.g. engineering.hashnode.com)",
                },
            },
        },
    },
}


async def _run_blog_tool(raw_arguments: str) -> tuple[dict[str, Any], BlogToolOutput]:
    try:
        args = json.loads(raw_arguments or "{}")
    except json.JSONDecodeError as exc:
        return {}, BlogToolOutput(
            title="Error",
            author="N/A",
            content="",
            summary_status=f"Error: tool arguments are not valid JSON: {exc}",
        )
    if not isinstance(args, dict):
        args = {}

    output = await lookup_post(
        url=args.get("url"),
        post_slug=args.get("postSlug"),
        hostname=args.get("hostname"),
    )
    return args, output


class BlogAgent:
    id = "blog-summary-agent"
    name = "Hashnode Blog Summary Agent"

    def __init__(self, instructions: str = AGENT_INSTRUCTIONS, *, max_tool_rounds: int | None = None) -> None:
        self.instructions = instructions
        self.max_tool_rounds = max_tool_rounds if max_tool_rounds is not None else settings.max_tool_rounds

    async def generate(self, prompt: str) -> str:
        """Return the model's reply to *prompt* under the agent instructions."""
        return await chat_completion(
            self.instructions,
            prompt,
            temperature=settings.agent_temperature,
        )

    async def chat(self, messages: list[ChatMessage]) -> AgentRun:
        """Answer a conversation, calling the blog tool as often as the model asks.

        Raises ``LLMError`` if the model keeps requesting tools past
        ``max_tool_rounds``.
        """
        convo: list[dict[str, Any]] = [{"role": "system", "content": self.instructions}]
        convo.extend(
            {"role": m.role, "content": m.content}
            for m in messages
            if m.role in ("user", "assistant")
        )

        output: list[ChatMessage] = []
        for round_no in range(self.max_tool_rounds + 1):
            reply = await chat_completion_with_tools(
                convo,
                [BLOG_TOOL_SPEC],
                temperature=settings.agent_temperature,
            )
            tool_calls = reply.tool_calls or []
            if not tool_calls:
                text = (reply.content or "").strip()
                output.append(ChatMessage(role="assistant", content=text))
                logger.info("Agent replied after %d tool round(s)", round_no)
                return AgentRun(input=list(messages), output=output)

            if round_no == self.max_tool_rounds:
                break

            convo.append(
                {
                    "role": "assistant",
                    "content": reply.content or "",
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {"name": call.function.name, "arguments": call.function.arguments},
                        }
                        for call in tool_calls
                    ],
                }
            )

            invocations: list[ToolInvocation] = []
            for call in tool_calls:
                if call.function.name == BLOG_TOOL_NAME:
                    args, result = await _run_blog_tool(call.function.arguments)
                    result_json = result.model_dump(by_alias=True)
                else:
                    logger.warning("Model requested unknown tool '%s'", call.function.name)
                    args, result_json = {}, {"summaryStatus": f"Error: unknown tool '{call.function.name}'"}

                convo.append({"role": "tool", "tool_call_id": call.id, "content": json.dumps(result_json)})
                invocations.append(ToolInvocation(name=call.function.name, arguments=args, result=result_json))

            output.append(
                ChatMessage(role="assistant", content=reply.content or "", tool_invocations=invocations)
            )

        raise LLMError(f"Agent did not produce a final reply within {self.max_tool_rounds} tool round(s).")
