"""LLM utilities using Claude Agent SDK.

This module provides the generation capability the outcome generators call.
Any object with an ``async generate_response(prompt) -> str`` method satisfies
``GenerationService``; ``ClaudeGenerationService`` is the production one.

The Agent SDK shells out to Claude Code CLI, which means:
- Authentication uses your existing Claude Code auth (Max plan, API key, etc.)
- No separate API key configuration needed
- Full access to Claude's capabilities
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
    query,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class GenerationService(Protocol):
    """Single-method text generation capability.

    Implementations may raise any exception; callers classify failures by
    message (see ``errors.classify_generation_error``).
    """

    async def generate_response(self, prompt: str) -> str: ...


async def generate_text(
    prompt: str,
    system_prompt: str | None = None,
    max_turns: int = 1,
) -> str:
    """Generate text from Claude.

    Args:
        prompt: The user prompt to send to Claude.
        system_prompt: Optional system prompt to set context.
        max_turns: Maximum number of turns (default 1 for single response).

    Returns:
        The generated text response.

    Example:
        >>> response = await generate_text(
        ...     prompt="What if gravity stopped for five seconds?",
        ...     system_prompt="You are a realistic analyst. Be concise."
        ... )
        >>> print(response)
    """
    options = ClaudeAgentOptions(max_turns=max_turns)
    if system_prompt is not None:
        options = ClaudeAgentOptions(
            system_prompt=system_prompt,
            max_turns=max_turns,
        )

    response_text = ""
    async for message in query(prompt=prompt, options=options):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    response_text += block.text
        elif isinstance(message, ResultMessage):
            if message.result:
                response_text = str(message.result)

    return response_text


class ClaudeGenerationService:
    """GenerationService backed by Claude via the Agent SDK.

    Example:
        >>> service = ClaudeGenerationService(system_prompt=GENERATION_SYSTEM_PROMPT)
        >>> text = await service.generate_response(format_serious_prompt(scenario))
    """

    def __init__(
        self,
        system_prompt: str | None = None,
        timeout: float = 60.0,
        max_turns: int = 1,
    ):
        """Initialize the service.

        Args:
            system_prompt: System prompt sent with every request.
            timeout: Seconds to wait for one response.
            max_turns: Max turns per request.
        """
        self.system_prompt = system_prompt
        self.timeout = timeout
        self.max_turns = max_turns

    async def generate_response(self, prompt: str) -> str:
        """Generate one response.

        Raises:
            TimeoutError: If Claude does not answer within ``timeout`` seconds.
        """
        logger.debug(f"generate_response: prompt={len(prompt)} chars, timeout={self.timeout}s")
        try:
            return await asyncio.wait_for(
                generate_text(
                    prompt=prompt,
                    system_prompt=self.system_prompt,
                    max_turns=self.max_turns,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"Generation request timeout after {self.timeout}s") from e


def check_claude_credentials() -> bool:
    """Check whether Claude credentials are configured.

    Claude Code checks for credentials in this order:
    1. CLAUDE_CODE_OAUTH_TOKEN environment variable (for server/CI deployments)
    2. ~/.claude/.credentials.json file (from 'claude login' or 'claude setup-token')

    Without either, every generation falls back to template content; the
    simulator still answers.

    Returns:
        bool: True if credentials are configured, False otherwise
    """
    oauth_token = os.environ.get("CLAUDE_CODE_OAUTH_TOKEN")
    credentials_path = Path.home() / ".claude" / ".credentials.json"

    if oauth_token:
        masked = oauth_token[:20] + "..." if len(oauth_token) > 20 else "***"
        logger.info(f"CLAUDE_CODE_OAUTH_TOKEN is set ({masked})")
        return True
    if credentials_path.exists():
        logger.info(f"Claude credentials file found at {credentials_path}")
        return True

    logger.warning(
        "Claude Code OAuth credentials not found! "
        "Outcomes will use fallback templates. "
        "For local dev: run 'claude login' or 'claude setup-token'."
    )
    return False
