"""Cursor CLI provider - sends the prompt, with project context, to Cursor."""

from __future__ import annotations

import asyncio
import sys

from codegen_bridge.providers.base import BaseProvider


def compose_prompt(prompt: str, context: str | None) -> str:
    """Prefix the user's request with collected project context, if any."""
    if context is None:
        return prompt
    return f"Context from project:\n{context}\n\nUser request: {prompt}"


async def lookup_executable(name: str) -> bool:
    """Ask the platform's lookup utility whether ``name`` is on the search path."""
    lookup = "where" if sys.platform == "win32" else "which"
    try:
        proc = await asyncio.create_subprocess_exec(
            lookup,
            name,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        return await proc.wait() == 0
    except OSError:
        return False


class CursorCLIProvider(BaseProvider):
    """Generates code via the Cursor CLI (cursor command)."""

    COMMAND = "cursor"
    TOOL_NAME = "Cursor"
    API_KEY_ENV = "CURSOR_API_KEY"

    def build_command(self, prompt: str, context: str | None = None) -> list[str]:
        return [
            self.COMMAND,
            "generate",
            "--prompt", compose_prompt(prompt, context),
        ]

    async def is_available(self) -> bool:
        return await lookup_executable(self.COMMAND)
