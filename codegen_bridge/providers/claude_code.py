"""Claude Code CLI provider - lets Claude Code read the project itself."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from codegen_bridge.providers.base import BaseProvider

CLAUDE_PATH_ENV = "CODEGEN_BRIDGE_CLAUDE_PATH"


class ClaudeCodeProvider(BaseProvider):
    """Generates code via the Claude Code CLI (claude command).

    Claude Code runs inside the source directory and reads the files it needs,
    so collected context is never added to the prompt.
    """

    COMMAND = "claude"
    TOOL_NAME = "Claude"
    API_KEY_ENV = "ANTHROPIC_API_KEY"

    def candidate_paths(self) -> list[Path]:
        """Locations checked for the executable, highest priority first."""
        candidates = [
            Path(entry).expanduser()
            for entry in os.environ.get(CLAUDE_PATH_ENV, "").split(os.pathsep)
            if entry
        ]
        candidates.extend(Path(entry).expanduser() for entry in self.settings.claude_search_paths)
        return candidates

    def locate_executable(self) -> str:
        for candidate in self.candidate_paths():
            if candidate.is_file():
                return str(candidate)
        # Fall back to the search path; a bare name is resolved at spawn time
        return shutil.which(self.COMMAND) or self.COMMAND

    def build_command(self, prompt: str, context: str | None = None) -> list[str]:
        return [
            self.locate_executable(),
            "--print",
            "--output-format", "text",
            "--model", self.settings.claude_model,
            "--dangerously-skip-permissions",
            "--system-prompt", self.settings.claude_system_prompt,
            prompt,
        ]

    def working_dir(self, source_dir: str | None) -> str | None:
        return source_dir or "."

    async def is_available(self) -> bool:
        # Invocable through the API without a local CLI
        return True
