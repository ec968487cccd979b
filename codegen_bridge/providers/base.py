"""Abstract base class for code generation providers."""

from __future__ import annotations

import abc
import asyncio
import os

from rich.console import Console
from rich.markup import escape

from codegen_bridge.config import BridgeSettings
from codegen_bridge.models import GenerationResult

console = Console(stderr=True)


class BaseProvider(abc.ABC):
    """Interface for CLI tools that generate code (Cursor CLI, Claude Code, etc.).

    Subclasses build the command line; running the child process and mapping
    its outcome to a GenerationResult is shared.
    """

    #: Human-readable tool name used in error messages.
    TOOL_NAME: str = ""
    #: Environment variable that carries the credential to the child.
    API_KEY_ENV: str = ""

    def __init__(self, settings: BridgeSettings | None = None):
        self.settings = settings or BridgeSettings()

    @abc.abstractmethod
    def build_command(self, prompt: str, context: str | None = None) -> list[str]:
        """Return the argv to execute for ``prompt``."""
        ...

    def working_dir(self, source_dir: str | None) -> str | None:
        """Directory the child runs in; None inherits the caller's."""
        return None

    @abc.abstractmethod
    async def is_available(self) -> bool:
        """Check if this provider's CLI tool can be used."""
        ...

    async def execute(
        self,
        prompt: str,
        api_key: str,
        source_dir: str | None = None,
        context: str | None = None,
    ) -> GenerationResult:
        """Run the tool once and return its output as a GenerationResult."""
        command = self.build_command(prompt, context)
        cwd = self.working_dir(source_dir)
        env = {**os.environ, self.API_KEY_ENV: api_key}

        if self.settings.verbose:
            console.print(
                f"[dim]Calling {self.TOOL_NAME} CLI at {escape(command[0])} "
                f"(prompt length: {len(command[-1])} characters, cwd: {escape(cwd or '.')})[/]"
            )

        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
            )
        except OSError as e:
            return GenerationResult.fail(f"Failed to execute {self.TOOL_NAME.lower()} CLI: {e}")

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(),
                timeout=self.settings.timeout,
            )
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            return GenerationResult.fail(
                f"{self.TOOL_NAME} CLI timed out after {self.settings.timeout:g} seconds"
            )

        if proc.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace") if stderr else ""
            return GenerationResult.fail(f"{self.TOOL_NAME} CLI failed: {stderr_text}")

        try:
            stdout_text = stdout.decode("utf-8") if stdout else ""
        except UnicodeDecodeError as e:
            return GenerationResult.fail(f"Invalid UTF-8 in output: {e}")

        return GenerationResult.ok(stdout_text)
