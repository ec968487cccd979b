"""Codegen Bridge - run Cursor or Claude Code CLIs with project context."""

from codegen_bridge.collector import SourceDirectoryNotFoundError, collect_source_code
from codegen_bridge.dispatcher import check_cli_available, generate_code
from codegen_bridge.models import GenerationRequest, GenerationResult, ProviderType

__version__ = "0.1.0"

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "ProviderType",
    "SourceDirectoryNotFoundError",
    "check_cli_available",
    "collect_source_code",
    "generate_code",
]
