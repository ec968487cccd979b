"""Provider abstractions - wrappers for code generation CLI tools."""

from codegen_bridge.config import BridgeSettings
from codegen_bridge.models import ProviderType, normalize_provider
from codegen_bridge.providers.base import BaseProvider
from codegen_bridge.providers.claude_code import ClaudeCodeProvider
from codegen_bridge.providers.cursor_cli import CursorCLIProvider

PROVIDERS: dict[ProviderType, type[BaseProvider]] = {
    ProviderType.CURSOR: CursorCLIProvider,
    ProviderType.CLAUDE_CODE: ClaudeCodeProvider,
}


def get_provider(name: str, settings: BridgeSettings | None = None) -> BaseProvider:
    """Get a provider by identifier (case-insensitive, 'CLAUDE' is accepted)."""
    provider_type = normalize_provider(name)
    if provider_type is None:
        raise ValueError(
            f"Unsupported provider type: {name}. "
            f"Available: {[p.value for p in PROVIDERS]}"
        )
    return PROVIDERS[provider_type](settings=settings)

__all__ = [
    "BaseProvider",
    "ClaudeCodeProvider",
    "CursorCLIProvider",
    "get_provider",
    "PROVIDERS",
]
