"""Environment configuration loader."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from codegen_bridge.models import ProviderType, normalize_provider

API_KEY_ENV_VARS: dict[ProviderType, str] = {
    ProviderType.CURSOR: "CURSOR_API_KEY",
    ProviderType.CLAUDE_CODE: "ANTHROPIC_API_KEY",
}


def load_environment(*search_dirs: str | Path | None) -> Path | None:
    """Load provider credentials from the first .env file found.

    ``search_dirs`` (typically the project being generated for) are tried
    before the current directory. Variables already exported win over the
    file. Returns the file that was loaded, if any.
    """
    candidates = [Path(d) / ".env" for d in search_dirs if d]
    candidates.append(Path.cwd() / ".env")

    for env_path in candidates:
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            return env_path
    return None


def get_api_key(provider: str) -> str | None:
    """Get the credential for a provider identifier from the environment.

    Args:
        provider: Provider identifier ('CURSOR', 'CLAUDE_CODE', 'claude', ...)

    Returns:
        The credential, or None if the provider is unknown or the variable is unset
    """
    provider_type = normalize_provider(provider)
    if provider_type is None:
        return None

    return os.getenv(API_KEY_ENV_VARS[provider_type])
