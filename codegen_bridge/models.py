"""Request and result types exchanged with the host application."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr


class ProviderType(str, Enum):
    CURSOR = "CURSOR"
    CLAUDE_CODE = "CLAUDE_CODE"


PROVIDER_ALIASES: dict[str, ProviderType] = {
    "CURSOR": ProviderType.CURSOR,
    "CLAUDE_CODE": ProviderType.CLAUDE_CODE,
    "CLAUDE": ProviderType.CLAUDE_CODE,
}


def normalize_provider(name: str) -> ProviderType | None:
    """Resolve a provider identifier (case-insensitive, aliases allowed)."""
    return PROVIDER_ALIASES.get(name.strip().upper())


class GenerationRequest(BaseModel):
    """A code generation request.

    Payload keys may be camelCase (``providerType``) or snake_case
    (``provider_type``). Empty required fields are accepted here and rejected
    by the dispatcher, which reports them as a failed result.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    provider_type: str = Field(
        default="",
        validation_alias=AliasChoices("provider_type", "providerType"),
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("api_key", "apiKey"),
    )
    source_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("source_dir", "sourceDir"),
    )
    language: str | None = None
    framework: str | None = None
    context: str | None = None


@dataclass
class GenerationResult:
    """Outcome of a generation request."""

    code: str
    success: bool
    error: str | None = None

    @classmethod
    def ok(cls, code: str) -> "GenerationResult":
        return cls(code=code, success=True, error=None)

    @classmethod
    def fail(cls, error: str) -> "GenerationResult":
        return cls(code="", success=False, error=error)

    def to_payload(self) -> dict:
        return asdict(self)
