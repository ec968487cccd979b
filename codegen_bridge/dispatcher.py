"""Request dispatch - validates a request and routes it to a provider."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from codegen_bridge.collector import collect_source_code
from codegen_bridge.config import BridgeSettings
from codegen_bridge.models import GenerationRequest, GenerationResult
from codegen_bridge.providers import get_provider

console = Console(stderr=True)


def validate_request(request: GenerationRequest) -> str | None:
    """Return an error message for the first missing required field, if any."""
    if not request.provider_type.strip():
        return "provider_type is required"
    if not request.api_key.get_secret_value():
        return "api_key is required"
    if not request.prompt.strip():
        return "prompt is required"
    return None


async def gather_context(source_dir: str, settings: BridgeSettings) -> str | None:
    """Collect project context, or None if it cannot be collected."""
    try:
        return await collect_source_code(source_dir, settings.source_extensions)
    except (OSError, ValueError) as e:
        console.print(f"[yellow]Warning:[/] Could not collect source code: {escape(str(e))}")
        return None


async def generate_code(
    request: GenerationRequest,
    settings: BridgeSettings | None = None,
) -> GenerationResult:
    """Generate code for ``request`` with the provider it names.

    Never raises for validation, filesystem or subprocess problems; they are
    reported through ``GenerationResult.error``.
    """
    settings = settings or BridgeSettings()

    if settings.verbose:
        console.print(
            f"[dim]Received request: provider_type={escape(request.provider_type)}, "
            f"api_key_len={len(request.api_key.get_secret_value())}, "
            f"source_dir={escape(str(request.source_dir))}[/]"
        )

    error = validate_request(request)
    if error:
        return GenerationResult.fail(error)

    try:
        provider = get_provider(request.provider_type, settings)
    except ValueError:
        return GenerationResult.fail(f"Unsupported provider type: {request.provider_type}")

    context = None
    if request.source_dir:
        context = await gather_context(request.source_dir, settings)

    return await provider.execute(
        request.prompt,
        request.api_key.get_secret_value(),
        source_dir=request.source_dir,
        context=context,
    )


async def check_cli_available(provider_type: str) -> bool:
    """Report whether the tool behind ``provider_type`` can be used."""
    try:
        provider = get_provider(provider_type)
    except ValueError:
        return False
    return await provider.is_available()
