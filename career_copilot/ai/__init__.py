from .errors import GenerationError, ProviderError, ResponseUnusableError, UnknownProviderError
from .factory import ProviderRouter, call_ai, get_ai_client, get_provider_router

__all__ = [
    "GenerationError",
    "ProviderError",
    "ResponseUnusableError",
    "UnknownProviderError",
    "ProviderRouter",
    "call_ai",
    "get_ai_client",
    "get_provider_router",
]
