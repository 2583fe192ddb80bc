from __future__ import annotations


class GenerationError(RuntimeError):
    def __init__(self, message: str, *, code: str = "generation_failed"):
        super().__init__(message)
        self.code = code


class ProviderError(GenerationError):
    """The vendor could not be reached, rejected the call, or is not configured."""

    def __init__(self, message: str, *, provider: str | None = None):
        super().__init__(message, code="provider_error")
        self.provider = provider


class ResponseUnusableError(GenerationError):
    """The vendor answered, but nothing schema-valid could be recovered."""

    def __init__(self, message: str):
        super().__init__(message, code="response_unusable")


class UnknownProviderError(ValueError):
    def __init__(self, provider: str, supported: tuple[str, ...]):
        super().__init__(f"Unknown AI provider: '{provider}'. Use one of: {', '.join(supported)}.")
        self.provider = provider
