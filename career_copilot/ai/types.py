from __future__ import annotations

from typing import Any, Literal, Protocol

Provider = Literal["gemini", "deepseek"]


class AIClient(Protocol):
    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system: str | None = None,
        response_schema: type[Any] | None = None,
    ) -> str: ...
