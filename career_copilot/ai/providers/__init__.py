from .deepseek_provider import DeepSeekProvider
from .gemini_provider import GeminiProvider

__all__ = ["DeepSeekProvider", "GeminiProvider"]
