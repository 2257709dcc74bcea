"""Text generation: providers, prompts and reply parsing."""

from .json_parser import parse_ranked_ids
from .prompts import build_ranking_prompt, build_summary_prompt
from .providers import (
    GeminiProvider,
    OpenAICompatibleProvider,
    TextProvider,
    available_providers,
    create_provider,
)

__all__ = [
    "TextProvider",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "create_provider",
    "available_providers",
    "build_summary_prompt",
    "build_ranking_prompt",
    "parse_ranked_ids",
]
