"""
Abstract base class for text-generation providers.

New providers should inherit from TextProvider and implement generate().
Implementations raise ProviderError for transport, HTTP and decoding
failures and may return an empty string when the model produced nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextProvider(ABC):
    """Provider interface for prompt-in, text-out generation."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        purpose: str = "generate",
        temperature: float = 0.2,
        max_output_tokens: int = 1024,
    ) -> str:
        """Generate text for a prompt.

        Args:
            prompt: Natural-language prompt
            purpose: Short label used in LLM logs ("summary", "ranking")
            temperature: Sampling temperature
            max_output_tokens: Upper bound on generated tokens

        Returns:
            Generated text, possibly empty

        Raises:
            ProviderError: If the API call fails
        """
        raise NotImplementedError
