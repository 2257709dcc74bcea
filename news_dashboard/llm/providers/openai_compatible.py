"""OpenAI-compatible chat completions provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ...exceptions import ConfigurationError, ProviderError
from ...logging_utils import log_event, redact_text, truncate_text
from .base import TextProvider


class OpenAICompatibleProvider(TextProvider):
    """Text generation through any /chat/completions endpoint."""

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigurationError("Missing OpenAI-compatible API key")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger
        self.transport = transport

    def generate(
        self,
        prompt: str,
        *,
        purpose: str = "generate",
        temperature: float = 0.2,
        max_output_tokens: int = 1024,
    ) -> str:
        payload = {
            "model": self.cfg.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_output_tokens,
        }
        # Undecodable bodies raise JSONDecodeError or UnicodeDecodeError, both ValueErrors
        try:
            data = self._post(payload)
        except (httpx.HTTPError, ValueError) as exc:
            self._log_llm_response(purpose, "provider_error", str(exc), prompt)
            raise ProviderError(f"Chat completion failed: {type(exc).__name__}: {exc}") from exc

        content = _extract_text(data)
        self._log_llm_response(purpose, "ok" if content else "empty", content, prompt)
        return content

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        with httpx.Client(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _log_llm_response(self, purpose: str, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": f"llm_{purpose}",
            "status": status,
            "provider": "openai_compatible",
            "model": self.cfg.model,
            "raw_response": truncate_text(redact_text(content, redaction)),
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def _extract_text(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(content, str):
        return ""
    return content.strip()
