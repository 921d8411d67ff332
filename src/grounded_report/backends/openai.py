from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlparse

from grounded_report.errors import GenerationError
from grounded_report.model import LLMModel, LLMRequest

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434/v1"
DEFAULT_MODEL = "gemma3:12b"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_MAX_NEW_TOKENS = 256
DEFAULT_BASE_URL_ENV_VAR = "LLM_BASE_URL"
DEFAULT_MODEL_ENV_VAR = "LLM_MODEL"
# Ollama ignores the key but the client refuses to start without one.
LOCAL_PLACEHOLDER_API_KEY = "ollama"

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}

_STATUS_DESCRIPTIONS = {
    400: "Bad request (400): invalid request parameters",
    401: "Unauthorized (401): API key is invalid or expired, check LLM_API_KEY",
    403: "Forbidden (403): no access to this model",
    404: "Not found (404): model does not exist, check LLM_MODEL",
    422: "Unprocessable entity (422): malformed request",
    429: "Rate limited (429): too many requests",
    500: "Internal server error (500)",
    502: "Bad gateway (502)",
    503: "Service unavailable (503)",
    504: "Gateway timeout (504)",
}


@dataclass(frozen=True)
class OpenAIBackendConfig:
    api_key: str | None = None
    api_key_env_var: str = "LLM_API_KEY"
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    top_p: float = DEFAULT_TOP_P
    max_new_tokens: int | None = DEFAULT_MAX_NEW_TOKENS
    timeout_seconds: float | None = 120.0


def _default_client_factory(api_key: str, base_url: str) -> Any:
    from openai import OpenAI

    return OpenAI(api_key=api_key, base_url=base_url)


def _extract_text_content(raw_content: Any) -> str:
    if isinstance(raw_content, str):
        return raw_content
    if isinstance(raw_content, list):
        parts: list[str] = []
        for item in raw_content:
            if isinstance(item, dict) and item.get("type") == "text":
                text = item.get("text", "")
                if isinstance(text, str):
                    parts.append(text)
            else:
                text = getattr(item, "text", "")
                if isinstance(text, str):
                    parts.append(text)
        return "".join(parts)
    return ""


def _extract_message_content(message: Any) -> str:
    content = getattr(message, "content", None)
    if content:
        return _extract_text_content(content)
    return ""


def format_status_error(status: int, exc: Exception, task: str) -> str:
    desc = _STATUS_DESCRIPTIONS.get(status, f"HTTP {status} error")
    return f"[{task}] {desc}. Detail: {str(exc)[:200]}"


class OpenAILLMModel(LLMModel):
    """Chat-completions backend for any OpenAI-compatible endpoint.

    The default endpoint is a local Ollama server. One call per ``generate``;
    retries belong to ``RetryingGenerator``.
    """

    def __init__(
        self,
        config: OpenAIBackendConfig | None = None,
        client: Any | None = None,
        client_factory: Callable[[str, str], Any] | None = None,
    ) -> None:
        self._config = config or OpenAIBackendConfig()
        self._base_url = self._resolve_base_url(self._config)
        self._model = self._resolve_model(self._config)
        if client is not None:
            self._client = client
            return

        api_key = self._resolve_api_key(self._config, self._base_url)
        factory = client_factory or _default_client_factory
        self._client = factory(api_key, self._base_url)

    @property
    def model_name(self) -> str:
        return self._model

    def _build_create_kwargs(self, request: LLMRequest) -> dict[str, Any]:
        options = request.options
        temperature = options.temperature if options.temperature is not None else self._config.temperature
        top_p = options.top_p if options.top_p is not None else self._config.top_p
        max_tokens = options.max_tokens if options.max_tokens is not None else self._config.max_new_tokens

        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": temperature,
            "top_p": top_p,
        }
        if max_tokens is not None:
            create_kwargs["max_tokens"] = max_tokens
        if options.stop_sequences:
            create_kwargs["stop"] = list(options.stop_sequences)
        if self._config.timeout_seconds is not None:
            create_kwargs["timeout"] = self._config.timeout_seconds
        return create_kwargs

    def generate(self, request: LLMRequest) -> str:
        create_kwargs = self._build_create_kwargs(request)
        logger.info(f"[LLM] [{request.task}] Request: prompt_len={len(request.prompt)} chars")

        start_time = time.time()
        try:
            response = self._client.chat.completions.create(**create_kwargs)
        except Exception as exc:
            raise self._wrap_error(exc, request) from exc
        elapsed = time.time() - start_time

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise GenerationError(f"[{request.task}] Response contained no choices")
        result = _extract_message_content(choices[0].message).strip()

        logger.info(f"[LLM] [{request.task}] Response: len={len(result)} chars, time={elapsed:.2f}s")
        logger.debug(f"[LLM] [{request.task}] Raw output:\n{result[:500]}{'...' if len(result) > 500 else ''}")
        return result

    def stream_generate(self, request: LLMRequest, callback: Callable[[str], None]) -> None:
        create_kwargs = self._build_create_kwargs(request)
        create_kwargs["stream"] = True
        logger.info(f"[LLM] [{request.task}] Stream request: prompt_len={len(request.prompt)} chars")

        try:
            stream = self._client.chat.completions.create(**create_kwargs)
            for event in stream:
                choices = getattr(event, "choices", None) or []
                if not choices:
                    continue
                delta = getattr(choices[0], "delta", None)
                text = _extract_text_content(getattr(delta, "content", None))
                if text:
                    callback(text)
        except GenerationError:
            raise
        except Exception as exc:
            raise self._wrap_error(exc, request) from exc

    def _wrap_error(self, exc: Exception, request: LLMRequest) -> GenerationError:
        status = getattr(exc, "status_code", None)
        if isinstance(status, int):
            return GenerationError(format_status_error(status, exc, request.task))
        if "valid model ID" in str(exc):
            return GenerationError(
                f"[{request.task}] Invalid model id for current provider. "
                f"Please set {DEFAULT_MODEL_ENV_VAR} to a valid model id (current: {self._model})."
            )
        return GenerationError(f"[{request.task}] Generation request failed: {exc}")

    @staticmethod
    def _resolve_api_key(config: OpenAIBackendConfig, base_url: str) -> str:
        if config.api_key:
            return config.api_key
        env_value = os.getenv(config.api_key_env_var, "").strip()
        if env_value:
            return env_value
        if urlparse(base_url).hostname in _LOCAL_HOSTS:
            return LOCAL_PLACEHOLDER_API_KEY
        raise ValueError(
            f"Missing API key. Set {config.api_key_env_var} or pass api_key in OpenAIBackendConfig."
        )

    @staticmethod
    def _resolve_base_url(config: OpenAIBackendConfig) -> str:
        env_base_url = os.getenv(DEFAULT_BASE_URL_ENV_VAR, "").strip()
        if env_base_url and config.base_url == DEFAULT_BASE_URL:
            return env_base_url
        return config.base_url

    @staticmethod
    def _resolve_model(config: OpenAIBackendConfig) -> str:
        env_model = os.getenv(DEFAULT_MODEL_ENV_VAR, "").strip()
        if env_model and config.model == DEFAULT_MODEL:
            return env_model
        return config.model


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_TOP_P",
    "DEFAULT_BASE_URL_ENV_VAR",
    "DEFAULT_MODEL_ENV_VAR",
    "LOCAL_PLACEHOLDER_API_KEY",
    "OpenAIBackendConfig",
    "OpenAILLMModel",
    "format_status_error",
]
