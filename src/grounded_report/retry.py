from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from grounded_report.errors import GenerationError
from grounded_report.model import GenerationOptions, LLMModel, LLMRequest, LLMTask

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY_SECONDS = 1.0


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = DEFAULT_MAX_RETRIES
    delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    # Receives the zero-based index of the failed attempt.
    delay_fn: Callable[[int], float] | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        if self.delay_fn is not None:
            return max(0.0, float(self.delay_fn(attempt)))
        return self.delay_seconds

    @classmethod
    def no_delay(cls, max_retries: int = DEFAULT_MAX_RETRIES) -> "RetryPolicy":
        return cls(max_retries=max_retries, delay_seconds=0.0)


class RetryingGenerator:
    """Wraps a model with a bounded retry loop.

    Every pipeline stage talks to the model through this class. It keeps no
    per-call state, so one instance can be shared across threads and runs.
    """

    def __init__(
        self,
        model: LLMModel,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._model = model
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def generate(self, request: LLMRequest) -> str:
        last_error: Exception | None = None
        attempts = self._policy.max_attempts

        for attempt in range(attempts):
            try:
                start_time = time.time()
                result = self._model.generate(request)
                elapsed = time.time() - start_time
                logger.debug(
                    f"[Retry] [{request.task}] attempt {attempt + 1}/{attempts} ok "
                    f"in {elapsed:.2f}s, len={len(result)} chars"
                )
                return result
            except Exception as exc:
                last_error = exc
                logger.warning(
                    f"[Retry] [{request.task}] attempt {attempt + 1}/{attempts} failed: {exc}"
                )
                if attempt < attempts - 1:
                    delay = self._policy.delay_for(attempt)
                    if delay > 0:
                        self._sleep(delay)

        raise GenerationError(
            f"[{request.task}] generation failed after {attempts} attempts: {last_error}"
        ) from last_error

    def generate_text(
        self,
        prompt: str,
        options: GenerationOptions | None = None,
        task: LLMTask = "single_pass",
    ) -> str:
        return self.generate(
            LLMRequest(task=task, prompt=prompt, options=options or GenerationOptions())
        )


__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_SECONDS",
    "RetryPolicy",
    "RetryingGenerator",
]
