import unittest
from typing import List

from path_setup import ensure_src_path

ensure_src_path()

from grounded_report.errors import GenerationError
from grounded_report.model import GenerationOptions, LLMRequest
from grounded_report.retry import RetryingGenerator, RetryPolicy


class FlakyModel:
    def __init__(self, failures: int, result: str = "ok") -> None:
        self._failures = failures
        self._result = result
        self.requests: List[LLMRequest] = []

    def generate(self, request: LLMRequest) -> str:
        self.requests.append(request)
        if len(self.requests) <= self._failures:
            raise RuntimeError(f"boom {len(self.requests)}")
        return self._result


def _request() -> LLMRequest:
    return LLMRequest(task="fact_extraction", prompt="extract")


class RetryingGeneratorTests(unittest.TestCase):
    def test_returns_after_transient_failures(self) -> None:
        model = FlakyModel(failures=2)
        sleeps: List[float] = []
        generator = RetryingGenerator(model, sleep=sleeps.append)

        self.assertEqual(generator.generate(_request()), "ok")
        self.assertEqual(len(model.requests), 3)
        self.assertEqual(sleeps, [1.0, 1.0])

    def test_raises_last_error_after_exhausting_retries(self) -> None:
        model = FlakyModel(failures=10)
        generator = RetryingGenerator(model, policy=RetryPolicy.no_delay())

        with self.assertRaises(GenerationError) as cm:
            generator.generate(_request())

        self.assertEqual(len(model.requests), 3)
        self.assertIn("boom 3", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, RuntimeError)
        self.assertEqual(str(cm.exception.__cause__), "boom 3")

    def test_zero_retries_means_single_attempt(self) -> None:
        model = FlakyModel(failures=1)
        generator = RetryingGenerator(model, policy=RetryPolicy.no_delay(max_retries=0))

        with self.assertRaises(GenerationError):
            generator.generate(_request())
        self.assertEqual(len(model.requests), 1)

    def test_delay_function_controls_waits(self) -> None:
        model = FlakyModel(failures=2)
        sleeps: List[float] = []
        policy = RetryPolicy(delay_fn=lambda attempt: attempt + 0.5)
        generator = RetryingGenerator(model, policy=policy, sleep=sleeps.append)

        generator.generate(_request())
        self.assertEqual(sleeps, [0.5, 1.5])

    def test_zero_delay_policy_never_sleeps(self) -> None:
        model = FlakyModel(failures=2)
        sleeps: List[float] = []
        generator = RetryingGenerator(model, policy=RetryPolicy.no_delay(), sleep=sleeps.append)

        generator.generate(_request())
        self.assertEqual(sleeps, [])

    def test_generate_text_builds_request(self) -> None:
        model = FlakyModel(failures=0, result="text")
        generator = RetryingGenerator(model)
        options = GenerationOptions(max_tokens=150, temperature=0.4)

        result = generator.generate_text("plan it", options, task="outline_planning")

        self.assertEqual(result, "text")
        self.assertEqual(model.requests[0].task, "outline_planning")
        self.assertEqual(model.requests[0].prompt, "plan it")
        self.assertEqual(model.requests[0].options, options)

    def test_negative_retries_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RetryPolicy(max_retries=-1)


if __name__ == "__main__":
    unittest.main()
