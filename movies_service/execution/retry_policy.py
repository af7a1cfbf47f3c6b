import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, FrozenSet, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from movies_service.models.common import FailureKind
from movies_service.models.outcome import FetchOutcome, RetryableFailure

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]

DEFAULT_RETRYABLE_KINDS: FrozenSet[FailureKind] = frozenset({
    FailureKind.SERVER_ERROR,
    FailureKind.TRANSPORT,
})


def _return_last_outcome(retry_state: RetryCallState) -> FetchOutcome:
    # Бюджет исчерпан: отдаем исход последней попытки, а не RetryError
    return retry_state.outcome.result()


@dataclass(frozen=True)
class RetryPolicy:
    """
    Политика повторов. Создается один раз, только чтение,
    безопасно делится между конкурентными fetch.
    """
    max_attempts: int = 3
    delay: float = 1.0
    retryable_kinds: FrozenSet[FailureKind] = DEFAULT_RETRYABLE_KINDS

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")
        # set/list -> frozenset, чтобы политика оставалась неизменяемой
        object.__setattr__(self, "retryable_kinds", frozenset(self.retryable_kinds))

    @classmethod
    def from_settings(cls, settings: Any) -> "RetryPolicy":
        return cls(max_attempts=settings.RETRY_MAX_ATTEMPTS, delay=settings.RETRY_DELAY)

    def should_retry(self, outcome: FetchOutcome) -> bool:
        """Чистый предикат: только RetryableFailure нужного типа."""
        return isinstance(outcome, RetryableFailure) and outcome.kind in self.retryable_kinds

    def is_exhausted(self, outcome: FetchOutcome) -> bool:
        """
        Итоговый исход после retrier: если он все еще ретраибельный,
        значит остановились по бюджету попыток.
        """
        return self.should_retry(outcome)

    def build_retrier(self, sleep: Optional[SleepFunc] = None) -> AsyncRetrying:
        """
        Новый retrier на каждый fetch: у tenacity есть состояние (statistics).
        Попытки строго последовательны, пауза фиксированная.
        """
        return AsyncRetrying(
            sleep=sleep or asyncio.sleep,
            retry=retry_if_result(self.should_retry),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.delay),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            retry_error_callback=_return_last_outcome,
        )
