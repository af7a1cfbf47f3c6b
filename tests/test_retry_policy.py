"""RetryPolicy как чистый предикат над исходами и retrier tenacity, который она строит."""

import asyncio
import dataclasses

import pytest

from movies_service.core.exceptions import (
    ClientError,
    MalformedResponse,
    NotFound,
    ServerError,
    TransportFailure,
)
from movies_service.config.settings import Settings
from movies_service.execution.retry_policy import DEFAULT_RETRYABLE_KINDS, RetryPolicy
from movies_service.models.common import FailureKind
from movies_service.models.movie_info import MovieInfo
from movies_service.models.outcome import RetryableFailure, Success, TerminalFailure

from fake_remote import SleepRecorder

SERVER_DOWN = RetryableFailure(ServerError("down", status_code=500), status_code=500)
CONNECTION_REFUSED = RetryableFailure(TransportFailure("Connection Failed"))


class TestShouldRetry:

    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.delay == 1.0
        assert policy.retryable_kinds == DEFAULT_RETRYABLE_KINDS

    @pytest.mark.parametrize("outcome", [SERVER_DOWN, CONNECTION_REFUSED])
    def test_retryable_failures_are_retried(self, outcome):
        assert RetryPolicy().should_retry(outcome) is True

    @pytest.mark.parametrize("outcome", [
        Success(MovieInfo(name="Batman Begins", year=2005)),
        TerminalFailure(NotFound("abc"), status_code=404),
        TerminalFailure(ClientError(400, "bad"), status_code=400),
        TerminalFailure(MalformedResponse(200, "bad body"), status_code=200),
    ])
    def test_success_and_terminal_are_never_retried(self, outcome):
        assert RetryPolicy().should_retry(outcome) is False

    def test_kind_outside_policy_is_not_retried(self):
        policy = RetryPolicy(retryable_kinds={FailureKind.SERVER_ERROR})

        assert policy.should_retry(SERVER_DOWN) is True
        assert policy.should_retry(CONNECTION_REFUSED) is False

    def test_terminal_with_retryable_kind_still_not_retried(self):
        # Тег исхода важнее типа причины
        outcome = TerminalFailure(ServerError("down", status_code=500), status_code=500)

        assert RetryPolicy().should_retry(outcome) is False


class TestPolicyValidation:

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"max_attempts": -1}, {"delay": -0.5}])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)

    def test_policy_is_immutable(self):
        policy = RetryPolicy(retryable_kinds=[FailureKind.TRANSPORT])

        assert isinstance(policy.retryable_kinds, frozenset)
        with pytest.raises(dataclasses.FrozenInstanceError):
            policy.max_attempts = 10

    def test_from_settings(self):
        settings = Settings(_env_file=None, RETRY_MAX_ATTEMPTS=5, RETRY_DELAY=0.25)

        policy = RetryPolicy.from_settings(settings)

        assert policy.max_attempts == 5
        assert policy.delay == 0.25


class TestRetrier:

    def test_retrier_stops_at_max_attempts_and_returns_last_outcome(self):
        sleeper = SleepRecorder()
        policy = RetryPolicy(max_attempts=4, delay=2.0)
        outcomes = [
            RetryableFailure(ServerError(f"down-{i}", status_code=500), status_code=500)
            for i in range(1, 10)
        ]
        calls = []

        async def attempt():
            calls.append(1)
            return outcomes[len(calls) - 1]

        last = asyncio.run(policy.build_retrier(sleep=sleeper)(attempt))

        assert len(calls) == 4
        assert last.cause.message == "down-4"
        assert policy.is_exhausted(last)
        assert sleeper.delays == [2.0, 2.0, 2.0]

    def test_retrier_returns_terminal_immediately(self):
        sleeper = SleepRecorder()
        terminal = TerminalFailure(NotFound("abc"), status_code=404)

        async def attempt():
            return terminal

        result = asyncio.run(RetryPolicy().build_retrier(sleep=sleeper)(attempt))

        assert result is terminal
        assert not RetryPolicy().is_exhausted(result)
        assert sleeper.delays == []

    def test_shared_policy_builds_independent_retriers(self):
        policy = RetryPolicy(max_attempts=2, delay=0.0)
        counters = {"a": 0, "b": 0}

        def attempt_for(key):
            async def attempt():
                counters[key] += 1
                return SERVER_DOWN
            return attempt

        async def scenario():
            await asyncio.gather(
                policy.build_retrier(sleep=SleepRecorder())(attempt_for("a")),
                policy.build_retrier(sleep=SleepRecorder())(attempt_for("b")),
            )

        asyncio.run(scenario())

        assert counters == {"a": 2, "b": 2}
