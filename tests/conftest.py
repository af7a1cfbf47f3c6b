import pytest

from movies_service.execution.http_client import HttpClientFactory
from movies_service.execution.retry_policy import RetryPolicy
from movies_service.transport.movies_info_client import MoviesInfoRestClient

from fake_remote import BASE_URL, SleepRecorder


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def make_client(sleeper):
    """Собирает MoviesInfoRestClient поверх ScriptedRemote."""

    def _make(remote, max_attempts=3, delay=1.0, policy=None, sleep=None):
        return MoviesInfoRestClient(
            base_url=BASE_URL,
            policy=policy or RetryPolicy(max_attempts=max_attempts, delay=delay),
            client_factory=HttpClientFactory(transport=remote.transport()),
            sleep=sleep or sleeper,
        )

    return _make
