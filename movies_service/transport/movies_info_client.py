import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from movies_service.core.exceptions import FetchError, RetriesExhausted
from movies_service.execution.classifier import classify_response, classify_transport_error
from movies_service.execution.http_client import HttpClientFactory
from movies_service.execution.retry_policy import RetryPolicy, SleepFunc
from movies_service.models.movie_info import MovieInfo
from movies_service.models.outcome import (
    FetchOutcome,
    FetchResult,
    RetryableFailure,
    Success,
)

logger = logging.getLogger(__name__)


class MoviesInfoRestClient:
    """
    Клиент movies-info-service: GET <base_url>/{id} с политикой Resilience.

    Цикл: запрос -> классификация -> (повтор | возврат).
    Наружу уходит ровно одно значение: Success(MovieInfo) либо FetchError.
    Сырые исключения httpx наружу не выходят; отмена (CancelledError) пробрасывается.
    """

    def __init__(
        self,
        base_url: str,
        policy: Optional[RetryPolicy] = None,
        client_factory: Optional[HttpClientFactory] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.policy = policy or RetryPolicy()
        self.client_factory = client_factory or HttpClientFactory()
        # Подмена паузы между попытками (тесты)
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> "MoviesInfoRestClient":
        return cls(
            base_url=settings.MOVIES_INFO_URL,
            policy=RetryPolicy.from_settings(settings),
            client_factory=HttpClientFactory.from_settings(settings, transport=transport),
            sleep=sleep,
        )

    def url_for(self, movie_id: str) -> str:
        # id экранируем целиком: "/" внутри id не должен менять путь
        segment = quote(movie_id, safe='')
        # "." и ".." httpx схлопнет как dot-сегменты и уйдет выше по пути
        if set(segment) == {"."}:
            segment = segment.replace(".", "%2E")
        return f"{self.base_url}/{segment}"

    async def fetch(self, movie_id: str) -> FetchResult:
        """
        Получает MovieInfo по id.
        Делает от 1 до policy.max_attempts последовательных запросов.
        """
        if not movie_id or not movie_id.strip():
            raise ValueError("movie_id must be a non-empty string")

        url = self.url_for(movie_id)
        retrier = self.policy.build_retrier(sleep=self._sleep)

        async with self.client_factory.client() as client:
            outcome = await retrier(self._attempt, client, url, movie_id)

        return self._finalize(outcome, movie_id)

    async def fetch_or_raise(self, movie_id: str) -> MovieInfo:
        """То же, что fetch, но FetchError поднимается как исключение."""
        result = await self.fetch(movie_id)
        if isinstance(result, FetchError):
            raise result
        return result.movie

    async def _attempt(self, client: httpx.AsyncClient, url: str, movie_id: str) -> FetchOutcome:
        """Одна попытка. Никогда не бросает httpx-исключения: всё превращается в исход."""
        logger.debug(f"GET {url}")
        try:
            response = await client.get(url)
        except httpx.RequestError as e:
            outcome = classify_transport_error(e)
        else:
            outcome = classify_response(response, movie_id)

        if not isinstance(outcome, Success):
            logger.info(
                f"Attempt for movie_id={movie_id} failed. "
                f"Status code is: {outcome.status_code}. Kind: {outcome.kind.value}"
            )
        return outcome

    def _finalize(self, outcome: FetchOutcome, movie_id: str) -> FetchResult:
        if isinstance(outcome, Success):
            logger.info(f"MovieInfo fetched: id={movie_id}, name='{outcome.movie.name}'")
            return outcome

        if isinstance(outcome, RetryableFailure) and self.policy.is_exhausted(outcome):
            # Причина ПОСЛЕДНЕЙ попытки, а не первой
            error: FetchError = RetriesExhausted(outcome.cause, attempts=self.policy.max_attempts)
        else:
            error = outcome.cause

        logger.error(f"Failed to fetch MovieInfo id={movie_id}: {error}")
        return error
