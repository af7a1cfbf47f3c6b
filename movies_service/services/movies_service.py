import logging
from typing import Optional

from pydantic import BaseModel

from movies_service.core.exceptions import (
    FetchError,
    NotFound,
    RetriesExhausted,
    TransportFailure,
)
from movies_service.models.common import ErrorDetail
from movies_service.models.movie_info import MovieInfo
from movies_service.transport.movies_info_client import MoviesInfoRestClient

logger = logging.getLogger(__name__)


def http_status_for(error: FetchError) -> int:
    """
    Какой статус отдать СВОЕМУ вызывающему.
    "Ресурса нет" (404) нельзя путать с "зависимость недоступна" (5xx).
    """
    if isinstance(error, NotFound):
        return 404

    cause = error.last_cause if isinstance(error, RetriesExhausted) else error
    # До сервиса не достучались
    if isinstance(cause, TransportFailure):
        return 503

    # Сервис ответил, но некорректно (4xx на наш запрос, 5xx, битое тело)
    return 502


class MovieInfoResponse(BaseModel):
    """Ответ сервиса: либо movie, либо error."""
    status_code: int
    movie: Optional[MovieInfo] = None
    error: Optional[ErrorDetail] = None


class MoviesService:
    """Точка входа для контроллера: id -> MovieInfoResponse."""

    def __init__(self, info_client: MoviesInfoRestClient):
        self.info_client = info_client

    async def retrieve_movie_info(self, movie_id: str) -> MovieInfoResponse:
        result = await self.info_client.fetch(movie_id)

        if isinstance(result, FetchError):
            status = http_status_for(result)
            logger.warning(f"Responding {status} for movie_id={movie_id} ({result.kind.value})")
            return MovieInfoResponse(
                status_code=status,
                error=result.to_detail(movie_id=movie_id),
            )

        return MovieInfoResponse(status_code=200, movie=result.movie)
