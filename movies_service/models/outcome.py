from dataclasses import dataclass
from typing import Optional, Union

from movies_service.core.exceptions import FetchError
from movies_service.models.common import FailureKind
from movies_service.models.movie_info import MovieInfo

# Результат ОДНОЙ попытки. Живет только пока retry-цикл решает, что делать дальше.


@dataclass(frozen=True)
class Success:
    movie: MovieInfo
    status_code: int = 200


@dataclass(frozen=True)
class RetryableFailure:
    """Сбой, после которого имеет смысл повторить (5xx, транспорт)."""
    cause: FetchError
    status_code: Optional[int] = None

    @property
    def kind(self) -> FailureKind:
        return self.cause.kind


@dataclass(frozen=True)
class TerminalFailure:
    """Сбой, который повтор не исправит (404, 4xx, битое тело)."""
    cause: FetchError
    status_code: Optional[int] = None

    @property
    def kind(self) -> FailureKind:
        return self.cause.kind


FetchOutcome = Union[Success, RetryableFailure, TerminalFailure]

# То, что получает вызывающий: либо данные, либо одна ошибка из таксономии.
FetchResult = Union[Success, FetchError]
