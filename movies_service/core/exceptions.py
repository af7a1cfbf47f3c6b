from typing import Optional

from movies_service.models.common import ErrorDetail, FailureKind


class AppBaseError(Exception):
    """Базовый класс ошибок."""
    pass


class FetchError(AppBaseError):
    """
    Терминальная ошибка получения MovieInfo.
    Клиент ВОЗВРАЩАЕТ её как значение; raise остается на усмотрение вызывающего.
    """
    kind: FailureKind = FailureKind.CLIENT_ERROR
    retryable: bool = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self, **context) -> ErrorDetail:
        return ErrorDetail(
            code=self.kind,
            message=self.message,
            status_code=self.status_code,
            retryable=self.retryable,
            context=context,
        )


class NotFound(FetchError):
    """404. Ресурса нет, это стабильный факт: не ретраим."""
    kind = FailureKind.NOT_FOUND

    def __init__(self, movie_id: str, message: Optional[str] = None):
        self.movie_id = movie_id
        super().__init__(
            message or f"There is no MovieInfo available for the passed id: {movie_id}",
            status_code=404,
        )


class ClientError(FetchError):
    """4xx (кроме 404). Дефект запроса сам не исправится."""
    kind = FailureKind.CLIENT_ERROR

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message, status_code=status_code)

    def __str__(self) -> str:
        if self.status_code is None:
            return f"Client Error: {self.message}"
        return f"Client Error {self.status_code}: {self.message}"


class MalformedResponse(ClientError):
    """2xx, но тело не превращается в MovieInfo. Дефект на нашей стороне разбора."""
    kind = FailureKind.MALFORMED_RESPONSE

    def __str__(self) -> str:
        return f"Malformed response (HTTP {self.status_code}): {self.message}"


class ServerError(FetchError):
    """5xx. Возможно временный сбой (перегрузка, рестарт)."""
    kind = FailureKind.SERVER_ERROR
    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)

    def __str__(self) -> str:
        return f"Server Exception in MoviesInfoService (HTTP {self.status_code}): {self.message}"


class TransportFailure(FetchError):
    """
    Ответа нет вообще (ConnectError, Timeout, DNS).
    Промежуточная причина: обычно уходит внутрь RetriesExhausted.
    Исходное исключение httpx хранится в __cause__.
    """
    kind = FailureKind.TRANSPORT
    retryable = True

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"Transport failure: {self.message}"


class RetriesExhausted(FetchError):
    """
    Бюджет попыток исчерпан. Несет причину ПОСЛЕДНЕЙ попытки,
    message и status_code берутся из неё.
    """
    kind = FailureKind.RETRIES_EXHAUSTED

    def __init__(self, last_cause: FetchError, attempts: int):
        self.last_cause = last_cause
        self.attempts = attempts
        super().__init__(last_cause.message, status_code=last_cause.status_code)
        self.__cause__ = last_cause

    def __str__(self) -> str:
        return f"Retries exhausted after {self.attempts} attempts. Last cause: {self.last_cause}"

    def to_detail(self, **context) -> ErrorDetail:
        context.setdefault("attempts", self.attempts)
        context.setdefault("last_cause", self.last_cause.kind.value)
        return super().to_detail(**context)
