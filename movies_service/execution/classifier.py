import logging

import httpx
from pydantic import ValidationError

from movies_service.core.exceptions import (
    ClientError,
    MalformedResponse,
    NotFound,
    ServerError,
    TransportFailure,
)
from movies_service.models.movie_info import MovieInfo
from movies_service.models.outcome import (
    FetchOutcome,
    RetryableFailure,
    Success,
    TerminalFailure,
)

logger = logging.getLogger(__name__)

# Сколько символов тела ответа тащить в сообщение об ошибке
MAX_BODY_IN_MESSAGE = 500


def _body_text(response: httpx.Response) -> str:
    # httpx декодирует с errors="replace", так что тут не падаем
    return response.text.strip()[:MAX_BODY_IN_MESSAGE]


def _describe_validation_error(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    return f"{e.error_count()} validation error(s), first at '{location}': {first['msg']}"


def classify_response(response: httpx.Response, movie_id: str) -> FetchOutcome:
    """
    Классификатор ответа (ответ получен). Определяет стратегию Retry vs Fail Fast.
    Ничего не бросает: любой ответ превращается в один из трех исходов.
    """
    status = response.status_code

    # 1. 2xx -> пробуем разобрать тело. Битое тело НЕ ретраим.
    if response.is_success:
        try:
            movie = MovieInfo.model_validate_json(response.content)
        except ValidationError as e:
            logger.debug(f"Body for movie_id={movie_id} does not decode into MovieInfo: {e}")
            return TerminalFailure(
                MalformedResponse(status, f"Response body is not a valid MovieInfo: {_describe_validation_error(e)}"),
                status_code=status,
            )
        return Success(movie, status_code=status)

    # 2. 404 -> ресурса нет (Terminal)
    if status == 404:
        return TerminalFailure(NotFound(movie_id), status_code=status)

    # 3. Прочие 4xx -> дефект запроса (Terminal), тело ответа в сообщение
    if response.is_client_error:
        return TerminalFailure(ClientError(status, _body_text(response)), status_code=status)

    # 4. 5xx -> может быть временным (Retry)
    if response.is_server_error:
        return RetryableFailure(ServerError(_body_text(response), status_code=status), status_code=status)

    # 5. 1xx/3xx после редиректов: ресурс так не получить
    return TerminalFailure(
        ClientError(status, f"Unexpected status {status}: {_body_text(response)}"),
        status_code=status,
    )


def classify_transport_error(e: httpx.RequestError) -> FetchOutcome:
    """
    Ошибки без HTTP-ответа. Почти все считаем временными:
    внутренний сервис мог рестартовать, а число попыток ограничено политикой.
    """
    # Петля редиректов стабильна: повтор даст еще max_redirects запросов впустую
    if isinstance(e, httpx.TooManyRedirects):
        error = ClientError(None, f"Redirect loop: {e!r}")
        error.__cause__ = e
        return TerminalFailure(error)

    # Таймаут конкретной попытки (connect/read/write/pool)
    if isinstance(e, httpx.TimeoutException):
        return RetryableFailure(TransportFailure(f"Timeout: {e!r}", cause=e))

    # ConnectError (Connection Refused, DNS)
    if isinstance(e, httpx.ConnectError):
        return RetryableFailure(TransportFailure(f"Connection Failed: {e!r}", cause=e))

    # ReadError, RemoteProtocolError, etc
    return RetryableFailure(TransportFailure(f"Network Glitch: {e!r}", cause=e))
