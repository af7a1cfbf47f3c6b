from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Типы сбоев при запросе к movies-info-service (для решения о ретраях)."""
    NOT_FOUND = "not_found"                    # 404, ресурса нет
    CLIENT_ERROR = "client_error"              # 4xx кроме 404, дефект запроса
    MALFORMED_RESPONSE = "malformed_response"  # 2xx, но тело не разобрать
    SERVER_ERROR = "server_error"              # 5xx
    TRANSPORT = "transport"                    # Timeout, Connection Refused, DNS
    RETRIES_EXHAUSTED = "retries_exhausted"    # Бюджет попыток исчерпан


class ErrorDetail(BaseModel):
    """Структурированная ошибка для логов и ответа вызывающей стороне"""
    code: FailureKind
    message: str
    status_code: Optional[int] = None
    retryable: bool = False
    context: Optional[Dict[str, Any]] = Field(default_factory=dict, description="Доп. данные (movie_id, attempts, last_cause)")
