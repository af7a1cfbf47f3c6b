import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import httpx

from movies_service.config.headers import get_headers

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """
    Фабрика HTTP-клиентов.
    Один httpx.AsyncClient на один вызов fetch: между вызовами нет общего состояния.
    Таймаут задается на каждую попытку отдельно (transport-level).
    """

    def __init__(
        self,
        timeout: Optional[httpx.Timeout] = None,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or httpx.Timeout(10.0, connect=5.0)
        self.follow_redirects = follow_redirects
        # Подмена транспорта (httpx.MockTransport в тестах)
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Any, transport: Optional[httpx.AsyncBaseTransport] = None) -> "HttpClientFactory":
        timeout = httpx.Timeout(
            connect=settings.HTTP_TIMEOUT_CONNECT,
            read=settings.HTTP_TIMEOUT_READ,
            write=settings.HTTP_TIMEOUT_WRITE,
            pool=settings.HTTP_TIMEOUT_POOL,
        )
        return cls(
            timeout=timeout,
            follow_redirects=settings.HTTP_FOLLOW_REDIRECTS,
            transport=transport,
        )

    @asynccontextmanager
    async def client(self) -> AsyncGenerator[httpx.AsyncClient, None]:
        """Создает контекст с настроенным клиентом."""
        # Попытки внутри одного fetch последовательны, больше пары соединений не нужно
        limits = httpx.Limits(max_keepalive_connections=1, max_connections=2)

        async with httpx.AsyncClient(
            headers=get_headers(),
            timeout=self.timeout,
            limits=limits,
            follow_redirects=self.follow_redirects,
            transport=self.transport,
        ) as client:
            yield client
