from typing import Dict

from movies_service import __version__

# Сервис отдает только JSON.
# Accept-Encoding не задаем: httpx сам добавит gzip/deflate и распакует ответ.
BASE_HEADERS = {
    "Accept": "application/json",
    "Connection": "keep-alive",
}

USER_AGENT = f"movies-service/{__version__} (+httpx)"


def get_headers() -> Dict[str, str]:
    """Заголовки для запроса к movies-info-service."""
    headers = BASE_HEADERS.copy()
    headers["User-Agent"] = USER_AGENT
    return headers
