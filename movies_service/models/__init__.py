from movies_service.models.common import FailureKind, ErrorDetail
from movies_service.models.movie_info import MovieInfo

# outcome.py сюда не тянем: он зависит от core.exceptions, а тот от models.common.

__all__ = [
    "FailureKind",
    "ErrorDetail",
    "MovieInfo",
]
