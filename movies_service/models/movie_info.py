from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MovieInfo(BaseModel):
    """
    Карточка фильма из movies-info-service.
    Неизменяема после создания. На проводе camelCase (releaseDate).
    """
    # id может отсутствовать (при создании записи); старый контракт называл его movieInfoId
    movie_info_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("id", "movieInfoId", "movie_info_id"),
        serialization_alias="id",
    )
    name: str = Field(min_length=1)
    year: int = Field(strict=True)
    cast: List[str] = Field(default_factory=list)
    release_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("releaseDate", "release_date"),
        serialization_alias="releaseDate",
    )

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def to_wire(self) -> dict:
        """JSON-совместимый dict с именами полей как у удаленного сервиса."""
        return self.model_dump(mode="json", by_alias=True)
