from datetime import date

import pytest
from pydantic import ValidationError

from movies_service.models.movie_info import MovieInfo

from fake_remote import movie_payload


def test_decodes_wire_format():
    movie = MovieInfo.model_validate(movie_payload())

    assert movie.movie_info_id == "abc"
    assert movie.release_date == date(2012, 7, 20)


def test_accepts_legacy_movie_info_id_and_missing_optionals():
    movie = MovieInfo.model_validate({"movieInfoId": "xyz", "name": "Batman Begins", "year": 2005})

    assert movie.movie_info_id == "xyz"
    assert movie.cast == []
    assert movie.release_date is None


def test_id_is_optional_on_create():
    movie = MovieInfo.model_validate(movie_payload(id=None))

    assert movie.movie_info_id is None


def test_to_wire_uses_remote_field_names():
    wire = MovieInfo.model_validate(movie_payload()).to_wire()

    assert wire == {
        "id": "abc",
        "name": "Dark Knight Rises",
        "year": 2012,
        "cast": ["Christian Bale", "Tom Hardy"],
        "releaseDate": "2012-07-20",
    }


def test_is_immutable():
    movie = MovieInfo.model_validate(movie_payload())

    with pytest.raises(ValidationError):
        movie.name = "Other"


def test_cast_order_is_preserved():
    cast = ["Tom Hardy", "Christian Bale", "Anne Hathaway"]

    assert MovieInfo.model_validate(movie_payload(cast=cast)).cast == cast


@pytest.mark.parametrize("overrides", [
    {"name": "   "}, {"year": None}, {"year": True}, {"year": "2005"}, {"cast": "Christian Bale"},
])
def test_rejects_ill_formed_records(overrides):
    with pytest.raises(ValidationError):
        MovieInfo.model_validate(movie_payload(**overrides))
