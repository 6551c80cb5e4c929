from typing import Literal

from pydantic import BaseModel, ConfigDict

from locallibrary.config import GENRE_NAME_MAX, GENRE_NAME_MIN
from locallibrary.schemas.common import BookSummary, FieldError
from locallibrary.validation import Messages, sanitized


class GenreIn(BaseModel):
    """Raw genre form submission."""

    name: str = ""


class GenreForm(BaseModel):
    name: sanitized(min_length=GENRE_NAME_MIN, max_length=GENRE_NAME_MAX)


GENRE_MESSAGES: Messages = {
    "name": {
        "string_too_short": f"Genre must contain at least {GENRE_NAME_MIN} characters",
        "string_too_long": f"Genre must not exceed {GENRE_NAME_MAX} characters",
        "*": "Genre name is invalid",
    },
}


class GenreDeleteRequest(BaseModel):
    genre_id: int | None = None


class GenreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str


class GenreDraft(BaseModel):
    """A genre as typed into the form, before it is stored."""

    id: int | None = None
    name: str = ""


class GenreListView(BaseModel):
    view: Literal["genre_list"] = "genre_list"
    title: str = "Genre List"
    genre_list: list[GenreResponse]


class GenreDetailView(BaseModel):
    view: Literal["genre_detail"] = "genre_detail"
    title: str = "Genre Detail"
    genre: GenreResponse
    genre_books: list[BookSummary]


class GenreDeleteView(BaseModel):
    view: Literal["genre_delete"] = "genre_delete"
    title: str = "Delete Genre"
    genre: GenreResponse
    genre_books: list[BookSummary]


class GenreFormView(BaseModel):
    view: Literal["genre_form"] = "genre_form"
    title: str
    genre: GenreDraft | None = None
    errors: list[FieldError] = []
