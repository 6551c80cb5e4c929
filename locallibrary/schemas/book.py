from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from locallibrary.schemas.common import FieldError
from locallibrary.validation import BlankIsNone, Messages, sanitized


class BookIn(BaseModel):
    title: str = ""
    summary: str = ""
    isbn: str | None = None
    author_id: int | str | None = None
    genre_id: int | str | None = None


class BookForm(BaseModel):
    title: sanitized(min_length=1, max_length=500)
    summary: sanitized(min_length=1)
    isbn: Annotated[str | None, BlankIsNone] = Field(None, max_length=20)
    author_id: Annotated[int | None, BlankIsNone] = None
    genre_id: Annotated[int | None, BlankIsNone] = None


BOOK_MESSAGES: Messages = {
    "title": {"string_too_short": "Title must not be empty.", "*": "Title is invalid."},
    "summary": {"string_too_short": "Summary must not be empty.", "*": "Summary is invalid."},
    "isbn": {"*": "ISBN must not exceed 20 characters."},
    "author_id": {"*": "Author is invalid."},
    "genre_id": {"*": "Genre is invalid."},
}


class BookDeleteRequest(BaseModel):
    book_id: int | None = None


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: str
    isbn: str | None
    author_id: int | None
    genre_id: int | None
    url: str


class BookDraft(BaseModel):
    id: int | None = None
    title: str = ""
    summary: str = ""
    isbn: str | None = None
    author_id: int | str | None = None
    genre_id: int | str | None = None


class BookDetail(BookResponse):
    author: "AuthorResponse | None" = None
    genre: "GenreResponse | None" = None


from locallibrary.schemas.author import AuthorResponse  # noqa: E402
from locallibrary.schemas.genre import GenreResponse  # noqa: E402

BookDetail.model_rebuild()


class BookListView(BaseModel):
    view: Literal["book_list"] = "book_list"
    title: str = "Book List"
    book_list: list[BookResponse]


class BookDetailView(BaseModel):
    view: Literal["book_detail"] = "book_detail"
    title: str
    book: BookDetail


class BookDeleteView(BaseModel):
    view: Literal["book_delete"] = "book_delete"
    title: str = "Delete Book"
    book: BookResponse


class BookFormView(BaseModel):
    view: Literal["book_form"] = "book_form"
    title: str
    book: BookDraft | None = None
    authors: list[AuthorResponse] = []
    genres: list[GenreResponse] = []
    errors: list[FieldError] = []
