from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from locallibrary.schemas.common import BookSummary, FieldError
from locallibrary.validation import BlankIsNone, Messages, Trimmed

ALPHANUMERIC = r"^[A-Za-z0-9]+$"


class AuthorIn(BaseModel):
    first_name: str = ""
    family_name: str = ""
    date_of_birth: str | None = None
    date_of_death: str | None = None


class AuthorForm(BaseModel):
    first_name: Trimmed = Field(min_length=1, max_length=100, pattern=ALPHANUMERIC)
    family_name: Trimmed = Field(min_length=1, max_length=100, pattern=ALPHANUMERIC)
    date_of_birth: Annotated[date | None, BlankIsNone] = None
    date_of_death: Annotated[date | None, BlankIsNone] = None


AUTHOR_MESSAGES: Messages = {
    "first_name": {
        "string_too_short": "First name must be specified.",
        "string_too_long": "First name must not exceed 100 characters.",
        "string_pattern_mismatch": "First name has non-alphanumeric characters.",
    },
    "family_name": {
        "string_too_short": "Family name must be specified.",
        "string_too_long": "Family name must not exceed 100 characters.",
        "string_pattern_mismatch": "Family name has non-alphanumeric characters.",
    },
    "date_of_birth": {"*": "Invalid date of birth"},
    "date_of_death": {"*": "Invalid date of death"},
}


class AuthorDeleteRequest(BaseModel):
    author_id: int | None = None


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    family_name: str
    date_of_birth: date | None
    date_of_death: date | None
    name: str
    lifespan: str
    date_of_birth_yyyy_mm_dd: str
    date_of_death_yyyy_mm_dd: str
    url: str


class AuthorDraft(BaseModel):
    id: int | None = None
    first_name: str = ""
    family_name: str = ""
    date_of_birth: str | None = None
    date_of_death: str | None = None


class AuthorListView(BaseModel):
    view: Literal["author_list"] = "author_list"
    title: str = "Author List"
    author_list: list[AuthorResponse]


class AuthorDetailView(BaseModel):
    view: Literal["author_detail"] = "author_detail"
    title: str = "Author Detail"
    author: AuthorResponse
    author_books: list[BookSummary]


class AuthorDeleteView(BaseModel):
    view: Literal["author_delete"] = "author_delete"
    title: str = "Delete Author"
    author: AuthorResponse
    author_books: list[BookSummary]


class AuthorFormView(BaseModel):
    view: Literal["author_form"] = "author_form"
    title: str
    author: AuthorDraft | None = None
    errors: list[FieldError] = []
