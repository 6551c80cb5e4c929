from pydantic import BaseModel, computed_field


class FieldError(BaseModel):
    field: str
    msg: str


class BookSummary(BaseModel):
    """A dependent book as shown on genre and author pages."""

    id: int
    title: str
    summary: str

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"
