from pydantic import BaseModel


class CatalogIndex(BaseModel):
    view: str = "index"
    title: str = "Local Library Home"
    book_count: int
    author_count: int
    genre_count: int
