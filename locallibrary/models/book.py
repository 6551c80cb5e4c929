from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from locallibrary.database import Base


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20))
    # Plain references; integrity is checked by the application, not the database
    author_id: Mapped[int | None] = mapped_column(Integer, index=True)
    genre_id: Mapped[int | None] = mapped_column(Integer, index=True)

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"
