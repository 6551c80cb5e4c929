from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from locallibrary.database import Base


class Genre(Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Folded form of name, see locallibrary.collation
    name_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"
