from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from locallibrary.database import Base


MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def full_name(first_name: str | None, family_name: str | None) -> str:
    if first_name and family_name:
        return f"{family_name}, {first_name}"
    return ""


def format_medium(value: date | None) -> str:
    """Render a date as e.g. "Oct 6, 2020"."""
    if value is None:
        return ""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


def format_lifespan(date_of_birth: date | None, date_of_death: date | None) -> str:
    birth = format_medium(date_of_birth)
    if not birth:
        return ""
    return f"{birth} - {format_medium(date_of_death)}"


def iso_date(value: date | None) -> str:
    return value.isoformat() if value else ""


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    date_of_death: Mapped[date | None] = mapped_column(Date)

    # Display fields are derived on every access and never stored.

    @property
    def name(self) -> str:
        return full_name(self.first_name, self.family_name)

    @property
    def lifespan(self) -> str:
        return format_lifespan(self.date_of_birth, self.date_of_death)

    @property
    def date_of_birth_yyyy_mm_dd(self) -> str:
        return iso_date(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self) -> str:
        return iso_date(self.date_of_death)

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"
