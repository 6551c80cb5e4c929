from fastapi import APIRouter, Depends

from locallibrary.models import Author, Book, Genre
from locallibrary.schemas.catalog import CatalogIndex
from locallibrary.services.aggregate import join_all
from locallibrary.store import CatalogStore, get_store

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogIndex)
async def index(store: CatalogStore = Depends(get_store)):
    book_count, author_count, genre_count = await join_all(
        store.count(Book),
        store.count(Author),
        store.count(Genre),
    )
    return CatalogIndex(book_count=book_count, author_count=author_count, genre_count=genre_count)
