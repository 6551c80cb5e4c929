import logging

from fastapi import APIRouter, Depends, HTTPException

from locallibrary.errors import NotFoundError
from locallibrary.models import Author, Book, Genre
from locallibrary.schemas.book import (
    BOOK_MESSAGES,
    BookDeleteRequest,
    BookDeleteView,
    BookDetail,
    BookDetailView,
    BookDraft,
    BookForm,
    BookFormView,
    BookIn,
    BookListView,
    BookResponse,
)
from locallibrary.schemas.common import FieldError
from locallibrary.services.aggregate import join_all
from locallibrary.store import CatalogStore, get_store
from locallibrary.validation import validate_form
from locallibrary.views import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["books"])


async def _find_optional(store: CatalogStore, model: type, entity_id: int | None):
    if entity_id is None:
        return None
    return await store.find_by_id(model, entity_id)


async def _form_choices(store: CatalogStore) -> tuple[list[Author], list[Genre]]:
    authors, genres = await join_all(
        store.find(Author, order_by=(Author.family_name, Author.first_name)),
        store.find(Genre, order_by=(Genre.name,)),
    )
    return authors, genres


async def _reference_errors(store: CatalogStore, form: BookForm) -> list[FieldError]:
    """Check that the author and genre a book points at actually exist."""
    author, genre = await join_all(
        _find_optional(store, Author, form.author_id),
        _find_optional(store, Genre, form.genre_id),
    )
    errors = []
    if form.author_id is not None and author is None:
        errors.append(FieldError(field="author_id", msg="Author does not exist."))
    if form.genre_id is not None and genre is None:
        errors.append(FieldError(field="genre_id", msg="Genre does not exist."))
    return errors


async def _validate(store: CatalogStore, data: BookIn) -> tuple[BookForm | None, list[FieldError]]:
    form, errors = validate_form(BookForm, data.model_dump(), BOOK_MESSAGES)
    if errors:
        return None, errors
    errors = await _reference_errors(store, form)
    return (None, errors) if errors else (form, [])


async def _render_form(store: CatalogStore, title: str, draft: BookDraft, errors: list[FieldError]):
    authors, genres = await _form_choices(store)
    view = BookFormView(title=title, book=draft, authors=authors, genres=genres, errors=errors)
    return render(view, status_code=422)


def _draft(data: BookIn, book_id: int | None = None) -> BookDraft:
    return BookDraft(
        id=book_id,
        title=data.title.strip(),
        summary=data.summary.strip(),
        isbn=data.isbn.strip() if data.isbn else data.isbn,
        author_id=data.author_id,
        genre_id=data.genre_id,
    )


@router.get("/books", response_model=BookListView)
async def book_list(store: CatalogStore = Depends(get_store)):
    books = await store.find(Book, order_by=(Book.title,))
    return BookListView(book_list=books)


@router.get("/book/create", response_model=BookFormView)
async def book_create_form(store: CatalogStore = Depends(get_store)):
    authors, genres = await _form_choices(store)
    return BookFormView(title="Create Book", authors=authors, genres=genres)


@router.post("/book/create", response_model=None)
async def book_create(data: BookIn, store: CatalogStore = Depends(get_store)):
    form, errors = await _validate(store, data)
    if errors:
        return await _render_form(store, "Create Book", _draft(data), errors)

    book = await store.insert(Book(**form.model_dump()))
    logger.info("Created book %d (%s)", book.id, book.title)
    return redirect(book.url)


@router.get("/book/{book_id}", response_model=BookDetailView)
async def book_detail(book_id: int, store: CatalogStore = Depends(get_store)):
    book = await store.find_by_id(Book, book_id)
    if book is None:
        raise NotFoundError("Book", book_id)
    author, genre = await join_all(
        _find_optional(store, Author, book.author_id),
        _find_optional(store, Genre, book.genre_id),
    )
    detail = BookDetail(
        **BookResponse.model_validate(book).model_dump(),
        author=author,
        genre=genre,
    )
    return BookDetailView(title=book.title, book=detail)


@router.get("/book/{book_id}/delete", response_model=BookDeleteView)
async def book_delete_form(book_id: int, store: CatalogStore = Depends(get_store)):
    book = await store.find_by_id(Book, book_id)
    if book is None:
        raise NotFoundError("Book", book_id)
    return BookDeleteView(book=book)


@router.post("/book/{book_id}/delete", response_model=None)
async def book_delete(
    book_id: int,
    data: BookDeleteRequest | None = None,
    store: CatalogStore = Depends(get_store),
):
    target_id = data.book_id if data and data.book_id is not None else book_id
    if target_id != book_id:
        raise HTTPException(status_code=400, detail="Book id does not match the requested book")
    if not await store.delete(Book, target_id):
        raise NotFoundError("Book", book_id)
    logger.info("Deleted book %d", book_id)
    return redirect("/catalog/books")


@router.get("/book/{book_id}/update", response_model=BookFormView)
async def book_update_form(book_id: int, store: CatalogStore = Depends(get_store)):
    book, (authors, genres) = await join_all(
        store.find_by_id(Book, book_id),
        _form_choices(store),
    )
    if book is None:
        raise NotFoundError("Book", book_id)
    draft = BookDraft(
        id=book.id,
        title=book.title,
        summary=book.summary,
        isbn=book.isbn,
        author_id=book.author_id,
        genre_id=book.genre_id,
    )
    return BookFormView(title="Update Book", book=draft, authors=authors, genres=genres)


@router.post("/book/{book_id}/update", response_model=None)
async def book_update(book_id: int, data: BookIn, store: CatalogStore = Depends(get_store)):
    form, errors = await _validate(store, data)
    if errors:
        return await _render_form(store, "Update Book", _draft(data, book_id), errors)

    book = await store.update(Book, book_id, form.model_dump())
    if book is None:
        raise NotFoundError("Book", book_id)
    logger.info("Updated book %d (%s)", book.id, book.title)
    return redirect(book.url)
