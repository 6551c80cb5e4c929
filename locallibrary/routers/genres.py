import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError

from locallibrary.collation import name_key
from locallibrary.errors import NotFoundError
from locallibrary.models import Genre
from locallibrary.schemas.common import BookSummary, FieldError
from locallibrary.schemas.genre import (
    GENRE_MESSAGES,
    GenreDeleteRequest,
    GenreDeleteView,
    GenreDetailView,
    GenreDraft,
    GenreForm,
    GenreFormView,
    GenreIn,
    GenreListView,
    GenreResponse,
)
from locallibrary.services.aggregate import GENRE_BOOKS, fetch_with_dependents
from locallibrary.services.guard import check_deletable, delete_guarded
from locallibrary.services.identity import create_genre_if_absent
from locallibrary.store import CatalogStore, get_store
from locallibrary.validation import validate_form
from locallibrary.views import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["genres"])


@router.get("/genres", response_model=GenreListView)
async def genre_list(store: CatalogStore = Depends(get_store)):
    genres = await store.find(Genre, order_by=(Genre.name,))
    return GenreListView(genre_list=genres)


@router.get("/genre/create", response_model=GenreFormView)
async def genre_create_form():
    return GenreFormView(title="Create Genre")


@router.post("/genre/create", response_model=None)
async def genre_create(data: GenreIn, store: CatalogStore = Depends(get_store)):
    form, errors = validate_form(GenreForm, data.model_dump(), GENRE_MESSAGES)
    if errors:
        view = GenreFormView(title="Create Genre", genre=GenreDraft(name=data.name.strip()), errors=errors)
        return render(view, status_code=422)

    genre, _ = await create_genre_if_absent(store, form.name)
    return redirect(genre.url)


@router.get("/genre/{genre_id}", response_model=GenreDetailView)
async def genre_detail(genre_id: int, store: CatalogStore = Depends(get_store)):
    joined = await fetch_with_dependents(store, GENRE_BOOKS, genre_id)
    return GenreDetailView(
        genre=GenreResponse.model_validate(joined.entity),
        genre_books=[BookSummary(**book) for book in joined.dependents],
    )


@router.get("/genre/{genre_id}/delete", response_model=GenreDeleteView)
async def genre_delete_form(genre_id: int, store: CatalogStore = Depends(get_store)):
    verdict = await check_deletable(store, GENRE_BOOKS, genre_id)
    return GenreDeleteView(
        genre=GenreResponse.model_validate(verdict.entity),
        genre_books=[BookSummary(**book) for book in verdict.dependents],
    )


@router.post("/genre/{genre_id}/delete", response_model=None)
async def genre_delete(
    genre_id: int,
    data: GenreDeleteRequest | None = None,
    store: CatalogStore = Depends(get_store),
):
    target_id = data.genre_id if data and data.genre_id is not None else genre_id
    if target_id != genre_id:
        raise HTTPException(status_code=400, detail="Genre id does not match the requested genre")

    verdict = await delete_guarded(store, GENRE_BOOKS, genre_id, target_id)
    if verdict.blocked:
        view = GenreDeleteView(
            genre=GenreResponse.model_validate(verdict.entity),
            genre_books=[BookSummary(**book) for book in verdict.dependents],
        )
        return render(view, status_code=409)
    return redirect("/catalog/genres")


@router.get("/genre/{genre_id}/update", response_model=GenreFormView)
async def genre_update_form(genre_id: int, store: CatalogStore = Depends(get_store)):
    genre = await store.find_by_id(Genre, genre_id)
    if genre is None:
        raise NotFoundError("Genre", genre_id)
    return GenreFormView(title="Update Genre", genre=GenreDraft(id=genre.id, name=genre.name))


@router.post("/genre/{genre_id}/update", response_model=None)
async def genre_update(genre_id: int, data: GenreIn, store: CatalogStore = Depends(get_store)):
    form, errors = validate_form(GenreForm, data.model_dump(), GENRE_MESSAGES)
    if not errors:
        try:
            genre = await store.update(Genre, genre_id, {"name": form.name, "name_key": name_key(form.name)})
        except IntegrityError:
            # Renaming onto another genre's name would break name uniqueness
            errors = [FieldError(field="name", msg="A genre with this name already exists")]
        else:
            if genre is None:
                raise NotFoundError("Genre", genre_id)
            logger.info("Updated genre %d (%s)", genre.id, genre.name)
            return redirect(genre.url)

    view = GenreFormView(
        title="Update Genre",
        genre=GenreDraft(id=genre_id, name=data.name.strip()),
        errors=errors,
    )
    return render(view, status_code=422)
