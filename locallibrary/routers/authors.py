import logging

from fastapi import APIRouter, Depends, HTTPException

from locallibrary.errors import NotFoundError
from locallibrary.models import Author
from locallibrary.schemas.author import (
    AUTHOR_MESSAGES,
    AuthorDeleteRequest,
    AuthorDeleteView,
    AuthorDetailView,
    AuthorDraft,
    AuthorForm,
    AuthorFormView,
    AuthorIn,
    AuthorListView,
    AuthorResponse,
)
from locallibrary.schemas.common import BookSummary
from locallibrary.services.aggregate import AUTHOR_BOOKS, fetch_with_dependents
from locallibrary.services.guard import check_deletable, delete_guarded
from locallibrary.store import CatalogStore, get_store
from locallibrary.validation import validate_form
from locallibrary.views import redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["authors"])


def _draft(data: AuthorIn, author_id: int | None = None) -> AuthorDraft:
    return AuthorDraft(
        id=author_id,
        first_name=data.first_name.strip(),
        family_name=data.family_name.strip(),
        date_of_birth=data.date_of_birth,
        date_of_death=data.date_of_death,
    )


@router.get("/authors", response_model=AuthorListView)
async def author_list(store: CatalogStore = Depends(get_store)):
    authors = await store.find(Author, order_by=(Author.family_name, Author.first_name))
    return AuthorListView(author_list=authors)


@router.get("/author/create", response_model=AuthorFormView)
async def author_create_form():
    return AuthorFormView(title="Create Author")


@router.post("/author/create", response_model=None)
async def author_create(data: AuthorIn, store: CatalogStore = Depends(get_store)):
    form, errors = validate_form(AuthorForm, data.model_dump(), AUTHOR_MESSAGES)
    if errors:
        return render(AuthorFormView(title="Create Author", author=_draft(data), errors=errors), status_code=422)

    author = await store.insert(Author(**form.model_dump()))
    logger.info("Created author %d (%s)", author.id, author.name)
    return redirect(author.url)


@router.get("/author/{author_id}", response_model=AuthorDetailView)
async def author_detail(author_id: int, store: CatalogStore = Depends(get_store)):
    joined = await fetch_with_dependents(store, AUTHOR_BOOKS, author_id)
    return AuthorDetailView(
        author=AuthorResponse.model_validate(joined.entity),
        author_books=[BookSummary(**book) for book in joined.dependents],
    )


@router.get("/author/{author_id}/delete", response_model=AuthorDeleteView)
async def author_delete_form(author_id: int, store: CatalogStore = Depends(get_store)):
    verdict = await check_deletable(store, AUTHOR_BOOKS, author_id)
    return AuthorDeleteView(
        author=AuthorResponse.model_validate(verdict.entity),
        author_books=[BookSummary(**book) for book in verdict.dependents],
    )


@router.post("/author/{author_id}/delete", response_model=None)
async def author_delete(
    author_id: int,
    data: AuthorDeleteRequest | None = None,
    store: CatalogStore = Depends(get_store),
):
    target_id = data.author_id if data and data.author_id is not None else author_id
    if target_id != author_id:
        raise HTTPException(status_code=400, detail="Author id does not match the requested author")

    verdict = await delete_guarded(store, AUTHOR_BOOKS, author_id, target_id)
    if verdict.blocked:
        view = AuthorDeleteView(
            author=AuthorResponse.model_validate(verdict.entity),
            author_books=[BookSummary(**book) for book in verdict.dependents],
        )
        return render(view, status_code=409)
    return redirect("/catalog/authors")


@router.get("/author/{author_id}/update", response_model=AuthorFormView)
async def author_update_form(author_id: int, store: CatalogStore = Depends(get_store)):
    author = await store.find_by_id(Author, author_id)
    if author is None:
        raise NotFoundError("Author", author_id)
    draft = AuthorDraft(
        id=author.id,
        first_name=author.first_name,
        family_name=author.family_name,
        date_of_birth=author.date_of_birth_yyyy_mm_dd or None,
        date_of_death=author.date_of_death_yyyy_mm_dd or None,
    )
    return AuthorFormView(title="Update Author", author=draft)


@router.post("/author/{author_id}/update", response_model=None)
async def author_update(author_id: int, data: AuthorIn, store: CatalogStore = Depends(get_store)):
    form, errors = validate_form(AuthorForm, data.model_dump(), AUTHOR_MESSAGES)
    if errors:
        view = AuthorFormView(title="Update Author", author=_draft(data, author_id), errors=errors)
        return render(view, status_code=422)

    author = await store.update(Author, author_id, form.model_dump())
    if author is None:
        raise NotFoundError("Author", author_id)
    logger.info("Updated author %d (%s)", author.id, author.name)
    return redirect(author.url)
