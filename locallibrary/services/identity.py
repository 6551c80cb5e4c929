"""Get-or-create for genres, which are unique by case- and accent-insensitive name."""

import logging

from sqlalchemy.exc import IntegrityError

from locallibrary.collation import name_key
from locallibrary.models import Genre
from locallibrary.store import CatalogStore

logger = logging.getLogger(__name__)


async def resolve_genre(store: CatalogStore, name: str) -> Genre | None:
    """Find the genre whose name is equivalent to ``name``, if any. Read-only."""
    return await store.find_one(Genre, Genre.name_key == name_key(name))


async def create_genre_if_absent(store: CatalogStore, name: str) -> tuple[Genre, bool]:
    """Return ``(genre, created)``.

    An equivalent existing genre is reused instead of inserting a second one.
    If a concurrent request inserts the same key between our lookup and our
    insert, the unique index rejects ours and the winner is returned.
    """
    existing = await resolve_genre(store, name)
    if existing is not None:
        return existing, False

    try:
        genre = await store.insert(Genre(name=name, name_key=name_key(name)))
    except IntegrityError:
        winner = await resolve_genre(store, name)
        if winner is None:
            raise
        logger.warning("Genre %r created concurrently, reusing id %d", name, winner.id)
        return winner, False

    logger.info("Created genre %d (%s)", genre.id, genre.name)
    return genre, True
