"""Concurrent parent/dependents reads for detail and delete views."""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from locallibrary.errors import NotFoundError
from locallibrary.models import Author, Book, Genre
from locallibrary.store import CatalogStore


@dataclass(frozen=True)
class Relation:
    """How a parent entity is referenced by its dependents."""

    parent: type
    dependent: type
    foreign_key: Any
    columns: tuple = ()
    order_by: tuple = ()

    @property
    def kind(self) -> str:
        return self.parent.__name__


GENRE_BOOKS = Relation(
    parent=Genre,
    dependent=Book,
    foreign_key=Book.genre_id,
    columns=(Book.id, Book.title, Book.summary),
    order_by=(Book.title,),
)

AUTHOR_BOOKS = Relation(
    parent=Author,
    dependent=Book,
    foreign_key=Book.author_id,
    columns=(Book.id, Book.title, Book.summary),
    order_by=(Book.title,),
)


@dataclass
class Joined:
    entity: Any
    dependents: list[dict[str, Any]] = field(default_factory=list)


async def join_all(*coros: Coroutine[Any, Any, Any]) -> tuple[Any, ...]:
    """Run reads concurrently and return their results in order.

    If any read fails, the others are cancelled before the first failure is
    re-raised unwrapped, so store errors reach callers as their own type.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except ExceptionGroup as group:
        raise group.exceptions[0] from None
    return tuple(task.result() for task in tasks)


async def fetch_with_dependents(store: CatalogStore, relation: Relation, entity_id: int) -> Joined:
    """Load an entity and its dependents as two concurrent reads.

    Raises NotFoundError when the entity itself is missing, whatever the
    dependent lookup returned. A store failure in either read cancels the
    other and propagates.
    """
    entity, dependents = await join_all(
        store.find_by_id(relation.parent, entity_id),
        store.find(
            relation.dependent,
            relation.foreign_key == entity_id,
            order_by=relation.order_by,
            columns=relation.columns,
        ),
    )
    if entity is None:
        raise NotFoundError(relation.kind, entity_id)
    return Joined(entity=entity, dependents=dependents)
