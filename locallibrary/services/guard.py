"""Referential checks before destructive deletes.

The check and the delete are separate store calls, so a dependent inserted
between them is not seen. Callers get best-effort protection only.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from locallibrary.services.aggregate import Relation, fetch_with_dependents
from locallibrary.store import CatalogStore

logger = logging.getLogger(__name__)


@dataclass
class DeleteVerdict:
    entity: Any
    dependents: list[dict[str, Any]] = field(default_factory=list)
    deleted: bool = False

    @property
    def allowed(self) -> bool:
        return not self.dependents

    @property
    def blocked(self) -> bool:
        return bool(self.dependents)


async def check_deletable(store: CatalogStore, relation: Relation, entity_id: int) -> DeleteVerdict:
    """Return the entity and whatever references it. Raises NotFoundError if it is missing."""
    joined = await fetch_with_dependents(store, relation, entity_id)
    return DeleteVerdict(entity=joined.entity, dependents=joined.dependents)


async def delete_guarded(
    store: CatalogStore,
    relation: Relation,
    entity_id: int,
    target_id: int | None = None,
) -> DeleteVerdict:
    verdict = await check_deletable(store, relation, entity_id)
    if verdict.blocked:
        logger.warning(
            "Refusing to delete %s %d: referenced by %d %s record(s)",
            relation.kind, entity_id, len(verdict.dependents), relation.dependent.__name__,
        )
        return verdict

    target = entity_id if target_id is None else target_id
    verdict.deleted = await store.delete(relation.parent, target)
    if verdict.deleted:
        logger.info("Deleted %s %d", relation.kind, target)
    return verdict
