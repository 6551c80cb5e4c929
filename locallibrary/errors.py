class CatalogError(Exception):
    """Base class for catalog domain errors."""


class NotFoundError(CatalogError):
    def __init__(self, kind: str, entity_id: int):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")

    @property
    def detail(self) -> str:
        return f"{self.kind} not found"
