"""Category name -> id resolution, creating the category on first use."""

import logging
from typing import Optional

from catalog.errors import ConflictError, StorageError
from catalog.validation import validate_category_name

logger = logging.getLogger(__name__)


class CategoryResolver:
    """Maps category names to ids against a VideoStore.

    Lookup first, insert on a miss. If a concurrent writer inserts the same
    name between the two steps, the unique constraint rejects our insert and
    the row it created is read back instead.
    """

    def __init__(self, store):
        self._store = store

    def resolve(self, name: Optional[str]) -> Optional[int]:
        """Return the id for ``name``, creating it if needed. Blank/None -> None."""
        if name is None:
            return None
        name = name.strip()
        if not name:
            return None

        existing = self._store.find_category(name)
        if existing:
            return existing["id"]

        try:
            category_id = self._store.insert_category(name)
        except ConflictError:
            existing = self._store.find_category(name)
            if existing is None:
                raise StorageError(f"category {name!r} vanished after insert conflict") from None
            logger.debug("Category %r created concurrently, reusing id %s", name, existing["id"])
            return existing["id"]
        logger.info("Created category %r (id=%s)", name, category_id)
        return category_id

    def create(self, name) -> dict:
        """Explicitly create a category. Raises ConflictError on a duplicate name."""
        name = validate_category_name(name)
        category_id = self._store.insert_category(name)
        logger.info("Created category %r (id=%s)", name, category_id)
        return {"id": category_id, "name": name}
