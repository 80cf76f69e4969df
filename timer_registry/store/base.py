"""Storage gateway interface.

Gateways are synchronous: every call blocks until the store acknowledges or
fails. The controller runs each call off the event loop through
``timer_registry.completion.run_blocking``.
"""
from typing import Any, Generator, Mapping, Protocol

Document = dict[str, Any]
Filter = Mapping[str, Any]


class StorageGateway(Protocol):
    """Narrow view of a document store holding timer documents."""

    def find_one(self, filter: Filter) -> Document | None:
        """Return the first document matching ``filter`` or None."""
        ...

    def find(self, filter: Filter) -> Generator[Document, None, None]:
        """Yield every document matching ``filter``.

        Closing the generator releases the underlying cursor.
        """
        ...

    def insert_one(self, document: Document) -> None:
        """Insert a document.

        Raises:
            DuplicateKeyViolation: the store already holds the same timerid
        """
        ...

    def find_one_and_update(self, filter: Filter, update: Mapping[str, Any]) -> Document | None:
        """Apply a ``$set`` update and return the updated document, or None if nothing matched."""
        ...

    def count_documents(self, filter: Filter) -> int:
        ...

    def close(self) -> None:
        ...


def matches(document: Mapping[str, Any], filter: Filter) -> bool:
    """Equality match on top-level fields, the only filter shape the service issues."""
    return all(document.get(key) == value for key, value in filter.items())


def apply_set(document: Document, update: Mapping[str, Any]) -> Document:
    """Return a copy of ``document`` with the ``$set`` fields of ``update`` applied."""
    unsupported = set(update) - {"$set"}
    if unsupported:
        raise ValueError(f"Unsupported update operators: {sorted(unsupported)}")
    updated = dict(document)
    updated.update(update.get("$set", {}))
    return updated
