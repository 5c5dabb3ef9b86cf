"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import Any, Protocol

# A stored record: the client fields plus the store-assigned "_id".
Document = dict[str, Any]

ID_FIELD = "_id"


class Resource(str, Enum):
    """
    Managed resource kinds.

    The value doubles as the collection name in the document store.
    """

    USERS = "users"
    TODOS = "todos"

    @property
    def label(self) -> str:
        """Human-readable singular name used in error messages."""
        return {Resource.USERS: "User", Resource.TODOS: "Todo"}[self]


class DocumentRepository(Protocol):
    """Port interface for document persistence."""

    def find_all(self, resource: Resource) -> list[Document]:
        """
        Return every stored record of a resource, oldest first.

        Args:
            resource: Collection to read
        """
        ...

    def find_by_id(self, resource: Resource, record_id: str) -> Document | None:
        """
        Fetch one record by its identifier.

        The identifier is opaque: any string that was never assigned by the
        store yields None rather than an error.

        Args:
            resource: Collection to read
            record_id: Store-assigned identifier

        Returns:
            The record, or None if absent
        """
        ...

    def create(self, resource: Resource, fields: dict[str, Any]) -> Document:
        """
        Persist validated fields as a new record.

        Args:
            resource: Target collection
            fields: Validated client fields (never contains "_id")

        Returns:
            The stored record including its new "_id"
        """
        ...

    def delete_by_id(self, resource: Resource, record_id: str) -> Document | None:
        """
        Remove one record by its identifier.

        Args:
            resource: Target collection
            record_id: Store-assigned identifier

        Returns:
            The deleted record, or None if absent
        """
        ...
