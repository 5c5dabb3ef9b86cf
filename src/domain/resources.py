"""
Resource domain service - one repository operation per request.

The service turns "absent" repository results into NotFoundError and keeps
the store-assigned identifier out of client-supplied fields. It holds no
state beyond its repository.
"""

from dataclasses import dataclass
from typing import Any

from .exceptions import NotFoundError
from .ports import ID_FIELD, Document, DocumentRepository, Resource


@dataclass
class ResourceService:
    """Domain service for the users and todos collections."""

    repository: DocumentRepository

    def list_all(self, resource: Resource) -> list[Document]:
        """Return every record of a resource."""
        return self.repository.find_all(resource)

    def get(self, resource: Resource, record_id: str) -> Document:
        """
        Fetch one record by identifier.

        Raises:
            NotFoundError: If no record has this identifier
        """
        record = self.repository.find_by_id(resource, record_id)
        if record is None:
            raise NotFoundError(self._not_found_message(resource))
        return record

    def create(self, resource: Resource, fields: dict[str, Any]) -> Document:
        """
        Store validated fields as a new record.

        Any client-supplied identifier is dropped; the store assigns one.
        """
        accepted = {key: value for key, value in fields.items() if key != ID_FIELD}
        return self.repository.create(resource, accepted)

    def delete(self, resource: Resource, record_id: str) -> Document:
        """
        Delete one record by identifier and return it.

        Raises:
            NotFoundError: If no record has this identifier
        """
        record = self.repository.delete_by_id(resource, record_id)
        if record is None:
            raise NotFoundError(self._not_found_message(resource))
        return record

    def _not_found_message(self, resource: Resource) -> str:
        return f"{resource.label} not found"
