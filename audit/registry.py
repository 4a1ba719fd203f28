"""
Entity Resolver

Maps an entity-type tag to what the audit pipeline needs to know about it:
the response envelope key and an owner-scoped "fetch current state" callable.
Adding a business record type is one ``register`` call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from audit.exceptions import ResolutionFailure
from core.repositories import BaseRepository

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]
Fetcher = Callable[[Any, Any], Optional[Snapshot]]


@dataclass(frozen=True)
class EntityRegistration:
    entity_type: str
    envelope_key: str
    fetch: Fetcher


def model_fetcher(model, serializer_class) -> Fetcher:
    """
    Build a fetch callable for a model owned through an ``owner`` FK.
    
    The snapshot is the serializer's representation, so it has the same
    shape as what the API handlers return.
    """
    repository = BaseRepository(model)
    
    def fetch(entity_id, owner):
        instance = repository.get_owned(entity_id, owner)
        if instance is None:
            return None
        return dict(serializer_class(instance).data)
    
    return fetch


class EntityResolver:
    """Registry of entity types known to the audit pipeline"""
    
    def __init__(self):
        self._registrations: Dict[str, EntityRegistration] = {}
    
    def register(self, entity_type: str, envelope_key: str, fetch: Fetcher):
        if entity_type in self._registrations:
            logger.warning(f"Replacing audit registration for entity type '{entity_type}'")
        self._registrations[entity_type] = EntityRegistration(entity_type, envelope_key, fetch)
    
    def unregister(self, entity_type: str):
        self._registrations.pop(entity_type, None)
    
    def get(self, entity_type: str) -> Optional[EntityRegistration]:
        return self._registrations.get(entity_type)
    
    def is_registered(self, entity_type: str) -> bool:
        return entity_type in self._registrations
    
    def envelope_key(self, entity_type: str) -> Optional[str]:
        registration = self.get(entity_type)
        return registration.envelope_key if registration else None
    
    def resolve(self, entity_type: str, entity_id, owner) -> Optional[Snapshot]:
        """
        Current state of ``entity_id`` as seen by ``owner``, or None.
        
        Unknown types, missing or foreign records and lookup errors all
        come back as None; nothing is raised to the caller.
        """
        registration = self.get(entity_type)
        if registration is None:
            logger.warning(f"No audit registration for entity type '{entity_type}'")
            return None
        
        if entity_id is None or owner is None:
            return None
        
        try:
            return self._fetch(registration, entity_id, owner)
        except ResolutionFailure as failure:
            logger.error(failure.message, exc_info=failure.__cause__)
            return None
    
    def _fetch(self, registration, entity_id, owner):
        try:
            return registration.fetch(entity_id, owner)
        except Exception as e:
            raise ResolutionFailure(
                message=f"Lookup of {registration.entity_type} {entity_id} failed: {e}",
                details={"entity_type": registration.entity_type, "entity_id": str(entity_id)},
            ) from e


# Global registry instance
entity_registry = EntityResolver()
