"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.
"""
from typing import Generic, TypeVar, Optional
from django.db.models import QuerySet, Model
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository providing owner-scoped reads.
    Every lookup goes through the owner filter; there is no unscoped getter.
    """
    
    def __init__(self, model: type[T]):
        self.model = model
    
    def for_owner(self, owner) -> QuerySet[T]:
        """All instances belonging to one owner"""
        return self.model.objects.filter(owner=owner)
    
    def get_owned(self, id, owner) -> Optional[T]:
        """
        Get a single instance by ID, only if it belongs to ``owner``.
        Malformed ids and storage errors are logged and read as "not found".
        """
        try:
            return self.for_owner(owner).filter(pk=id).first()
        except (ValueError, TypeError):
            logger.warning(f"Malformed {self.model.__name__} id: {id!r}")
            return None
        except Exception as e:
            logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}", exc_info=True)
            return None
