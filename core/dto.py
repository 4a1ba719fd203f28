"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from datetime import datetime


@dataclass
class AuditContext:
    """
    Per-request state of one audited mutation.

    Built before the handler runs and read again once its result exists.
    ``original`` is the pre-mutation snapshot (None when not found or when
    the call is a creation).
    """
    entity_type: str
    action: str
    owner: Any
    entity_id: Optional[str] = None
    user_agent: str = ""
    ip_address: Optional[str] = None
    original: Optional[Dict[str, Any]] = None
    original_fetched: bool = False


@dataclass
class AuditRecord:
    """An audit entry built from a successful mutation, not yet persisted"""
    owner_id: int
    action: str
    entity_type: str
    entity_id: str
    old: Optional[Dict[str, Any]] = None
    new: Optional[Dict[str, Any]] = None
    user_agent: str = ""
    ip_address: Optional[str] = None
    description: str = ""


@dataclass
class AuditFilter:
    """Filters accepted by the audit query service"""
    entity_type: Optional[str] = None
    action: Optional[str] = None
    entity_id: Optional[str] = None
    search: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass
class AuditPage:
    """One page of audit entries plus pagination counters"""
    entries: List[Any] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_count: int = 0
    
    @property
    def has_next(self):
        return self.current_page < self.total_pages
    
    @property
    def has_prev(self):
        return self.current_page > 1
