"""
Audit pipeline failures.

These never leave the pipeline: each is caught where it is raised,
logged, and turned into "skip this entry".
"""

from core.exceptions import BaseApplicationException


class AuditError(BaseApplicationException):
    """Base class for audit pipeline failures"""
    default_message = "Audit pipeline error"


class ResolutionFailure(AuditError):
    """Pre-mutation state could not be read"""
    default_message = "Could not resolve original entity state"


class ExtractionFailure(AuditError):
    """Handler result has no recognisable entity or identifier"""
    default_message = "Could not extract entity from handler result"


class PersistenceFailure(AuditError):
    """Writing an entry to the store failed"""
    default_message = "Could not persist audit entry"
