"""
Base service classes.
Services hold the read/write logic for one owner and use repositories for data access.
"""
import logging


class BaseService:
    """
    Base class for owner-scoped services.
    Every log line carries the owner the service was built for.
    """
    
    def __init__(self, owner=None):
        self.owner = owner
        self.logger = logging.getLogger(self.__class__.__module__)
    
    def _context(self, context):
        if self.owner is not None:
            context.setdefault('owner', getattr(self.owner, 'pk', self.owner))
        return context
    
    def log_info(self, message: str, **context):
        """Log info message with context"""
        self.logger.info(f"{message} | Context: {self._context(context)}")
