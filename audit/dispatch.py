"""
Audit Entry Dispatcher

Decouples writing audit entries from the request that produced them.

Entries are put on a bounded in-memory queue and written by an APScheduler
interval job running in the background. Overflow policy: when the queue is
full the NEW entry is dropped, a warning is logged and ``dropped`` is
incremented; the request is never blocked. Pending entries are lost if the
process dies before the next drain. Both are accepted gaps in the trail.

With ``AUDIT_DISPATCH_MODE = 'sync'`` entries are written inline instead.
"""

import atexit
import logging
import queue
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings
from django.db import close_old_connections

from audit.exceptions import PersistenceFailure
from audit.models import AuditEntry

logger = logging.getLogger(__name__)

MODE_ASYNC = 'async'
MODE_SYNC = 'sync'


def persist_record(record):
    """Default sink: append the record to the audit store"""
    return AuditEntry.objects.append(record)


class AuditDispatcher:
    """
    Accepts built audit records and gets them into the store.
    
    ``sink`` is the callable that writes one record; it defaults to the
    database and is swapped out in tests.
    """
    
    JOB_ID = 'flush_audit_queue'
    
    def __init__(self, sink=None, maxsize=None, mode=None):
        self._sink = sink or persist_record
        self._maxsize = maxsize
        self._mode = mode
        self._queue = None
        self._lock = threading.Lock()
        self.scheduler = None
        self.dropped = 0
        self.written = 0
        self.failed = 0
    
    @property
    def mode(self):
        return self._mode or getattr(settings, 'AUDIT_DISPATCH_MODE', MODE_ASYNC)
    
    @property
    def queue(self):
        if self._queue is None:
            with self._lock:
                if self._queue is None:
                    maxsize = self._maxsize
                    if maxsize is None:
                        maxsize = getattr(settings, 'AUDIT_QUEUE_MAXSIZE', 1000)
                    self._queue = queue.Queue(maxsize=maxsize)
        return self._queue
    
    @property
    def pending(self):
        return self.queue.qsize()
    
    def submit(self, record):
        """
        Hand over one record. Never blocks and never raises.
        
        Returns True if the record was written (sync) or queued (async),
        False if it was dropped or its write failed.
        """
        if self.mode == MODE_SYNC:
            return self._write(record)
        
        self._ensure_started()
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            with self._lock:
                self.dropped += 1
            logger.warning(
                f"Audit queue full ({self.queue.maxsize}); dropped {record.action} "
                f"{record.entity_type} #{record.entity_id} (dropped so far: {self.dropped})"
            )
            return False
        return True
    
    def flush(self, max_items=None):
        """
        Write up to ``max_items`` queued records (all of them by default).
        
        Each record is written on its own; one failure does not stop the
        drain. Returns the number of records written.
        """
        written = 0
        processed = 0
        while max_items is None or processed < max_items:
            try:
                record = self.queue.get_nowait()
            except queue.Empty:
                break
            processed += 1
            try:
                if self._write(record):
                    written += 1
            finally:
                self.queue.task_done()
        return written
    
    def _write(self, record):
        try:
            self._persist(record)
        except PersistenceFailure as failure:
            with self._lock:
                self.failed += 1
            logger.error(failure.message, exc_info=failure.__cause__)
            return False
        
        with self._lock:
            self.written += 1
        logger.info(f"Audit: {record.action} - {record.entity_type} #{record.entity_id}")
        return True
    
    def _persist(self, record):
        try:
            self._sink(record)
        except Exception as e:
            raise PersistenceFailure(
                message=f"Failed to save audit entry for {record.entity_type} #{record.entity_id}: {e}",
                details={'entity_type': record.entity_type, 'entity_id': record.entity_id},
            ) from e
    
    # ------------------------------------------------------------------
    # Background scheduler
    # ------------------------------------------------------------------
    
    def _flush_job(self):
        """Interval job: drain one batch, then release the DB connection"""
        try:
            batch_size = getattr(settings, 'AUDIT_FLUSH_BATCH_SIZE', 200)
            self.flush(max_items=batch_size)
        except Exception as e:
            logger.error(f"Error in scheduled audit flush: {str(e)}", exc_info=True)
        finally:
            close_old_connections()
    
    def _ensure_started(self):
        """
        Start the background scheduler on first use.
        
        Started lazily so that each worker process gets its own thread.
        """
        if self.scheduler is not None and self.scheduler.running:
            return
        
        with self._lock:
            if self.scheduler is not None and self.scheduler.running:
                return
            
            try:
                interval = getattr(settings, 'AUDIT_FLUSH_INTERVAL_SECONDS', 1)
                scheduler = BackgroundScheduler()
                scheduler.add_job(
                    self._flush_job,
                    trigger=IntervalTrigger(seconds=interval),
                    id=self.JOB_ID,
                    name='Write queued audit entries',
                    replace_existing=True,
                    max_instances=1,  # Prevent overlapping drains
                    coalesce=True  # Combine missed runs into one
                )
                scheduler.start()
                self.scheduler = scheduler
                logger.info(f"Audit dispatcher started (flush every {interval}s)")
                
                # Register shutdown handler
                atexit.register(self.stop)
            except Exception as e:
                logger.error(f"Failed to start audit dispatcher: {str(e)}", exc_info=True)
                self.scheduler = None
    
    def stop(self):
        """
        Stop the background scheduler and write whatever is still queued.
        """
        scheduler = self.scheduler
        if scheduler is not None and scheduler.running:
            try:
                scheduler.shutdown(wait=True)
                logger.info("Audit dispatcher stopped")
            except Exception as e:
                logger.error(f"Error stopping audit dispatcher: {str(e)}", exc_info=True)
        self.scheduler = None
        
        remaining = self.flush()
        if remaining:
            logger.info(f"Wrote {remaining} queued audit entries on shutdown")
        close_old_connections()


# Global dispatcher instance
dispatcher = AuditDispatcher()
