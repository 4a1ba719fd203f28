"""
Change Capture

Wraps one mutating request: reads the record's state before the handler
runs, looks at the handler's result afterwards, and on success hands an
audit record to the dispatcher.

    Start -> (UPDATE/DELETE: fetch original) -> handler runs
          -> result observed -> (success: build entry, persist | else: discard)

Nothing here may change the handler's response. Every failure is logged and
ends in "no entry for this call".
"""

import json
import logging
from collections.abc import Mapping

from django.core.serializers.json import DjangoJSONEncoder

from audit.dispatch import dispatcher as default_dispatcher
from audit.exceptions import ExtractionFailure
from audit.helpers import describe_action, get_client_ip, get_user_agent
from audit.registry import entity_registry
from core.constants import AuditAction
from core.dto import AuditContext, AuditRecord

logger = logging.getLogger(__name__)

ID_KEYS = ('id', '_id')


def _snapshot(value):
    """Plain-JSON copy of a handler payload"""
    try:
        return json.loads(json.dumps(value, cls=DjangoJSONEncoder))
    except (TypeError, ValueError) as e:
        raise ExtractionFailure(message=f"Entity is not JSON serialisable: {e}") from e


def extract_entity(data, envelope_key=None):
    """
    The entity carried by a handler result.
    
    Tries ``data[envelope_key]`` first, then treats the whole body as the
    entity.
    """
    if not isinstance(data, Mapping):
        raise ExtractionFailure(
            message=f"Unrecognised result shape: {type(data).__name__}"
        )
    
    if envelope_key and isinstance(data.get(envelope_key), Mapping):
        return data[envelope_key]
    return data


def extract_entity_id(entity):
    """Identifier from ``id`` or ``_id``, as a string, or None"""
    if not isinstance(entity, Mapping):
        return None
    for key in ID_KEYS:
        value = entity.get(key)
        if value is not None and str(value).strip():
            return str(value)
    return None


class CaptureMiddleware:
    """
    Per-request capture steps, driven by ``AuditCaptureMixin``.
    
    Holds no per-request state itself; all of it lives in the
    ``AuditContext`` passed to ``begin`` and ``complete``.
    """
    
    def __init__(self, resolver=None, dispatcher=None):
        self.resolver = resolver or entity_registry
        self.dispatcher = dispatcher or default_dispatcher
    
    @staticmethod
    def succeeded(action, status_code):
        return AuditAction.SUCCESS_STATUS.get(action) == status_code
    
    def begin(self, context: AuditContext):
        """Fetch the pre-mutation state for updates and deletes"""
        if context.action not in (AuditAction.UPDATE, AuditAction.DELETE):
            return context
        
        try:
            context.original = self.resolver.resolve(
                context.entity_type, context.entity_id, context.owner
            )
        except Exception as e:
            logger.error(f"Error fetching original {context.entity_type} #{context.entity_id}: {e}", exc_info=True)
            context.original = None
        context.original_fetched = True
        
        if context.original is None:
            logger.info(f"No prior state for {context.entity_type} #{context.entity_id}")
        return context
    
    def complete(self, context: AuditContext, status_code, data):
        """
        Observe the handler's result and record it if the call succeeded.
        
        Returns the submitted ``AuditRecord``, or None when nothing was
        recorded.
        """
        try:
            if not self.succeeded(context.action, status_code):
                logger.debug(
                    f"Discarding audit for {context.action} {context.entity_type}: status {status_code}"
                )
                return None
            record = self.build_entry(context, data)
        except ExtractionFailure as failure:
            logger.warning(
                f"Skipping audit entry for {context.action} {context.entity_type}: {failure.message}"
            )
            return None
        except Exception as e:
            logger.error(f"Error building audit entry: {e}", exc_info=True)
            return None
        
        try:
            self.dispatcher.submit(record)
        except Exception as e:
            logger.error(f"Error submitting audit entry: {e}", exc_info=True)
            return None
        return record
    
    def build_entry(self, context: AuditContext, data):
        envelope_key = self.resolver.envelope_key(context.entity_type)
        old = None
        new = None
        
        if context.action == AuditAction.CREATE:
            entity = extract_entity(data, envelope_key)
            entity_id = extract_entity_id(entity)
            if entity_id is None:
                raise ExtractionFailure(message="No identifier in created entity")
            new = _snapshot(entity)
        
        elif context.action == AuditAction.UPDATE:
            entity_id = context.entity_id
            new = _snapshot(extract_entity(data, envelope_key))
            if context.original is not None:
                old = _snapshot(context.original)
        
        elif context.action == AuditAction.DELETE:
            entity_id = context.entity_id
            if context.original is None:
                raise ExtractionFailure(message="No prior state to record for deletion")
            old = _snapshot(context.original)
        
        else:
            raise ExtractionFailure(message=f"Unsupported action {context.action}")
        
        if not entity_id:
            raise ExtractionFailure(message="No identifier in request path")
        
        return AuditRecord(
            owner_id=context.owner.pk,
            action=context.action,
            entity_type=context.entity_type,
            entity_id=str(entity_id),
            old=old,
            new=new,
            user_agent=context.user_agent,
            ip_address=context.ip_address,
            description=describe_action(context.action, context.entity_type, entity_id),
        )


# Global capture instance used by viewsets
capture = CaptureMiddleware()


class AuditCaptureMixin:
    """
    Viewset mixin that routes create/update/destroy through change capture.
    
    Set ``audit_entity_type`` to a registered entity-type tag. The context
    is built once authentication and permission checks have passed and is
    read back in ``finalize_response``, which sees the handler's
    ``Response.data`` before rendering.
    """
    
    audit_entity_type = None
    audit_capture = None
    audit_context = None
    
    AUDITED_ACTIONS = {
        'create': AuditAction.CREATE,
        'update': AuditAction.UPDATE,
        'partial_update': AuditAction.UPDATE,
        'destroy': AuditAction.DELETE,
    }
    
    def get_audit_capture(self):
        return self.audit_capture or capture
    
    def get_audit_context(self, request):
        action = self.AUDITED_ACTIONS.get(getattr(self, 'action', None))
        if action is None or not self.audit_entity_type:
            return None
        
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        
        entity_id = None
        if action != AuditAction.CREATE:
            lookup_url_kwarg = self.lookup_url_kwarg or self.lookup_field
            entity_id = self.kwargs.get(lookup_url_kwarg)
        
        return AuditContext(
            entity_type=self.audit_entity_type,
            action=action,
            owner=user,
            entity_id=str(entity_id) if entity_id is not None else None,
            user_agent=get_user_agent(request),
            ip_address=get_client_ip(request),
        )
    
    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        try:
            context = self.get_audit_context(request)
            if context is not None:
                self.get_audit_capture().begin(context)
            self.audit_context = context
        except Exception as e:
            logger.error(f"Error preparing audit context: {e}", exc_info=True)
            self.audit_context = None
    
    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        context, self.audit_context = self.audit_context, None
        if context is not None:
            try:
                self.get_audit_capture().complete(
                    context, response.status_code, getattr(response, 'data', None)
                )
            except Exception as e:
                logger.error(f"Error capturing audit entry: {e}", exc_info=True)
        return response
