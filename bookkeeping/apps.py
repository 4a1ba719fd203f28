from django.apps import AppConfig


class BookkeepingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bookkeeping'
    verbose_name = 'Bookkeeping'
    
    def ready(self):
        """Register every audited record type with the change-tracking resolver"""
        from audit.registry import entity_registry, model_fetcher
        from bookkeeping.views import AUDITED_VIEWSETS
        
        for viewset in AUDITED_VIEWSETS:
            entity_registry.register(
                viewset.audit_entity_type,
                envelope_key=viewset.envelope_key or viewset.audit_entity_type,
                fetch=model_fetcher(viewset.model, viewset.serializer_class),
            )
