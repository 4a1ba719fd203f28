"""
WSGI config for ledgerbook project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'ledgerbook.settings')

application = get_wsgi_application()
