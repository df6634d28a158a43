"""ASGI config for the expiry notifier service.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import os

from django.core.asgi import get_asgi_application

from expiry_queue.logging import setup_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "expiry_notifier.settings")

setup_logging()

application = get_asgi_application()
