"""ASGI config for VenueKart project.

Serving through ASGI keeps long-lived responses such as the notification
event stream from tying up a worker thread per client.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Use the development settings by default. Production servers should set
# DJANGO_SETTINGS_MODULE accordingly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
