import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("venuekart")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Expired one-time codes, hourly
    "purge-expired-otps": {
        "task": "users.purge_expired_otps",
        "schedule": crontab(minute=0),
    },
    # Expired refresh tokens from the blacklist store, daily
    "flush-expired-refresh-tokens": {
        "task": "users.flush_expired_refresh_tokens",
        "schedule": crontab(minute=30, hour=3),
    },
}

app.conf.timezone = "Asia/Kolkata"
