"""Test settings for VenueKart project.

Runs against an in-memory SQLite database, keeps outgoing mail in memory
and executes Celery tasks inline so API tests can assert on side effects.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

ADMIN_NOTIFICATION_EMAIL = 'admin@venuekart.test'
RAZORPAY_KEY_ID = ''
RAZORPAY_KEY_SECRET = ''
RAZORPAY_WEBHOOK_SECRET = ''
S3_ENABLED = False
NOTIFICATION_STREAM_INTERVAL = 0
NOTIFICATION_STREAM_MAX_EVENTS = 1
