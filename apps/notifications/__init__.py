"""Notifications app package.

Email delivery through Celery tasks, the owner and customer badge feeds,
and a server-sent events stream of those counts.
"""
