"""Server-sent events stream of notification counts."""

from __future__ import annotations

import json
import logging
import time

from django.conf import settings  # type: ignore
from django.http import StreamingHttpResponse  # type: ignore
from rest_framework import permissions  # type: ignore
from rest_framework.renderers import BaseRenderer, JSONRenderer  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.authentication import QueryParamJWTAuthentication
from . import feeds

logger = logging.getLogger(__name__)


def format_event(event: str, data: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


class EventStreamRenderer(BaseRenderer):
    """Lets ``Accept: text/event-stream`` through content negotiation."""

    media_type = "text/event-stream"
    format = "sse"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):  # type: ignore
        return format_event("error", data or {}).encode(self.charset)


class NotificationStreamView(APIView):
    """Push the caller's badge counts every few seconds.

    The stream ends after a fixed number of events and the client
    reconnects; the polling endpoints remain available as a fallback.
    """

    authentication_classes = [QueryParamJWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]
    renderer_classes = [JSONRenderer, EventStreamRenderer]

    def get(self, request):  # type: ignore
        user = request.user
        interval = settings.NOTIFICATION_STREAM_INTERVAL
        max_events = settings.NOTIFICATION_STREAM_MAX_EVENTS

        def stream():
            yield f"retry: {max(interval, 1) * 1000}\n\n"
            for index in range(max_events):
                if index:
                    time.sleep(interval)
                yield format_event("counts", feeds.snapshot_for(user))
            logger.debug(f"Notification stream for user {user.id} closed after {max_events} events")

        response = StreamingHttpResponse(stream(), content_type="text/event-stream")
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        return response
