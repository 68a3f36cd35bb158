"""URL routing for notifications."""

from django.urls import path  # type: ignore

from .views import NotificationStreamView

app_name = 'notifications'

urlpatterns = [
    path('stream/', NotificationStreamView.as_view(), name='stream'),
]
