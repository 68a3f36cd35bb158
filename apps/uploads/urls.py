"""URL routing for image uploads."""

from django.urls import path  # type: ignore

from .views import ImageDeleteView, ImageUploadView, MultipleImageUploadView

urlpatterns = [
    path('image/', ImageUploadView.as_view(), name='upload-image'),
    path('images/', MultipleImageUploadView.as_view(), name='upload-images'),
    path('image/<path:public_id>/', ImageDeleteView.as_view(), name='upload-image-delete'),
]
