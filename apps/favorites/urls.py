"""URL routing for favorites."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import FavoriteViewSet

router = SimpleRouter()
router.register(r'', FavoriteViewSet, basename='favorite')

urlpatterns = [path('', include(router.urls))]
