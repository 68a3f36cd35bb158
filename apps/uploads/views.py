"""API views for venue image uploads."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import ImageUploadSerializer, MultipleImageUploadSerializer
from .storage import ImageStorageError, InvalidImageError, VenueImageStorage


class ImageUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            image = VenueImageStorage().upload(
                serializer.validated_data["image_data"], serializer.validated_data["folder"]
            )
        except InvalidImageError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ImageStorageError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"message": "Image uploaded successfully", **image.as_dict()})


class MultipleImageUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = MultipleImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            images = VenueImageStorage().upload_many(
                serializer.validated_data["images"], serializer.validated_data["folder"]
            )
        except InvalidImageError:
            return Response(
                {"error": "All images must be valid base64 format"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except ImageStorageError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(
            {
                "message": "Images uploaded successfully",
                "images": [image.as_dict() for image in images],
            }
        )


class ImageDeleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, public_id: str):  # type: ignore
        try:
            deleted = VenueImageStorage().delete(public_id)
        except ImageStorageError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"message": "Image deleted successfully", "deleted": deleted})
