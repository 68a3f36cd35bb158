"""Integration tests for venue image uploads."""

from __future__ import annotations

import base64
from io import BytesIO
from unittest.mock import MagicMock, patch

from django.test import override_settings
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from apps.uploads.storage import VenueImageStorage
from apps.users.models import User

PLACEHOLDER = "https://placehold.co/800x600?text=Venue+Image"


def image_data_url(size=(40, 30), mode="RGB", fmt="PNG") -> str:
    buffer = BytesIO()
    Image.new(mode, size, color=(200, 30, 30) if mode == "RGB" else (200, 30, 30, 128)).save(buffer, format=fmt)
    return f"data:image/{fmt.lower()};base64,{base64.b64encode(buffer.getvalue()).decode()}"


class ImageUploadAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="owner@example.com",
            password="secret123",
            name="Owner",
            user_type=User.UserType.VENUE_OWNER,
            is_verified=True,
        )
        self.client.force_authenticate(self.user)

    def test_upload_without_object_store_returns_placeholder(self) -> None:
        response = self.client.post(reverse("upload-image"), {"imageData": image_data_url()}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Image uploaded successfully")
        self.assertEqual(response.data["url"], PLACEHOLDER)
        self.assertIsNone(response.data["public_id"])
        self.assertEqual((response.data["width"], response.data["height"]), (40, 30))
        self.assertEqual(response.data["format"], "jpg")

    def test_non_data_url_is_rejected(self) -> None:
        response = self.client.post(
            reverse("upload-image"), {"image_data": "https://example.com/a.png"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid image format. Please provide a valid base64 image.")

    def test_missing_image_data(self) -> None:
        response = self.client.post(reverse("upload-image"), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Image data is required")

    def test_multiple_upload(self) -> None:
        response = self.client.post(
            reverse("upload-images"), {"images": [image_data_url(), image_data_url(mode="RGBA")]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([image["format"] for image in response.data["images"]], ["jpg", "webp"])

    def test_multiple_upload_limits(self) -> None:
        too_many = self.client.post(reverse("upload-images"), {"images": [image_data_url()] * 11}, format="json")
        one_bad = self.client.post(
            reverse("upload-images"), {"images": [image_data_url(), "not-an-image"]}, format="json"
        )

        self.assertEqual(too_many.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(too_many.data["error"], "Maximum 10 images allowed")
        self.assertEqual(one_bad.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(one_bad.data["error"], "All images must be valid base64 format")

    def test_delete_without_object_store(self) -> None:
        response = self.client.delete(reverse("upload-image-delete", args=["venues/abc_123.jpg"]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["deleted"])

    def test_anonymous_upload_is_rejected(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(reverse("upload-image"), {"image_data": image_data_url()}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


@override_settings(
    S3_ENABLED=True,
    S3_BUCKET_NAME="venuekart",
    S3_PUBLIC_BASE="https://cdn.venuekart.test",
    S3_KEY_PREFIX="venues",
)
class VenueImageStorageTests(APITestCase):
    def test_upload_puts_object_under_prefix(self) -> None:
        storage = VenueImageStorage()
        storage._client = MagicMock()

        image = storage.upload(image_data_url(size=(3000, 1500)))

        kwargs = storage._client.put_object.call_args.kwargs
        self.assertEqual(kwargs["Bucket"], "venuekart")
        self.assertTrue(kwargs["Key"].startswith("venues/"))
        self.assertEqual(kwargs["ContentType"], "image/jpeg")
        self.assertEqual(image.url, f"https://cdn.venuekart.test/{kwargs['Key']}")
        self.assertEqual((image.width, image.height), (1920, 960))

    def test_delete_calls_object_store(self) -> None:
        storage = VenueImageStorage()
        storage._client = MagicMock()

        self.assertTrue(storage.delete("venues/abc.jpg"))
        storage._client.delete_object.assert_called_once_with(Bucket="venuekart", Key="venues/abc.jpg")

    @patch("apps.uploads.storage.boto3.client")
    def test_client_is_created_lazily(self, mocked_client) -> None:
        storage = VenueImageStorage()
        mocked_client.assert_not_called()

        storage.s3_client

        mocked_client.assert_called_once()
