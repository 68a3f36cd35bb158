"""S3-compatible storage for venue images, with MinIO path-style support."""

import base64
import binascii
import hashlib
import logging
import uuid
from dataclasses import asdict, dataclass
from io import BytesIO

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from django.conf import settings

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/"
ALLOWED_FORMATS = ("JPEG", "PNG", "WEBP", "GIF")


class ImageStorageError(Exception):
    """The object store rejected or could not be reached for an image."""


class InvalidImageError(ValueError):
    """The payload is not an acceptable image."""


@dataclass
class StoredImage:
    url: str
    public_id: str | None
    width: int
    height: int
    format: str

    def as_dict(self) -> dict:
        return asdict(self)


def decode_data_url(data_url: str) -> bytes:
    """Bytes of a ``data:image/...;base64,...`` string."""
    if not isinstance(data_url, str) or not data_url.startswith(DATA_URL_PREFIX):
        raise InvalidImageError("Invalid image format. Please provide a valid base64 image.")
    header, _, payload = data_url.partition(",")
    if ";base64" not in header or not payload:
        raise InvalidImageError("Invalid image format. Please provide a valid base64 image.")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidImageError("Invalid image format. Please provide a valid base64 image.")


class VenueImageStorage:
    """Validates, re-encodes and uploads venue images; placeholder when S3 is off"""

    def __init__(self):
        self.enabled = settings.S3_ENABLED
        self.bucket_name = settings.S3_BUCKET_NAME
        self.public_base = (settings.S3_PUBLIC_BASE or "").rstrip("/")
        self.key_prefix = settings.S3_KEY_PREFIX.strip("/")
        self.max_size = settings.PHOTO_MAX_SIZE
        self.max_dimension = settings.PHOTO_MAX_DIMENSION
        self._client = None

    @property
    def s3_client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=settings.S3_ENDPOINT_URL,
                aws_access_key_id=settings.S3_ACCESS_KEY,
                aws_secret_access_key=settings.S3_SECRET_KEY,
                region_name=settings.S3_REGION,
                config=BotoConfig(
                    signature_version="s3v4",
                    s3={"addressing_style": settings.S3_ADDRESSING_STYLE},  # path-style for MinIO
                ),
                use_ssl=settings.S3_USE_SSL,
                verify=settings.S3_USE_SSL,
            )
        return self._client

    # ---------- image utils ----------

    def _validate_image(self, raw: bytes):
        if len(raw) > self.max_size:
            raise InvalidImageError(f"Image too large. Maximum {self.max_size / 1024 / 1024:.1f} MB")
        try:
            img = Image.open(BytesIO(raw))
            img.load()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageError(f"Invalid image: {e}")
        if img.format not in ALLOWED_FORMATS:
            raise InvalidImageError(f"Unsupported format: {img.format}")
        return img

    def _optimize_image(self, img, quality=85):
        """Returns (bytes_io, ext, width, height, content_type)"""
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "transparency" in img.info else "RGB")

        if img.width > self.max_dimension or img.height > self.max_dimension:
            img.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)

        # keep transparency as WEBP, everything else as JPEG
        out = BytesIO()
        if img.mode == "RGBA":
            img.save(out, format="WEBP", quality=quality, method=6)
            ext, content_type = "webp", "image/webp"
        else:
            img.save(out, format="JPEG", quality=quality, optimize=True)
            ext, content_type = "jpg", "image/jpeg"
        out.seek(0)
        return out, ext, img.width, img.height, content_type

    def _generate_key(self, optimized: bytes, folder: str, ext: str) -> str:
        digest = hashlib.md5(optimized).hexdigest()[:8]
        uid = uuid.uuid4().hex[:8]
        folder = folder.strip("/") or self.key_prefix
        return f"{folder}/{digest}_{uid}.{ext}"

    # ---------- public API ----------

    def upload(self, data_url: str, folder: str = "") -> StoredImage:
        img = self._validate_image(decode_data_url(data_url))
        optimized_io, ext, width, height, content_type = self._optimize_image(img)

        if not self.enabled:
            logger.info("S3 storage disabled, returning placeholder image URL")
            return StoredImage(settings.UPLOAD_PLACEHOLDER_URL, None, width, height, ext)

        key = self._generate_key(optimized_io.getbuffer(), folder or self.key_prefix, ext)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=optimized_io.getvalue(),
                ContentType=content_type,
                CacheControl="max-age=31536000",
                Metadata={"width": str(width), "height": str(height)},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {key}: {e}", exc_info=True)
            raise ImageStorageError("Failed to upload image") from e

        logger.info(f"Uploaded venue image: {key}")
        return StoredImage(self.url(key), key, width, height, ext)

    def upload_many(self, data_urls: list[str], folder: str = "") -> list[StoredImage]:
        return [self.upload(data_url, folder) for data_url in data_urls]

    def delete(self, public_id: str) -> bool:
        if not self.enabled:
            return False
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=public_id)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 delete failed for {public_id}: {e}", exc_info=True)
            raise ImageStorageError("Failed to delete image") from e
        logger.info(f"Deleted venue image: {public_id}")
        return True

    def url(self, key: str) -> str:
        """Public URL: S3_PUBLIC_BASE, else endpoint + path-style, else a presigned URL"""
        if self.public_base:
            return f"{self.public_base}/{key.lstrip('/')}"
        endpoint = (settings.S3_ENDPOINT_URL or "").rstrip("/")
        if endpoint:
            return f"{endpoint}/{self.bucket_name}/{key.lstrip('/')}"
        return self.s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": key},
            ExpiresIn=3600,
        )
