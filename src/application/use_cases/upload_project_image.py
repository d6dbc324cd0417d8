from __future__ import annotations

import uuid
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from src.domain.errors import ValidationError
from src.infrastructure.storage.supabase_storage import StorageResult, SupabaseStorage

NOT_AN_IMAGE = "Please select an image file"
IMAGE_FOLDER = "project-images"
FORMAT_EXTENSIONS = {"JPEG": "jpg", "TIFF": "tif"}


@dataclass
class UploadProjectImageUseCase:
    storage: SupabaseStorage

    def execute(self, data: bytes, filename: str | None, content_type: str | None) -> StorageResult:
        """
        Store an uploaded project image under a random name.

        The declared content type must be ``image/*`` and the bytes must decode
        as an image. The returned result carries the public URL to save on the
        project.
        """
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError(NOT_AN_IMAGE)
        try:
            with Image.open(BytesIO(data)) as img:
                fmt = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise ValidationError(NOT_AN_IMAGE) from exc

        # the client filename is never trusted; the stored extension follows the decoded format
        ext = FORMAT_EXTENSIONS.get(fmt, (fmt or "png").lower())
        path = f"{IMAGE_FOLDER}/{uuid.uuid4()}.{ext}"
        mime = Image.MIME.get(fmt, content_type) if fmt else content_type
        return self.storage.upload(path, data, mime)
