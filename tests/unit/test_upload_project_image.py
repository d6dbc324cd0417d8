from __future__ import annotations

from io import BytesIO
from unittest.mock import Mock

import pytest
from PIL import Image

from src.application.use_cases.upload_project_image import UploadProjectImageUseCase
from src.domain.errors import ValidationError
from src.infrastructure.storage.supabase_storage import StorageResult


def _png_bytes() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 4), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def storage():
    mock = Mock()
    mock.upload.side_effect = lambda path, data, content_type: StorageResult(
        path=path, content_type=content_type, size=len(data), url=f"https://cdn.test/{path}"
    )
    return mock


def test_upload_stores_under_random_name(storage):
    data = _png_bytes()
    result = UploadProjectImageUseCase(storage).execute(data, "Screenshot.PNG", "image/png")

    path, stored, content_type = storage.upload.call_args[0]
    assert path.startswith("project-images/")
    assert path.endswith(".png")
    assert "Screenshot" not in path
    assert stored == data
    assert content_type == "image/png"
    assert result.url == f"https://cdn.test/{path}"


def test_two_uploads_of_same_file_get_distinct_paths(storage):
    uc = UploadProjectImageUseCase(storage)
    first = uc.execute(_png_bytes(), "a.png", "image/png")
    second = uc.execute(_png_bytes(), "a.png", "image/png")
    assert first.path != second.path


def test_extension_falls_back_to_detected_format(storage):
    result = UploadProjectImageUseCase(storage).execute(_png_bytes(), None, "image/png")
    assert result.path.endswith(".png")


def test_rejects_non_image_content_type(storage):
    with pytest.raises(ValidationError, match="Please select an image file"):
        UploadProjectImageUseCase(storage).execute(_png_bytes(), "a.png", "application/pdf")
    storage.upload.assert_not_called()


def test_rejects_bytes_that_are_not_an_image(storage):
    with pytest.raises(ValidationError):
        UploadProjectImageUseCase(storage).execute(b"not really a png", "a.png", "image/png")
    storage.upload.assert_not_called()


def test_client_filename_never_reaches_the_path(storage):
    result = UploadProjectImageUseCase(storage).execute(_png_bytes(), "x.png/../evil", "image/png")
    folder, name = result.path.split("/")
    assert folder == "project-images"
    assert name.endswith(".png")
    assert "evil" not in result.path


def test_extension_follows_decoded_format_not_filename(storage):
    buf = BytesIO()
    Image.new("RGB", (4, 4)).save(buf, format="JPEG")
    result = UploadProjectImageUseCase(storage).execute(buf.getvalue(), "photo.png", "image/png")
    assert result.path.endswith(".jpg")
    assert result.content_type == "image/jpeg"
