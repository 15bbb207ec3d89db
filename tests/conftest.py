"""
Pytest configuration and fixtures for Image Translation Studio tests
"""

import io
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from core.gallery_buffer import GalleryBuffer
from core.image import ImageConverters
from core.image_manager import ImageManager
from core.session import TranslationSession
from services.credentials import SettingsCredentialProvider
from services.gallery_service import GalleryService
from services.image_service import ImageService
from services.translation_client import TranslationClient
from services.translation_service import TranslationService


def make_png(width=64, height=48, color=(200, 30, 30)) -> bytes:
    """Encode a solid-color PNG"""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_response(*parts):
    """Build an SDK-shaped response from (kind, value) pairs"""
    built = []
    for kind, value in parts:
        if kind == "image":
            built.append(
                SimpleNamespace(
                    inline_data=SimpleNamespace(data=value, mime_type="image/png"), text=None
                )
            )
        else:
            built.append(SimpleNamespace(inline_data=None, text=value))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=built))])


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def test_png():
    """Small PNG image bytes"""
    return make_png()


@pytest.fixture
def test_data_url(test_png):
    return ImageConverters.to_data_url(test_png, "image/png")


@pytest.fixture
def generated_png():
    """Bytes returned by the fake generation service"""
    return make_png(32, 24, (20, 120, 220))


@pytest.fixture
def fake_genai(generated_png):
    """
    Stand-in for google.genai.Client.

    By default every call returns one image and one text part.
    """
    generate = AsyncMock(return_value=make_response(("image", generated_png), ("text", "done")))
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))


@pytest.fixture
def image_manager():
    """Create ImageManager instance for testing"""
    manager = ImageManager(max_size_mb=100, max_images=10)
    yield manager
    # Cleanup
    manager.cleanup()


@pytest.fixture
def gallery_buffer():
    return GalleryBuffer()


@pytest.fixture
def session():
    return TranslationSession()


@pytest.fixture
def credentials():
    return SettingsCredentialProvider("test-key")


@pytest.fixture
def translation_client(credentials, fake_genai):
    return TranslationClient(credentials, model="test-model", client_factory=lambda key: fake_genai)


@pytest.fixture
def translation_service(session, image_manager, gallery_buffer, translation_client, credentials):
    return TranslationService(
        session=session,
        image_manager=image_manager,
        gallery=gallery_buffer,
        client=translation_client,
        credentials=credentials,
    )


@pytest.fixture
def image_service(image_manager, session):
    """Create ImageService instance for testing"""
    return ImageService(image_manager=image_manager, session=session)


@pytest.fixture
def gallery_service(gallery_buffer, session):
    return GalleryService(gallery=gallery_buffer, session=session, stagger_ms=400)
