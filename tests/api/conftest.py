"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client(image_manager, gallery_buffer, session, credentials, translation_service):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from config import Settings
    from main import app

    settings = Settings()

    # Set in app state
    app.state.image_manager = image_manager
    app.state.gallery = gallery_buffer
    app.state.session = session
    app.state.credentials = credentials
    app.state.translation_service = translation_service
    app.state.settings = settings
    app.state.config = settings.to_dict()

    # Create test client (no context manager so the lifespan does not replace the state)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client


@pytest.fixture
def uploaded_id(client, test_png):
    """Upload one image and return its ID"""
    response = client.post(
        "/api/image/upload", files=[("files", ("photo.png", test_png, "image/png"))]
    )
    return response.json()[0]["id"]
