"""
Tests for the Gemini translation client
"""

import base64
from types import SimpleNamespace

import pytest

from api.exceptions import BatchCancelledError, CredentialError
from core.enums import Resolution
from core.image_manager import UploadedImage
from schemas import OutputSettings
from services.credentials import SettingsCredentialProvider
from services.translation_client import TranslationClient, is_credential_failure


@pytest.fixture
def photo(image_manager, test_png):
    return image_manager.store("photo.png", test_png, "image/png")


@pytest.fixture
def broken():
    """Image whose embedded data is not a data URL"""
    return UploadedImage(id="img_broken", url="not-a-data-url", mime_type="image/png", name="bad.png")


class TestTranslationClient:
    async def test_translate_one(self, translation_client, fake_genai, photo, generated_png):
        outcome = await translation_client.translate_one("prompt", photo, "1K")

        assert outcome.ok
        assert len(outcome.candidates) == 1
        candidate = outcome.candidates[0]
        assert candidate.data == generated_png
        assert candidate.original_image_id == photo.id
        assert candidate.data_url.startswith("data:image/png;base64,")
        assert outcome.text_lines == ["[photo.png] done"]

        kwargs = fake_genai.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["contents"][1] == "prompt"
        assert kwargs["config"].image_config.image_size == "1K"

    async def test_string_payload_is_decoded(
        self, translation_client, fake_genai, photo, generated_png
    ):
        part = SimpleNamespace(
            inline_data=SimpleNamespace(
                data=base64.b64encode(generated_png).decode(), mime_type="image/jpeg"
            ),
            text=None,
        )
        fake_genai.aio.models.generate_content.return_value = SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))]
        )

        outcome = await translation_client.translate_one("prompt", photo, "1K")

        assert outcome.candidates[0].data == generated_png
        assert outcome.candidates[0].mime_type == "image/jpeg"

    async def test_empty_response(self, translation_client, fake_genai, photo):
        fake_genai.aio.models.generate_content.return_value = SimpleNamespace(candidates=[])

        outcome = await translation_client.translate_one("prompt", photo, "1K")

        assert outcome.ok
        assert outcome.candidates == []

    async def test_malformed_data_url_is_isolated(
        self, translation_client, fake_genai, photo, broken
    ):
        result = await translation_client.translate_batch(
            "Translate", [broken, photo], OutputSettings()
        )

        assert fake_genai.aio.models.generate_content.await_count == 1
        assert result.failed_count == 1
        assert len(result.candidates) == 1
        assert result.error_lines == ["Error processing bad.png: Invalid base64 data URL"]
        assert "Error processing bad.png" in result.text_response
        assert "[photo.png] done" in result.text_response

    async def test_remote_failure_is_downgraded(self, translation_client, fake_genai, photo):
        fake_genai.aio.models.generate_content.side_effect = RuntimeError("connection reset")

        result = await translation_client.translate_batch("Translate", [photo], OutputSettings())

        assert result.candidates == []
        assert result.error_lines == ["Error processing photo.png: RuntimeError: connection reset"]

    async def test_credential_signal_raises(self, translation_client, fake_genai, photo):
        fake_genai.aio.models.generate_content.side_effect = Exception(
            "404 NOT_FOUND. Requested entity was not found."
        )

        with pytest.raises(CredentialError):
            await translation_client.translate_batch("Translate", [photo], OutputSettings())

    async def test_missing_key(self, fake_genai, photo):
        client = TranslationClient(SettingsCredentialProvider(None), client_factory=lambda k: fake_genai)

        with pytest.raises(CredentialError):
            await client.translate_one("prompt", photo, "1K")

    async def test_client_rebuilt_on_new_key(self, credentials, fake_genai, photo):
        keys = []

        def factory(key):
            keys.append(key)
            return fake_genai

        client = TranslationClient(credentials, client_factory=factory)
        await client.translate_one("prompt", photo, "1K")
        await client.translate_one("prompt", photo, "1K")
        credentials.set_api_key("other-key")
        await client.translate_one("prompt", photo, "1K")

        assert keys == ["test-key", "other-key"]

    async def test_one_call_per_image(self, translation_client, fake_genai, image_manager, test_png):
        images = [image_manager.store(f"{i}.png", test_png) for i in range(3)]
        settings = OutputSettings(resolution=Resolution.R2K)

        result = await translation_client.translate_batch("Translate", images, settings)

        assert fake_genai.aio.models.generate_content.await_count == 3
        assert [o.image_id for o in result.outcomes] == [i.id for i in images]
        kwargs = fake_genai.aio.models.generate_content.call_args.kwargs
        assert kwargs["config"].image_config.image_size == "2K"

    async def test_cancellation(self, translation_client, photo):
        with pytest.raises(BatchCancelledError):
            await translation_client.translate_batch(
                "Translate", [photo], OutputSettings(), should_stop=lambda: True
            )

    async def test_cancellation_carries_finished_images(
        self, translation_client, fake_genai, image_manager, test_png
    ):
        images = [image_manager.store(f"{i}.png", test_png) for i in range(3)]
        checks = iter([False, True])

        with pytest.raises(BatchCancelledError) as exc_info:
            await translation_client.translate_batch(
                "Translate", images, OutputSettings(), should_stop=lambda: next(checks)
            )

        partial = exc_info.value.partial
        assert [o.image_id for o in partial.outcomes] == [images[0].id]
        assert len(partial.candidates) == 1
        assert fake_genai.aio.models.generate_content.await_count == 1

    async def test_language_line_in_prompt(self, translation_client, fake_genai, photo):
        await translation_client.translate_batch(
            "Translate", [photo], OutputSettings(), language="Korean"
        )

        prompt = fake_genai.aio.models.generate_content.call_args.kwargs["contents"][1]
        assert "TARGET LANGUAGE: Ensure ALL translated text is in Korean." in prompt


class TestCredentialDetection:
    def test_signal_in_message(self):
        assert is_credential_failure(Exception("Requested entity was not found"))

    def test_other_errors(self):
        assert not is_credential_failure(RuntimeError("timeout"))
