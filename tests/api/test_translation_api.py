"""
API Integration Tests for Translation Endpoints
"""


class TestTranslationAPI:
    """Integration tests for translation API endpoints"""

    def test_start_single_pass(self, client, uploaded_id, fake_genai):
        response = client.post("/api/translation/start", json={"instruction": "To French"})

        assert response.status_code == 200
        data = response.json()
        assert data["started"] is True
        assert data["status"] == "COMPLETED"
        assert len(data["generated"]) == 1
        assert data["generated"][0]["description"] == "To French"
        assert data["generated"][0]["filename"] == "translated_photo.png"

        status = client.get("/api/translation/status").json()
        assert status["status"] == "COMPLETED"
        assert status["generated_count"] == 1

    def test_start_without_selection(self, client, fake_genai):
        response = client.post("/api/translation/start", json={})

        assert response.status_code == 200
        assert response.json()["started"] is False
        fake_genai.aio.models.generate_content.assert_not_awaited()

    def test_start_multi_language(self, client, uploaded_id):
        client.put("/api/translation/languages", json={"languages": ["French", "German"]})

        data = client.post("/api/translation/start", json={"instruction": ""}).json()

        assert [g["description"] for g in data["generated"]] == [
            "Translated to German",
            "Translated to French",
        ]

    def test_start_without_credential(self, client, uploaded_id, credentials):
        credentials.set_api_key("")

        response = client.post("/api/translation/start", json={})

        assert response.status_code == 401

    def test_credential_rejected(self, client, uploaded_id, fake_genai):
        fake_genai.aio.models.generate_content.side_effect = Exception("Requested entity was not found.")

        data = client.post("/api/translation/start", json={}).json()

        assert data["status"] == "ERROR"
        assert client.get("/api/translation/status").json()["credential_ready"] is False

        response = client.post("/api/system/credential", json={"api_key": "fresh-key"})
        assert response.json() == {"credential_ready": True}

    def test_cancel_when_idle(self, client):
        response = client.post("/api/translation/cancel")

        assert response.status_code == 200
        assert response.json()["success"] is False

    def test_messages(self, client, uploaded_id):
        client.post("/api/translation/start", json={"instruction": "Hola"})

        messages = client.get("/api/translation/messages").json()

        assert [m["role"] for m in messages] == ["model", "user", "model"]
        assert messages[1]["content"] == "Hola"

    def test_languages(self, client):
        assert client.get("/api/translation/languages").json() == {"languages": []}

        client.post("/api/translation/languages", json={"language": "Korean"})
        client.post("/api/translation/languages", json={"language": "Thai"})
        response = client.delete("/api/translation/languages/Korean")

        assert response.json() == {"languages": ["Thai"]}

    def test_common_languages(self, client):
        languages = client.get("/api/translation/languages/common").json()["languages"]

        assert len(languages) > 0

    def test_settings(self, client):
        assert client.get("/api/translation/settings").json()["format"] == "png"

        response = client.patch("/api/translation/settings", json={"format": "jpeg", "quality": 70})

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "jpeg"
        assert data["quality"] == 70
        assert data["prefix"] == "translated_"

    def test_invalid_settings(self, client):
        response = client.patch("/api/translation/settings", json={"quality": 500})

        assert response.status_code == 422
