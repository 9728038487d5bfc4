"""Tests for the health endpoint."""

from unittest.mock import patch


class TestHealth:
    def test_healthy_with_writable_output_dir(self, client, test_settings, tmp_path):
        settings = test_settings.model_copy(
            update={"output_dir": str(tmp_path / "new" / "dir"), "save_outputs": True}
        )
        with patch("src.api.routes.health.get_settings", return_value=settings):
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["output_dir_writable"] is True
        assert data["version"] == "1.0.0"
        assert data["strategy"] == "auto"

    def test_degraded_when_output_dir_unwritable(self, client, test_settings):
        settings = test_settings.model_copy(update={"save_outputs": True})
        with (
            patch("src.api.routes.health.get_settings", return_value=settings),
            patch("src.api.routes.health._is_writable", return_value=False),
        ):
            response = client.get("/health")

        assert response.json()["status"] == "degraded"

    def test_unwritable_ignored_when_saving_disabled(self, client, test_settings):
        with (
            patch("src.api.routes.health.get_settings", return_value=test_settings),
            patch("src.api.routes.health._is_writable", return_value=False),
        ):
            response = client.get("/health")

        assert response.json()["status"] == "healthy"
