"""Tests for the JSON web API.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

flask = pytest.importorskip("flask")

from portage_env.config import Settings  # noqa: E402
from portage_env.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404


def _create_client(tmp_path: Path) -> Any:
    """Create a test client over a small configuration directory."""
    (tmp_path / "clang").write_text("dev-lang/rust\n>=sys-devel/gcc-14\n")
    (tmp_path / "lto").write_text("")
    app = create_app(Settings(config_dir=tmp_path))
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self, tmp_path: Path) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(Settings(config_dir=tmp_path)), flask.Flask)


class TestMappingsEndpoint:
    """Verify the mapping listing endpoints."""

    def test_list_mappings(self, tmp_path: Path) -> None:
        """GET /api/mappings returns names and counts."""
        client = _create_client(tmp_path)
        response = client.get("/api/mappings")
        assert response.status_code == HTTP_OK
        assert response.get_json() == {
            "mappings": [
                {"name": str(tmp_path / "clang"), "packages": 2},
                {"name": str(tmp_path / "lto"), "packages": 0},
            ]
        }

    def test_mapping_atoms(self, tmp_path: Path) -> None:
        """GET /api/mappings/<profile> returns sorted canonical atoms."""
        client = _create_client(tmp_path)
        response = client.get("/api/mappings/clang")
        assert response.status_code == HTTP_OK
        assert response.get_json()["atoms"] == [">=sys-devel/gcc-14", "dev-lang/rust"]

    def test_unknown_profile(self, tmp_path: Path) -> None:
        """An unknown profile is a 404."""
        client = _create_client(tmp_path)
        assert client.get("/api/mappings/nope").status_code == HTTP_NOT_FOUND


class TestCheckEndpoint:
    """Verify the /api/check POST endpoint."""

    def test_conflict(self, tmp_path: Path) -> None:
        """A held atom reports its mapping."""
        client = _create_client(tmp_path)
        response = client.post("/api/check", json={"atom": "dev-lang/rust"})
        assert response.status_code == HTTP_OK
        assert response.get_json() == {
            "atom": "dev-lang/rust",
            "conflict": str(tmp_path / "clang"),
        }

    def test_no_conflict(self, tmp_path: Path) -> None:
        """A free atom reports null."""
        client = _create_client(tmp_path)
        response = client.post("/api/check", json={"atom": "=dev-lang/rust-1.80"})
        assert response.get_json()["conflict"] is None

    def test_invalid_atom(self, tmp_path: Path) -> None:
        """A malformed atom is a 400 with the parse error."""
        client = _create_client(tmp_path)
        response = client.post("/api/check", json={"atom": ">>a/b-1"})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "Invalid atom version operator" in response.get_json()["error"]

    def test_missing_field(self, tmp_path: Path) -> None:
        """A body without ``atom`` is a 400."""
        client = _create_client(tmp_path)
        response = client.post("/api/check", json={})
        assert response.status_code == HTTP_BAD_REQUEST
