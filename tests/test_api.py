"""
Tests for readmewizard.api module.

Tests the Flask REST API endpoints for layouts and rendering.
"""

import pytest

from readmewizard.api import app, build_fields, build_licenses, create_app, variant_to_dict
from readmewizard.variants import EXTENDED, MINIMAL

MINIMAL_VALUES = {
    "Repository Name": "me/proj",
    "Project Description": "desc",
    "Installation": "npm i",
    "Usage": "npm run",
    "Contributors": "alice",
}


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestHealthEndpoint:
    """Tests for the /api/health endpoint."""

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestVariantEndpoints:
    """Tests for the /api/variants endpoints."""

    def test_list_variants(self, client):
        response = client.get("/api/variants")

        assert response.status_code == 200
        data = response.get_json()
        assert data["variants"] == ["extended", "minimal"]
        assert data["default"] == "extended"

    def test_describe_variant(self, client):
        response = client.get("/api/variants/minimal")

        assert response.status_code == 200
        data = response.get_json()
        assert [f["name"] for f in data["fields"]] == list(MINIMAL_VALUES)
        assert data["fields"][2]["kind"] == "code"
        assert data["fields"][2]["placeholder"] == "<Installation Instructions>"
        assert data["default_license"] == "MIT License"

    def test_describe_unknown_variant(self, client):
        response = client.get("/api/variants/huge")

        assert response.status_code == 404
        assert "error" in response.get_json()


class TestRenderEndpoint:
    """Tests for the /api/render endpoint."""

    def test_preview_with_missing_fields(self, client):
        response = client.post(
            "/api/render",
            json={"variant": "minimal", "fields": {"Usage": "npm run"}},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["complete"] is False
        assert "Repository Name" in data["missing"]
        assert data["readme"].startswith("# <Repository Name>")
        assert data["license"] == "MIT License"

    def test_final_render(self, client):
        response = client.post(
            "/api/render",
            json={"variant": "minimal", "fields": MINIMAL_VALUES, "final": True, "license": 1},
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["complete"] is True
        assert data["missing"] == []
        assert "## Table of Contents" in data["readme"]
        assert "Apache License 2.0" in data["readme"]

    def test_final_render_requires_all_fields(self, client):
        response = client.post(
            "/api/render",
            json={"variant": "minimal", "fields": {"Usage": "npm run"}, "final": True},
        )

        assert response.status_code == 400
        data = response.get_json()
        assert "Contributors" in data["missing"]

    def test_license_by_name(self, client):
        response = client.post(
            "/api/render",
            json={"variant": "extended", "license": "The Unlicense"},
        )

        assert response.status_code == 200
        assert "The Unlicense" in response.get_json()["readme"]

    def test_render_without_badges(self, client):
        response = client.post(
            "/api/render",
            json={"variant": "minimal", "fields": MINIMAL_VALUES, "final": True,
                  "include_badges": False},
        )

        assert "img.shields.io" not in response.get_json()["readme"]

    @pytest.mark.parametrize(
        "body",
        [
            {"variant": "huge"},
            {"variant": "minimal", "fields": {"Nope": "x"}},
            {"variant": "minimal", "fields": {"Usage": 3}},
            {"variant": "minimal", "fields": ["Usage"]},
            {"variant": "minimal", "license": "WTFPL"},
            {"variant": "minimal", "license": 9},
            {"variant": "minimal", "final": "false"},
            {"variant": "minimal", "include_toc": "yes"},
            {"variant": "minimal", "include_badges": 0},
        ],
    )
    def test_bad_requests(self, client, body):
        response = client.post("/api/render", json=body)

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_json_body(self, client):
        response = client.post("/api/render", data="not json", content_type="text/plain")
        assert response.status_code == 400


class TestHelpers:
    """Tests for the request helpers."""

    def test_build_fields(self):
        fields = build_fields(EXTENDED, {"Author": "Alice"})
        assert fields.value_of("Author") == "Alice"
        assert fields.value_of("Acknowledgments") == ""
        assert "Contact" not in fields.names

    def test_build_licenses_default(self):
        assert build_licenses(MINIMAL, None).selected == "MIT License"

    def test_variant_to_dict(self):
        data = variant_to_dict(EXTENDED)
        assert len(data["fields"]) == 13
        assert len(data["licenses"]) == 6

    def test_create_app(self):
        assert create_app() is app
