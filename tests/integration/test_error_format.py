"""Integration tests for the standard error body ``{status, message[, errors]}``."""

import pytest

from modules.products.views import drf_error_body

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_not_found_has_standard_format(self, api_client):
        response = api_client.delete("/api/v1/products/12345/")
        assert response.status_code == 404
        data = response.json()
        assert data == {
            "status": "NOT_FOUND",
            "message": "Product not found with productId: 12345",
        }

    def test_validation_error_has_field_map(self, api_client):
        response = api_client.post(
            "/api/v1/products/",
            {"name": "   ", "price": "1.00", "stock_quantity": 1},
            format="json",
        )
        assert response.status_code == 400
        data = response.json()
        assert data["status"] == "BAD_REQUEST"
        assert data["message"] == "Validation failed. Please correct the errors."
        assert data["errors"] == {"name": "Product name cannot be blank."}

    def test_non_object_body_is_a_validation_error(self, api_client):
        response = api_client.post(
            "/api/v1/products/", [1, 2, 3], format="json"
        )
        assert response.status_code == 400
        assert "errors" in response.json()

    def test_malformed_json_has_standard_format(self, api_client):
        response = api_client.post(
            "/api/v1/products/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        assert set(data) == {"status", "message"}
        assert data["status"] == "BAD_REQUEST"
        assert "JSON parse error" in data["message"]

    def test_unsupported_media_type_has_standard_format(self, api_client):
        response = api_client.post(
            "/api/v1/products/", data="name=Tablet", content_type="text/plain"
        )
        assert response.status_code == 415
        assert response.json() == {
            "status": "UNSUPPORTED_MEDIA_TYPE",
            "message": 'Unsupported media type "text/plain" in request.',
        }


class TestDrfErrorBody:
    def test_field_detail_becomes_error_map(self):
        body = drf_error_body(400, {"price": ["A valid number is required."]})
        assert body == {
            "status": "BAD_REQUEST",
            "message": "Validation failed. Please correct the errors.",
            "errors": {"price": "A valid number is required."},
        }

    def test_list_detail_uses_first_message(self):
        body = drf_error_body(400, ["First problem.", "Second problem."])
        assert body == {"status": "BAD_REQUEST", "message": "First problem."}
