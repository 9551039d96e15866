import pytest

from config.settings import mask_sensitive_data

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_keeps_key(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["header"] == "token=***MASKED***"

    def test_authorization_header_masked(self):
        event_dict = {"event": "test", "header": "Authorization: Bearer-xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "Bearer-xyz" not in result["header"]

    def test_non_string_values_untouched(self):
        event_dict = {"event": "product.created", "product_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["product_id"] == 42

    def test_non_sensitive_data_unchanged(self):
        event_dict = {"event": "product.created", "name": "Smartphone"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result == {"event": "product.created", "name": "Smartphone"}
