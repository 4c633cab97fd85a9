"""Tests for RibbonClient."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from vendor_onboarding.exceptions import ImportCommitError
from vendor_onboarding.ribbon import RibbonClient


def _response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def client():
    return RibbonClient("http://ribbon.test/")


class TestRibbonClient:
    def test_create_vendor_posts_user(self, client):
        reply = _response(json_data={"content": {"_id": "v1", "agencyID": "a1"}})
        with patch.object(client.session, "post", return_value=reply) as mock_post:
            content = client.create_vendor({"email": "jane@acme.example"})

        assert content == {"_id": "v1", "agencyID": "a1"}
        args, kwargs = mock_post.call_args
        assert args[0] == "http://ribbon.test/vendor-create"
        assert kwargs["json"] == {"user": {"email": "jane@acme.example"}}
        assert kwargs["timeout"] == 60

    def test_create_vendor_without_content(self, client):
        with patch.object(client.session, "post", return_value=_response(json_data={"ok": True})):
            assert client.create_vendor({}) == {}

    def test_bulk_create_returns_data(self, client):
        reply = _response(json_data={"data": [{"_id": "p1"}, {"_id": "p2"}]})
        with patch.object(client.session, "post", return_value=reply) as mock_post:
            created = client.bulk_create_products([{"name": "A"}, {"name": "B"}])

        assert created == [{"_id": "p1"}, {"_id": "p2"}]
        assert mock_post.call_args[0][0] == "http://ribbon.test/products-bulk-create"
        assert mock_post.call_args[1]["json"] == {"products": [{"name": "A"}, {"name": "B"}]}

    def test_bulk_create_without_data_list(self, client):
        with patch.object(client.session, "post", return_value=_response(json_data={"message": "ok"})):
            assert client.bulk_create_products([]) is None

    def test_http_error(self, client):
        reply = _response(status_code=422, text='{"error": "email taken"}')
        with patch.object(client.session, "post", return_value=reply):
            with pytest.raises(ImportCommitError) as exc:
                client.create_vendor({})

        assert exc.value.status_code == 422
        assert exc.value.response_body == '{"error": "email taken"}'
        assert exc.value.message.startswith("Failed to create vendor: 422")

    def test_network_error(self, client):
        with patch.object(client.session, "post", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(ImportCommitError, match="Failed to create products: refused"):
                client.bulk_create_products([])

    def test_non_json_reply(self, client):
        reply = _response(json_data=ValueError("no json"), text="<html>")
        with patch.object(client.session, "post", return_value=reply):
            with pytest.raises(ImportCommitError, match="not JSON"):
                client.create_vendor({})

    def test_endpoint_overrides(self):
        client = RibbonClient("http://ribbon.test", endpoints={"vendor_create": "/v2/vendors", "timeout": 5})
        with patch.object(client.session, "post", return_value=_response(json_data={})) as mock_post:
            client.create_vendor({})
        assert mock_post.call_args[0][0] == "http://ribbon.test/v2/vendors"
        assert mock_post.call_args[1]["timeout"] == 5
