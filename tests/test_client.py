"""Tests for the GitHub REST client."""

from unittest.mock import Mock, patch

import pytest
import requests

from sizelabel.github.client import DIFF_MEDIA_TYPE, GitHubClient, UpstreamError


def _response(status_code=200, text="", json_data=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


class TestClientSetup:
    def test_headers(self):
        client = GitHubClient("t0ken")
        assert client.base_url == "https://api.github.com"
        assert client.session.headers["Authorization"] == "token t0ken"
        assert client.session.headers["Accept"] == "application/vnd.github.v3+json"
        assert client.session.headers["User-Agent"].startswith("size-label/")

    def test_base_url_trailing_slash(self):
        client = GitHubClient("t", base_url="https://ghe.example.com/api/v3/")
        assert client.base_url == "https://ghe.example.com/api/v3"


class TestRequests:
    def test_get_diff(self):
        client = GitHubClient("t")
        with patch.object(client.session, "request", return_value=_response(text="diff body")) as req:
            assert client.get_pull_request_diff("acme", "docs", 7) == "diff body"
        method, url = req.call_args.args
        assert method == "GET"
        assert url == "https://api.github.com/repos/acme/docs/pulls/7"
        assert req.call_args.kwargs["headers"] == {"Accept": DIFF_MEDIA_TYPE}

    def test_add_labels(self):
        client = GitHubClient("t")
        with patch.object(
            client.session, "request", return_value=_response(json_data=[{"name": "size/S"}])
        ) as req:
            result = client.add_labels("acme", "docs", 7, ["size/S", "translation"])
        assert result == [{"name": "size/S"}]
        method, url = req.call_args.args
        assert method == "POST"
        assert url.endswith("/repos/acme/docs/issues/7/labels")
        assert req.call_args.kwargs["json"] == {"labels": ["size/S", "translation"]}

    def test_remove_label_quotes_name(self):
        client = GitHubClient("t")
        with patch.object(client.session, "request", return_value=_response()) as req:
            client.remove_label("acme", "docs", 7, "size/XS")
        method, url = req.call_args.args
        assert method == "DELETE"
        assert url.endswith("/repos/acme/docs/issues/7/labels/size%2FXS")


class TestErrors:
    def test_error_status(self):
        client = GitHubClient("t")
        response = _response(404, json_data={"message": "Label does not exist"}, reason="Not Found")
        with patch.object(client.session, "request", return_value=response):
            with pytest.raises(UpstreamError) as excinfo:
                client.remove_label("acme", "docs", 7, "update")
        assert excinfo.value.status_code == 404
        assert "Label does not exist" in str(excinfo.value)

    def test_error_without_json_body(self):
        client = GitHubClient("t")
        with patch.object(client.session, "request", return_value=_response(500, reason="Server Error")):
            with pytest.raises(UpstreamError, match="Server Error"):
                client.get_pull_request_diff("acme", "docs", 7)

    def test_transport_failure(self):
        client = GitHubClient("t")
        with patch.object(
            client.session, "request", side_effect=requests.ConnectionError("boom")
        ):
            with pytest.raises(UpstreamError) as excinfo:
                client.get_pull_request_diff("acme", "docs", 7)
        assert excinfo.value.status_code is None
