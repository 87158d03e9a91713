"""Tests for the joke and animal picture fetchers."""

from unittest.mock import Mock, patch

import pytest
import requests

import fun_apis
from fun_apis import FunApiError, get_cat_url, get_dog_url, get_joke


def json_response(data, status=200):
    resp = Mock()
    resp.status_code = status
    resp.json.return_value = data
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} error")
    return resp


class TestGetJoke:
    @patch("fun_apis.requests.get")
    def test_single(self, mock_get):
        mock_get.return_value = json_response({"type": "single", "joke": "A joke."})

        assert get_joke() == "A joke."
        mock_get.assert_called_once_with(fun_apis.JOKE_URL, timeout=fun_apis.config.HTTP_TIMEOUT)

    @patch("fun_apis.requests.get")
    def test_two_part(self, mock_get):
        mock_get.return_value = json_response({"type": "twopart", "setup": "Why?", "delivery": "Because."})
        assert get_joke() == "Why?\nBecause."

    @patch("fun_apis.requests.get")
    def test_http_error(self, mock_get):
        mock_get.return_value = json_response({}, status=500)
        with pytest.raises(FunApiError):
            get_joke()

    @patch("fun_apis.requests.get")
    def test_unexpected_payload(self, mock_get):
        mock_get.return_value = json_response({"error": True})
        with pytest.raises(FunApiError):
            get_joke()


class TestAnimalImages:
    @patch("fun_apis.requests.get")
    def test_cat(self, mock_get):
        mock_get.return_value = json_response([{"id": "x", "url": "https://cdn2.thecatapi.com/x.jpg"}])
        assert get_cat_url() == "https://cdn2.thecatapi.com/x.jpg"

    @patch("fun_apis.requests.get")
    def test_cat_empty_list(self, mock_get):
        mock_get.return_value = json_response([])
        with pytest.raises(FunApiError):
            get_cat_url()

    @patch("fun_apis.requests.get")
    def test_dog(self, mock_get):
        mock_get.return_value = json_response({"message": "https://images.dog.ceo/a.jpg", "status": "success"})
        assert get_dog_url() == "https://images.dog.ceo/a.jpg"

    @patch("fun_apis.requests.get")
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("no route")
        with pytest.raises(FunApiError):
            get_dog_url()
