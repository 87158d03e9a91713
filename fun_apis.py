"""Random jokes and animal pictures from public APIs. No quota applies."""
import logging

import requests

import config

logger = logging.getLogger(__name__)

JOKE_URL = "https://v2.jokeapi.dev/joke/Any?safe-mode"
CAT_URL = "https://api.thecatapi.com/v1/images/search"
DOG_URL = "https://dog.ceo/api/breeds/image/random"


class FunApiError(Exception):
    pass


def _get_json(url):
    try:
        resp = requests.get(url, timeout=config.HTTP_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning("GET %s failed: %s", url, e)
        raise FunApiError(f"Request to {url} failed: {e}") from e


def get_joke():
    data = _get_json(JOKE_URL)
    try:
        if data["type"] == "single":
            return data["joke"]
        return f"{data['setup']}\n{data['delivery']}"
    except (KeyError, TypeError) as e:
        raise FunApiError(f"Unexpected joke payload: {data!r}") from e


def get_cat_url():
    data = _get_json(CAT_URL)
    try:
        return data[0]["url"]
    except (IndexError, KeyError, TypeError) as e:
        raise FunApiError(f"Unexpected cat payload: {data!r}") from e


def get_dog_url():
    data = _get_json(DOG_URL)
    try:
        return data["message"]
    except (KeyError, TypeError) as e:
        raise FunApiError(f"Unexpected dog payload: {data!r}") from e
