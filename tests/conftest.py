import pathlib
import sys
from dataclasses import dataclass, field
from typing import Optional

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from shopify_rest_core.client import RestClient
from shopify_rest_core.transport import Transport


@dataclass
class DummyResponse:
    status_code: int
    _json: Optional[dict] = None
    text: str = ""
    headers: dict = field(default_factory=dict)

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class ListTransport(Transport):
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, headers, params, timeout):
        self.calls.append({"url": url, "headers": dict(headers), "params": dict(params)})
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def slept():
    return SleepRecorder()


def make_client(transport):
    return RestClient("test.myshopify.com", "token", transport=transport)
