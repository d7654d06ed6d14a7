import json

import pytest
import requests


def make_response(status=200, body="", encoding="utf-8", url="https://news.example.com/"):
    response = requests.Response()
    response.status_code = status
    response._content = body.encode(encoding)
    response.encoding = encoding
    response.url = url
    return response


def make_json_response(status, payload):
    return make_response(status, json.dumps(payload))


class FakeSession:
    """Stands in for requests.Session; records calls and replays one outcome."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _reply(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._reply("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._reply("POST", url, **kwargs)


class FirstChoice:
    """Deterministic random source: always picks the first element."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    def choice(self, seq):
        return seq[-1]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def first_choice():
    return FirstChoice()
