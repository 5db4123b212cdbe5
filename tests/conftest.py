import io
import json

import pytest
from rich.console import Console

from mediarefresh.console import Log
from mediarefresh.models import Reply


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text
        self.content = text.encode()

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """
    Stands in for requests.Session.
    routes maps (method, path) to a FakeResponse, a list of them (served in
    order, last one repeats) or a callable(params, json) returning one.
    Unknown routes answer 404.
    """

    def __init__(self, base_url, routes=None):
        self.base_url = base_url.rstrip('/')
        self.routes = dict(routes or {})
        self.headers = {}
        self.calls = []
        self.closed = False

    def request(self, method, url, params=None, json=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append((method, path, params, json))
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, text="not found")
        if callable(route):
            return route(params, json)
        if isinstance(route, list):
            return route.pop(0) if len(route) > 1 else route[0]
        return route

    def paths(self, method=None):
        return [c[1] for c in self.calls if method is None or c[0] == method]

    def close(self):
        self.closed = True


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class Capability:
    """A recorded callable returning canned Replies, for resolver and matcher tests."""

    def __init__(self, *replies, by_arg=None):
        self.replies = list(replies)
        self.by_arg = by_arg or {}
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        if args and args[0] in self.by_arg:
            return self.by_arg[args[0]]
        if not self.replies:
            return Reply(False, [], 500, "no reply")
        return self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]


@pytest.fixture
def log():
    return Log(console=Console(file=io.StringIO(), width=200), verbose=True)


@pytest.fixture
def clock():
    return FakeClock()
