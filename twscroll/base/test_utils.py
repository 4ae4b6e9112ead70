"""Utils for unit tests, also used by projects scrolling the Twitter API in their own tests."""
import json
from collections import deque

import requests


def make_response(body, status_code=200, content_type="application/json; charset=utf-8"):
    """Build a `requests.Response` as if it came from the API."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers["Content-Type"] = content_type
    resp.encoding = "utf-8"
    if isinstance(body, bytes):
        resp._content = body
    elif isinstance(body, str):
        resp._content = body.encode("utf-8")
    else:
        resp._content = json.dumps(body).encode("utf-8")
    return resp


def make_tweets(first_id, count, step=1):
    """Returns `count` tweets with decreasing ids starting at `first_id` (newest first, like the API)."""
    return [
        {"id": first_id - i * step, "id_str": str(first_id - i * step), "text": "tweet {}".format(i)}
        for i in range(count)
    ]


class FakeTwitterAPI(object):
    """Scripted transport, returns the queued responses in order and records every call.

    Once the queue is exhausted, an empty JSON list is returned.
    """

    def __init__(self, pages=None):
        self.responses = deque()
        self.calls = []
        for page in pages or []:
            self.add_page(page)

    def add_page(self, body, status_code=200, content_type="application/json; charset=utf-8"):
        self.responses.append(make_response(body, status_code=status_code, content_type=content_type))
        return self

    def add_failure(self, error=None):
        """Queue an exception to be raised by the next call."""
        self.responses.append(error or requests.ConnectionError("connection refused"))
        return self

    def __call__(self, method, url, params=None, **kwargs):
        self.calls.append({"method": method, "url": url, "params": dict(params or {}), "options": kwargs})
        if not self.responses:
            return make_response([])

        resp = self.responses.popleft()
        if isinstance(resp, Exception):
            raise resp
        return resp

    @property
    def params(self):
        """Query parameters of each call, in order."""
        return [call["params"] for call in self.calls]
