"""Twitter API client."""
import logging
import os
from collections.abc import Mapping

import requests

from twscroll.base.error import DecodeError

logger = logging.getLogger(__name__)

REST_HOSTNAME = "api.twitter.com"
STREAM_HOSTNAME = "stream.twitter.com"
API_VERSION = "1.1"
DEFAULT_TIMEOUT = 30.0

PAGINATION_PARAMS = ("cursor", "max_id")


class Request:
    """Request holds everything needed to fetch one page, the pagination parameter included.

    The active pagination parameter is `cursor` when the query has a `cursor` key, `max_id` otherwise.
    """

    def __init__(self, path, query=None, hostname=REST_HOSTNAME, scheme="https", method="GET"):
        self.method = method
        self.scheme = scheme
        self.hostname = hostname
        self.path = path
        self.query = dict(query or {})

    @property
    def url(self):
        return "{}://{}/{}".format(self.scheme, self.hostname, self.path.lstrip("/"))

    @property
    def pagination_param(self):
        if "cursor" in self.query:
            return "cursor"
        return "max_id"

    @property
    def pagination_value(self):
        return self.query.get(self.pagination_param)

    def copy(self):
        return self.__class__(
            self.path,
            query=self.query,
            hostname=self.hostname,
            scheme=self.scheme,
            method=self.method,
        )

    def __repr__(self):
        return "Request(method={!r}, url={!r}, query={!r})".format(self.method, self.url, self.query)

    def __str__(self):
        return self.__repr__()


def is_request(request):
    """Returns True if `request` can be paginated."""
    if not isinstance(request, Request):
        return False
    if request.method not in ("GET", "POST"):
        return False
    if not request.scheme or not request.hostname or not request.path:
        return False
    if not isinstance(request.query, Mapping):
        return False
    # Only one pagination parameter can drive the scroll
    return not all(param in request.query for param in PAGINATION_PARAMS)


def make_url(query, restapi=True, param=None):
    """Build the `Request` for the given endpoint (e.g. `statuses/user_timeline`).

    `restapi=False` targets the streaming API host instead of the REST one.
    """
    hostname = REST_HOSTNAME if restapi else STREAM_HOSTNAME
    return Request("{}/{}.json".format(API_VERSION, query), query=param, hostname=hostname)


def decode(resp):
    """Decode the JSON body of a response, raise a `DecodeError` if it's not JSON."""
    content_type = resp.headers.get("content-type", "")
    if "application/json" not in content_type:
        raise DecodeError(
            "API did not return json (content-type={!r})".format(content_type), response=resp
        )

    try:
        return resp.json()
    except ValueError as error:
        raise DecodeError("malformed json body: {}".format(error), response=resp) from error


class Client:
    """Basic client, issues authenticated requests and returns the raw responses."""

    def __init__(self, bearer_token=None, timeout=None, session=None):
        self.bearer_token = bearer_token or os.getenv("TWITTER_BEARER_TOKEN")
        self.timeout = float(timeout or os.getenv("TWSCROLL_TIMEOUT", DEFAULT_TIMEOUT))
        self.session = session or requests.Session()

    def fetch(self, method: str, url: str, params=None, **kwargs):
        """Helper for making authenticated request to the Twitter API, the response is returned as is."""
        if self.bearer_token:
            headers = kwargs.get("headers", {})
            headers["Authorization"] = "Bearer " + self.bearer_token
            kwargs["headers"] = headers

        kwargs.setdefault("timeout", self.timeout)
        logger.debug("%s %s params=%r", method, url, params)
        return self.session.request(method, url, params=params, **kwargs)

    def scroll(self, request, n, n_times=1, type=None, **kwargs):
        """Scroll through the pages of `request`, see `twscroll.base.iterator.scroller`."""
        # Imported here as the iterator depends on this module
        from twscroll.base.iterator import scroller

        return scroller(request, n, n_times=n_times, type=type, transport=self.fetch, **kwargs)

    def __repr__(self):
        return "twscroll.base.client.Client(authenticated={!r})".format(bool(self.bearer_token))

    def __str__(self):
        return self.__repr__()
