"""Pagination iterator for scrolling through API responses, page after page."""
import enum
import logging
import time
import warnings

import requests

from twscroll.base.classify import StopReason
from twscroll.base.classify import break_reason
from twscroll.base.classify import error_message
from twscroll.base.classify import has_errors
from twscroll.base.classify import is_empty_page
from twscroll.base.classify import warn_for_status
from twscroll.base.client import Client
from twscroll.base.client import decode
from twscroll.base.client import is_request
from twscroll.base.error import APIErrorWarning
from twscroll.base.error import DecodeError
from twscroll.base.error import InvalidArgumentError
from twscroll.base.error import TransportWarning
from twscroll.base.fields import is_n
from twscroll.base.ids import PAGE_SIZES
from twscroll.base.ids import get_cursor
from twscroll.base.ids import get_max_id
from twscroll.base.ids import unique_id_count

logger = logging.getLogger(__name__)


class _EmptyResult:
    """Marker recorded in place of a page that carried an API error."""

    def __len__(self):
        return 0

    def __iter__(self):
        return iter(())

    def __bool__(self):
        return False

    def __repr__(self):
        return "EMPTY_RESULT"


EMPTY_RESULT = _EmptyResult()


class State(enum.Enum):
    FETCHING = "fetching"
    CLASSIFYING = "classifying"
    EXTRACTING = "extracting"
    STOPPED = "stopped"


class ScrollIterator:
    """Iterate over the pages of `request`, at most `n_times` of them.

    The scroll stops on the page fetched after the one that took the count of unique ids past `n`, or when a
    page signals there's nothing more to fetch (see `StopReason`). As the target is checked against the
    count seen before the current page, the last page can take the total past `n` by more than one page's
    worth of ids. Errors happening while scrolling are turned into warnings, iterating never raises.

    `deadline` is a number of seconds after which no new page is requested; it doesn't interrupt a fetch
    (the transport `timeout` option does).
    """

    def __init__(
        self,
        request,
        n,
        n_times=1,
        type=None,
        transport=None,
        decoder=decode,
        cancel=None,
        deadline=None,
        **options
    ):
        if not is_n(n):
            raise InvalidArgumentError("n must be a positive number, got {!r}".format(n))
        if isinstance(n_times, bool) or not isinstance(n_times, int) or n_times < 1:
            raise InvalidArgumentError("n_times must be a positive integer, got {!r}".format(n_times))
        if type is not None and type not in PAGE_SIZES:
            raise InvalidArgumentError("unknown resource type {!r}".format(type))
        if not is_request(request):
            raise InvalidArgumentError("not a valid request: {!r}".format(request))

        # Work on a copy as the pagination parameter gets rewritten after each page
        self.request = request.copy()
        self.n = float(n)
        self.n_times = n_times
        self.type = type

        self._transport = transport or Client().fetch
        self._decoder = decoder
        self.options = options

        # Cancellation
        self._cancel = cancel
        self._deadline = None
        if deadline is not None:
            self._deadline = time.monotonic() + deadline

        # Scroll state
        self.state = State.FETCHING
        self.stop_reason = None
        self.count = 0
        self.iterations = 0
        self.cursor = self.request.pagination_value

    def _stop(self, reason):
        logger.debug("scroll of %s stopped after %d page(s): %s", self.request.url, self.iterations, reason.value)
        self.state = State.STOPPED
        self.stop_reason = reason

    def _cancelled(self):
        if self._cancel is not None and self._cancel.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def do_req(self):
        return self._transport(
            self.request.method, self.request.url, params=dict(self.request.query), **self.options
        )

    def advance(self, page):
        """Rewrite the pagination parameter of the request to point to the page after `page`."""
        param = self.request.pagination_param
        if param == "cursor":
            self.cursor = get_cursor(page)
        else:
            self.cursor = get_max_id(page)

        self.request.query[param] = self.cursor

    def __iter__(self):
        return self

    def __next__(self):
        if self.state is State.STOPPED:
            raise StopIteration

        if self.iterations >= self.n_times:
            self._stop(StopReason.MAX_ITERATIONS)
            raise StopIteration

        if self._cancelled():
            self._stop(StopReason.CANCELLED)
            raise StopIteration

        self.state = State.FETCHING
        self.iterations += 1
        try:
            resp = self.do_req()
        except requests.RequestException as error:
            message = "request to {} failed: {}".format(self.request.url, error)
            logger.warning(message)
            warnings.warn(message, TransportWarning, stacklevel=2)
            resp = None

        if resp is None:
            self._stop(StopReason.TRANSPORT_ERROR)
            raise StopIteration

        self.state = State.CLASSIFYING
        warn_for_status(resp)
        try:
            page = self._decoder(resp)
        except DecodeError as error:
            logger.warning("failed to decode page %d of %s: %s", self.iterations, self.request.url, error)
            self._stop(StopReason.DECODE_ERROR)
            raise StopIteration

        if is_empty_page(page):
            self._stop(StopReason.EMPTY_PAGE)
            raise StopIteration

        if has_errors(page):
            message = error_message(page)
            logger.warning(message)
            warnings.warn(message, APIErrorWarning, stacklevel=2)
            self._stop(StopReason.API_ERROR)
            return EMPTY_RESULT

        self.state = State.EXTRACTING
        target_reached = self.count > self.n
        self.count += unique_id_count(page, type=self.type)
        if target_reached:
            self._stop(StopReason.COUNT_EXCEEDED)
            return page

        reason = break_reason(page, self.request)
        if reason is not None:
            self._stop(reason)
            return page

        self.advance(page)
        self.state = State.FETCHING
        return page


def scroller(request, n, n_times=1, type=None, transport=None, **kwargs):
    """Fetch up to `n_times` pages of `request`, returns the list of pages in fetch order.

    Args:
        request: the `Request` to paginate, its `cursor` or `max_id` parameter gets rewritten after each page.
        n: number of unique ids wanted.
        n_times: maximum number of requests.
        type: one of `search`, `timeline` or `followers` to count pages using the API page size.
        transport: `(method, url, params=..., **options) -> requests.Response`, defaults to `Client().fetch`.
        **kwargs: `decoder`, `cancel` (a `threading.Event`), `deadline` (seconds), the rest (`timeout`
            included) is passed to the transport.

    Raises `InvalidArgumentError` on malformed arguments, before any request. Failures while scrolling are
    reported as warnings and the pages fetched so far are returned.
    """
    return list(ScrollIterator(request, n, n_times=n_times, type=type, transport=transport, **kwargs))
