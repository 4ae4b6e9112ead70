"""Classification of fetched responses and decoded pages."""
import enum
import logging
import warnings

from twscroll.base.error import APIError
from twscroll.base.error import TransportWarning
from twscroll.base.fields import is_recursive
from twscroll.base.ids import get_cursor
from twscroll.base.ids import get_max_id

logger = logging.getLogger(__name__)

# Value returned by the API when there is no more pages
TERMINAL_VALUES = ("0",)


class StopReason(enum.Enum):
    """Why a scroll stopped."""

    EMPTY_PAGE = "empty_page"
    DECODE_ERROR = "decode_error"
    TRANSPORT_ERROR = "transport_error"
    API_ERROR = "api_error"
    COUNT_EXCEEDED = "count_exceeded"
    MISSING_CURSOR = "missing_cursor"
    TERMINAL_SENTINEL = "terminal_sentinel"
    NO_PROGRESS = "no_progress"
    MAX_ITERATIONS = "max_iterations"
    CANCELLED = "cancelled"


def warn_for_status(resp):
    """Emits a `TransportWarning` for non-2xx responses, returns True if it did."""
    if 200 <= resp.status_code < 300:
        return False

    message = "Twitter API returned status {}".format(resp.status_code)
    try:
        body = resp.json()
    except ValueError:
        body = None
    if has_errors(body):
        message += ": " + error_message(body)

    logger.warning(message)
    warnings.warn(message, TransportWarning, stacklevel=2)
    return True


def has_errors(page):
    return isinstance(page, dict) and "errors" in page


def error_message(page):
    return APIError.from_page(page).message


def is_empty_page(page):
    """Returns True for a missing page, a zero-length one, or a page holding zero statuses."""
    if page is None:
        return True
    if is_recursive(page) and len(page) == 0:
        return True
    if isinstance(page, dict) and "statuses" in page:
        statuses = page["statuses"]
        return statuses is None or len(statuses) == 0
    return False


def _is_terminal(value):
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    return str(value) in TERMINAL_VALUES


def break_reason(page, request):
    """Returns the `StopReason` if paginating past `page` should stop, None otherwise."""
    param = request.pagination_param
    if param == "cursor":
        value = get_cursor(page)
    else:
        value = get_max_id(page)
    if value is None:
        return StopReason.MISSING_CURSOR

    if _is_terminal(value):
        return StopReason.TERMINAL_SENTINEL

    current = request.query.get(param)
    if current is None:
        return None
    if str(value) == str(current):
        return StopReason.NO_PROGRESS

    return None


def should_break(page, request):
    return break_reason(page, request) is not None
