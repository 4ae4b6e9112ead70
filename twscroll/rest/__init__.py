import logging
import math

from twscroll.base.client import Client
from twscroll.base.client import make_url
from twscroll.base.error import InvalidArgumentError
from twscroll.base.fields import is_n
from twscroll.base.ids import PAGE_SIZES
from twscroll.base.iterator import ScrollIterator
from twscroll.base.iterator import scroller
from twscroll.base.users import id_type
from twscroll.base.users import is_valid_username

logger = logging.getLogger(__name__)


class TwitterClient:
    """Twitter REST API client, scrolls through search results, timelines and followers."""

    def __init__(self, bearer_token=None, client=None, transport=None):
        if client:
            self._client = client
        else:
            self._client = Client(bearer_token=bearer_token)

        self._transport = transport or self._client.fetch

    def _n_times(self, n, n_times, type):
        if n_times is not None:
            return n_times
        if not is_n(n):
            raise InvalidArgumentError("n must be a positive number, got {!r}".format(n))
        return max(1, math.ceil(float(n) / PAGE_SIZES[type]))

    def _user_param(self, user):
        kind = id_type(user)
        if kind == "screen_name" and not is_valid_username(str(user)):
            raise InvalidArgumentError("invalid screen name {!r}".format(user))
        return {kind: user}

    def _scroll(self, query, param, n, n_times, type):
        request = make_url(query, param=param)
        n_times = self._n_times(n, n_times, type)
        logger.debug("scrolling %s: n=%s n_times=%d", request.url, n, n_times)
        return scroller(request, n, n_times=n_times, type=type, transport=self._transport)

    def search(self, q, n=100, n_times=None, **params):
        """Returns the pages of tweets matching `q`."""
        param = dict(q=q, result_type="recent", count=PAGE_SIZES["search"], max_id=None)
        param.update(params)
        return self._scroll("search/tweets", param, n, n_times, "search")

    def timeline(self, user, n=200, n_times=None, **params):
        """Returns the pages of the most recent tweets posted by `user` (a user id or a screen name)."""
        param = dict(count=PAGE_SIZES["timeline"], tweet_mode="extended", max_id=None)
        param.update(self._user_param(user))
        param.update(params)
        return self._scroll("statuses/user_timeline", param, n, n_times, "timeline")

    def followers(self, user, n=5000, n_times=None, **params):
        """Returns the pages of follower ids of `user`."""
        param = dict(count=PAGE_SIZES["followers"], cursor="-1", stringify_ids="true")
        param.update(self._user_param(user))
        param.update(params)
        return self._scroll("followers/ids", param, n, n_times, "followers")

    def iter_timeline(self, user, n=200, n_times=None, **params):
        """Same as `timeline`, but pages are fetched lazily."""
        param = dict(count=PAGE_SIZES["timeline"], tweet_mode="extended", max_id=None)
        param.update(self._user_param(user))
        param.update(params)
        return ScrollIterator(
            make_url("statuses/user_timeline", param=param),
            n,
            n_times=self._n_times(n, n_times, "timeline"),
            type="timeline",
            transport=self._transport,
        )

    def __repr__(self):
        return "twscroll.rest.TwitterClient(client={!r})".format(self._client)

    def __str__(self):
        return self.__repr__()
