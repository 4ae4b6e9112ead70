"""Id and cursor extraction from decoded pages."""
from twscroll.base.error import InvalidArgumentError
from twscroll.base.fields import go_get_var
from twscroll.base.fields import has_name
from twscroll.base.fields import is_recursive
from twscroll.base.fields import names_of
from twscroll.base.fields import pluck
from twscroll.base.fields import unlist
from twscroll.base.fields import values_of

# Fixed page sizes of the API, faster and more reliable than counting
PAGE_SIZES = {
    "search": 100,
    "timeline": 200,
    "followers": 5000,
}

CURSOR_FIELDS = (
    ("next_cursor_str",),
    ("next_cursor",),
    ("search_metadata", "next_cursor"),
)


def _as_list(x):
    if x is None:
        return []
    return [value for value in unlist(x) if value is not None]


def unique_id(x):
    """Returns the ids of a page, using the first field found among
    `id_str`, `ids`, `id`, the first element's `ids`, `status_id` and `user_id`."""
    if isinstance(x, dict):
        for key in x:
            if key.lower() == "statuses":
                x = x[key]
                break

    names = names_of(x)
    for name in ("id_str", "ids", "id"):
        if name in names:
            return pluck(x, name)

    elements = values_of(x)
    if elements and has_name(elements[0], "ids"):
        return elements[0]["ids"]

    for name in ("status_id", "user_id"):
        if name in names:
            return pluck(x, name)

    return None


def unique_id_count(x, type=None):
    """Returns the number of distinct ids in the page, or the API page size if `type` is given."""
    if type is not None:
        try:
            return PAGE_SIZES[type]
        except KeyError:
            raise InvalidArgumentError(
                "unknown resource type {!r}, expected one of {}".format(type, sorted(PAGE_SIZES))
            ) from None

    if not is_recursive(x):
        return 0

    elements = values_of(x)
    if len(elements) > 1 and isinstance(elements[1], dict):
        ids = []
        for element in elements:
            ids.extend(_as_list(unique_id(element)))
    else:
        ids = _as_list(unique_id(x))

    return len(set(ids))


def get_cursor(x):
    """Returns the next cursor of a cursor-paginated page (None if there's none)."""
    for path in CURSOR_FIELDS:
        value = go_get_var(x, *path)
        if isinstance(value, list):
            value = next((v for v in value if v is not None), None)
        if value is not None:
            return value

    return None


def get_max_id(x):
    """Returns the id to request the next page with.

    Ids come newest first, so the last one is the oldest and becomes the next `max_id`. Cursor-paginated
    pages return their next cursor instead.
    """
    if isinstance(x, dict) and any(path[0] in x for path in CURSOR_FIELDS[:2]):
        return get_cursor(x)

    ids = _as_list(unique_id(x))
    if not ids:
        return None

    return ids[-1]
