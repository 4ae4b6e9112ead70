"""Field lookup and data checks over decoded JSON pages.

A decoded page is either a dict (object), a list (array), a scalar or None. Only dicts and lists are
"recursive", i.e. can be descended into.
"""
import math
from numbers import Real


def is_recursive(x):
    return isinstance(x, (dict, list))


def values_of(x):
    """Returns the elements of a dict/list, an empty list for anything else."""
    if isinstance(x, dict):
        return list(x.values())
    if isinstance(x, list):
        return x
    return []


def any_recursive(x):
    if not is_recursive(x):
        return False
    return any(is_recursive(value) for value in values_of(x))


def has_name(x, name):
    return isinstance(x, dict) and name in x


def names_of(x):
    """Returns the field names of a dict, or the field names found across a list of dicts."""
    if isinstance(x, dict):
        return list(x.keys())
    if isinstance(x, list):
        return all_uq_names(x)
    return []


def all_uq_names(x):
    """Unique keys across a list of dicts, in first-seen order."""
    names = {}
    for item in values_of(x):
        if isinstance(item, dict):
            for key in item:
                names.setdefault(key, None)
    return list(names)


def pluck(x, name):
    """Returns the `name` field of a dict, or the `name` field of each dict of a list that holds it."""
    if isinstance(x, dict):
        return x.get(name)
    return [item[name] for item in values_of(x) if has_name(item, name)]


def unlist(x):
    """Flatten nested lists/dicts into a flat list of scalars."""
    if not is_recursive(x):
        return [x]

    out = []
    for value in values_of(x):
        out.extend(unlist(value))
    return out


def return_last(x, n=1):
    """Returns the last `n` elements, last one first."""
    x = list(x)
    return [x[len(x) - i - 1] for i in range(min(n, len(x)))]


def is_missing(x):
    return x is None or (isinstance(x, float) and math.isnan(x))


def na_omit(x):
    return [value for value in x if not is_missing(value)]


def go_get_var(x, *names, expect_n=None):
    """Look up a field by following `names`, level after level.

    At each level the value is descended into directly if it holds the name, otherwise if it's a collection
    of containers, the elements holding the name are kept and the field is extracted from each of them
    (N objects become N values). A name that can't be resolved at a level is skipped; the lookup succeeds
    if the last name was resolved.

    Without `expect_n`, returns None on failure, the raw value if it still holds containers, or a flat list.
    With `expect_n`, always returns a flat list padded with None up to `expect_n` elements.

    >>> go_get_var({"statuses": [{"id": 1}, {"id": 2}, {}]}, "statuses", "id", expect_n=5)
    [1, 2, None, None, None]

    """
    success = False
    for i, name in enumerate(names):
        if not is_recursive(x):
            break

        if has_name(x, name):
            x = x[name]
        elif any_recursive(x) and any(has_name(item, name) for item in values_of(x)):
            x = pluck(values_of(x), name)
        else:
            continue

        if i == len(names) - 1:
            success = True

    if not success and expect_n is None:
        return None

    if any_recursive(x) and expect_n is None:
        return x

    out = unlist(x) if success else []
    if expect_n is not None and len(out) < expect_n:
        out.extend([None] * (expect_n - len(out)))

    return out


def is_n(n):
    """Returns True for a positive finite number (numeric strings are accepted)."""
    if isinstance(n, str):
        try:
            n = float(n)
        except ValueError:
            return False

    if isinstance(n, bool) or not isinstance(n, Real):
        return False

    return math.isfinite(n) and n > 0


def maybe_n(x):
    if isinstance(x, str):
        try:
            x = float(x)
        except ValueError:
            return False

    if isinstance(x, bool) or not isinstance(x, Real):
        return False

    return not math.isnan(x)
