"""User identifiers classification."""
from twscroll.base.error import InvalidArgumentError


def _is_numeric(x):
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        return True
    return isinstance(x, str) and x.isdigit()


def id_type(x):
    """Returns `user_id` if `x` (or every element of `x`) is numeric, `screen_name` otherwise."""
    values = x if isinstance(x, (list, tuple)) else [x]
    if values and all(_is_numeric(value) for value in values):
        return "user_id"
    return "screen_name"


def ids_type(users):
    """Returns the identifier type shared by all `users`.

    Raises `InvalidArgumentError` if user ids and screen names are mixed.
    """
    if not isinstance(users, (list, tuple)):
        users = [users]

    types = {id_type(user) for user in users}
    if len(types) > 1:
        raise InvalidArgumentError("users must be user_ids OR screen_names, not both")
    if not types:
        raise InvalidArgumentError("no users given")

    return types.pop()


def is_valid_username(username):
    return " " not in username
