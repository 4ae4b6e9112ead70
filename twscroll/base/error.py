"""Errors and warnings raised while scrolling the Twitter API."""


class TwScrollError(Exception):
    """Base error for the twscroll package."""


class InvalidArgumentError(TwScrollError, ValueError):
    """Error raised before any network activity when the arguments are malformed."""


class DecodeError(TwScrollError):
    """Error raised when a response body is not JSON (or not valid JSON)."""

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response


class APIError(TwScrollError):
    """Error payload embedded in an otherwise successful response."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    @classmethod
    def from_page(cls, page):
        errors = page.get("errors")
        if isinstance(errors, dict):
            errors = [errors]
        if not isinstance(errors, list):
            return cls(str(errors))

        messages = []
        code = None
        for error in errors:
            if isinstance(error, dict):
                messages.append(str(error.get("message", "")))
                if code is None:
                    code = error.get("code")
            else:
                messages.append(str(error))

        return cls("; ".join(messages), code=code)


class TwScrollWarning(UserWarning):
    """Base warning for the twscroll package."""


class TransportWarning(TwScrollWarning):
    """A fetch came back with a non-2xx status (or failed altogether)."""


class APIErrorWarning(TwScrollWarning):
    """A decoded page carried an API error payload."""
