"""Generator errors with tracking IDs."""

import uuid

from utils.timestamp import format_timestamp


class FloatIdError(Exception):
    """Base error with short tracking ID and timestamp."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = uuid.uuid4().hex[:12]
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class PlatformUnsupportedError(FloatIdError):
    """Native integers are narrower than 64 bits."""

    def __init__(self, message, bits=None, **kwargs):
        context = kwargs.pop("context", {})
        if bits is not None:
            context["bits"] = bits
        super().__init__(message, context=context, **kwargs)


class InvalidArgumentTypeError(FloatIdError, TypeError):
    """An argument is not a whole number."""

    def __init__(self, message, argument=None, got=None, **kwargs):
        context = kwargs.pop("context", {})
        if argument:
            context["argument"] = argument
        if got:
            context["got"] = got
        super().__init__(message, context=context, **kwargs)


class _ArgumentRangeError(FloatIdError, ValueError):

    _bound_name = "bound"

    def __init__(self, message, argument=None, value=None, bound=None, **kwargs):
        context = kwargs.pop("context", {})
        if argument:
            context["argument"] = argument
        if value is not None:
            context["value"] = value
        if bound is not None:
            context[self._bound_name] = bound
        super().__init__(message, context=context, **kwargs)


class ArgumentBelowMinimumError(_ArgumentRangeError):
    """A numeric argument is below its floor."""

    _bound_name = "minimum"


class ArgumentAboveMaximumError(_ArgumentRangeError):
    """A numeric argument exceeds its ceiling."""

    _bound_name = "maximum"
