"""
Error hierarchy for filter construction and per-request execution.

Construction errors (``FilterCreationError``) surface while a filter chain is
compiled and keep the chain from ever serving traffic. Execution errors
(``FilterExecutionError``) abort the transformation of a single response
only.
"""


class SkropError(Exception):
    """Base class for every error raised by skrop."""


class FilterCreationError(SkropError):
    """A filter declaration could not be turned into an operation."""


class InvalidParameterCountError(FilterCreationError):
    def __init__(self, filter_name: str, count: int, expected: str):
        super().__init__(
            f"{filter_name}: expected {expected} arguments, got {count}"
        )
        self.filter_name = filter_name
        self.count = count


class InvalidParameterTypeError(FilterCreationError):
    def __init__(self, filter_name: str, position: int, value: object, expected: str):
        super().__init__(
            f"{filter_name}: argument {position} must be {expected}, got {value!r}"
        )
        self.filter_name = filter_name
        self.position = position
        self.value = value


class InvalidEnumValueError(FilterCreationError):
    def __init__(self, filter_name: str, value: object, allowed: list[str]):
        super().__init__(
            f"{filter_name}: {value!r} is not one of {', '.join(allowed)}"
        )
        self.filter_name = filter_name
        self.value = value


class FilterSyntaxError(FilterCreationError):
    """The filter chain text is malformed or names an unknown filter."""


class FilterExecutionError(SkropError):
    """Deriving or executing a stage failed for the current response."""


class ResourceUnavailableError(FilterExecutionError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read resource {path}: {reason}")
        self.path = path


class SizeQueryFailureError(FilterExecutionError):
    """The dimensions of an image could not be determined."""


class StageExecutionError(FilterExecutionError):
    """The native engine could not apply a stage to the image."""
