from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import List, Optional


class SLSAError(Exception):
    """Exception raised by functions defined in slsa_provenance."""

    def __init__(self, message: str | List[str], origin: Optional[str] = None):
        """Initialize an SLSAError.

        SLSAError can store several messages and thus be used to propagate
        them.

        :param message: the exception message
        :param origin: the name of the function, class, or module having raised
            the exception
        """
        super().__init__(message, origin)
        self.origin = origin
        self.messages = []
        if message is not None:
            if isinstance(message, str):
                self.messages.append(message)
            else:
                self.messages.extend(message)

    def __iadd__(self, other: str | List[str] | SLSAError) -> SLSAError:
        """Add messages to the current instance.

        :param other: a message or an SLSAError instance
        """
        if isinstance(other, SLSAError):
            self.messages.extend(other.messages)
        elif isinstance(other, str):
            self.messages.append(other)
        else:
            self.messages.extend(other)
        return self

    def __str__(self) -> str:
        if self.messages:
            error_msg = self.messages[-1]
        else:
            error_msg = self.__class__.__name__
        if self.origin:
            return f"{self.origin}: {error_msg}\n"
        else:
            return error_msg


class JsonError(SLSAError):
    """Raised when a document cannot be read as JSON."""

    pass


class HashError(SLSAError):
    pass


class ValidationError(SLSAError, ValueError):
    """A structural violation found while validating a provenance document.

    :param path: JSON pointer (RFC 6901) of the offending field, ``""`` for
        the document root.
    :param message: human readable description of the violation.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message, origin="validation")
        self.path = path

    @property
    def field(self) -> str:
        """Name of the offending field (last component of :attr:`path`)."""
        return pointer_field(self.path)

    @property
    def message(self) -> str:
        return self.messages[-1] if self.messages else self.__class__.__name__

    def __str__(self) -> str:
        return f"{self.path or '/'}: {self.message}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, self.__class__):
            return self.path == other.path and self.message == other.message
        return False

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.path, self.message))


class MissingFieldError(ValidationError):
    """A required field is absent."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"missing required field {pointer_field(path)!r}")


class FieldTypeError(ValidationError, TypeError):
    """A field is present but holds the wrong JSON type.

    :param expected: the expected JSON type(s), e.g. ``"string"``
    :param actual: the JSON type that was found
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(path, f"expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class FormatError(ValidationError):
    """A string field does not satisfy its format (``uri``, ``date-time``)."""

    def __init__(self, path: str, format: str, value: str | None = None) -> None:
        if value is None:
            message = f"not a valid {format}"
        else:
            message = f"{value!r} is not a valid {format}"
        super().__init__(path, message)
        self.format = format
        self.value = value


class ArrayElementError(ValidationError):
    """Wrap an error found inside an element of an array.

    :param path: JSON pointer of the array itself
    :param index: index of the faulty element
    :param cause: the error found inside the element
    """

    def __init__(self, path: str, index: int, cause: ValidationError) -> None:
        super().__init__(path, f"element {index}: {cause.message}")
        self.index = index
        self.cause = cause

    @property
    def field(self) -> str:
        return self.cause.field

    @property
    def root_cause(self) -> ValidationError:
        """Return the innermost non array error."""
        cause = self.cause
        while isinstance(cause, ArrayElementError):
            cause = cause.cause
        return cause


def escape_pointer_token(token: str) -> str:
    """Escape a key so that it can be used as a JSON pointer component."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def pointer_field(path: str) -> str:
    """Return the unescaped last component of a JSON pointer."""
    return unescape_pointer_token(path.rsplit("/", 1)[-1])
