"""Building blocks used to validate provenance documents.

Validation walks a decoded JSON document field by field. Errors are
reported to a :class:`Checker` which either raises the first one
(*fail-fast*, used when parsing) or records all of them (*collect-all*, used
to produce complete diagnostics).

Every error is tagged with the JSON pointer (RFC 6901) of the offending
field, such as ``/buildDefinition/resolvedDependencies/0/uri``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slsa_provenance.date import is_date_time
from slsa_provenance.error import (
    ArrayElementError,
    FieldTypeError,
    FormatError,
    MissingFieldError,
    escape_pointer_token,
)
from slsa_provenance.json import is_json_value, json_type_name
from slsa_provenance.uri import is_uri

if TYPE_CHECKING:
    from typing import Any
    from slsa_provenance.error import ValidationError


class _Unset(object):
    """Type of :data:`UNSET`."""

    __instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _Unset()
"""Value of an optional field that is absent from the document.

Distinct from ``None``, which stands for a field explicitly set to ``null``.
"""


class Checker(object):
    """Receive the errors found while validating a document.

    :param fail_fast: if **True**, the first reported error is raised
        immediately. Otherwise errors are accumulated in :attr:`errors`.
    """

    def __init__(self, fail_fast: bool = True) -> None:
        self.fail_fast = fail_fast
        self.errors: list[ValidationError] = []

    @property
    def count(self) -> int:
        """Number of errors reported so far."""
        return len(self.errors)

    def report(self, error: ValidationError) -> None:
        """Report a validation error.

        :raise ValidationError: *error* itself in fail-fast mode
        """
        if self.fail_fast:
            raise error
        self.errors.append(error)

    def element(self, path: str, index: int) -> Checker:
        """Return a checker for the element *index* of the array at *path*.

        Errors reported to the returned checker are wrapped in an
        :class:`ArrayElementError` before reaching this checker.
        """
        return _ElementChecker(self, path, index)


class _ElementChecker(Checker):
    def __init__(self, parent: Checker, path: str, index: int) -> None:
        super().__init__(parent.fail_fast)
        self.parent = parent
        self.path = path
        self.index = index

    @property
    def count(self) -> int:
        return self.parent.count

    def report(self, error: ValidationError) -> None:
        self.parent.report(ArrayElementError(self.path, self.index, error))


def child_path(path: str, key: str | int) -> str:
    """Return the JSON pointer of *key* inside the value at *path*."""
    return f"{path}/{escape_pointer_token(str(key))}"


def check_type(
    checker: Checker, value: Any, path: str, json_types: tuple[str, ...]
) -> bool:
    """Check that *value* has one of the given JSON types.

    :param json_types: accepted JSON type names (see
        :func:`~slsa_provenance.json.json_type_name`)
    :return: **True** if the type is valid, **False** if an error has been
        reported.
    """
    actual = json_type_name(value)
    if actual in json_types:
        return True
    checker.report(FieldTypeError(path, " or ".join(json_types), actual))
    return False


def check_required(checker: Checker, obj: dict, key: str, path: str) -> bool:
    """Check that the required field *key* is present in *obj*."""
    if key in obj:
        return True
    checker.report(MissingFieldError(child_path(path, key)))
    return False


def check_string(checker: Checker, value: Any, path: str) -> bool:
    return check_type(checker, value, path, ("string",))


def check_uri(checker: Checker, value: Any, path: str) -> bool:
    """Check that *value* is a string in ``uri`` format."""
    if not check_string(checker, value, path):
        return False
    if not is_uri(value):
        checker.report(FormatError(path, "uri", value))
        return False
    return True


def check_date_time(checker: Checker, value: Any, path: str) -> bool:
    """Check that *value* is a string in ``date-time`` format."""
    if not check_string(checker, value, path):
        return False
    if not is_date_time(value):
        checker.report(FormatError(path, "date-time", value))
        return False
    return True


def check_json_value(checker: Checker, value: Any, path: str) -> bool:
    """Check that *value* only contains JSON compatible objects.

    Documents decoded by :func:`~slsa_provenance.json.load_document` always
    pass; this catches programmatically built values such as sets, custom
    objects or NaN.
    """
    if is_json_value(value):
        return True
    checker.report(FieldTypeError(path, "JSON value", json_type_name(value)))
    return False


def check_string_map(checker: Checker, value: Any, path: str) -> bool:
    """Check that *value* is an object whose values are all strings.

    Errors are reported on the object itself, naming the faulty key.
    """
    if not check_type(checker, value, path, ("object",)):
        return False
    start = checker.count
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            checker.report(
                FieldTypeError(
                    path,
                    "object of strings",
                    f"{json_type_name(item)} for key {key!r}",
                )
            )
    return checker.count == start
