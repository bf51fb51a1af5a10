import copy
import pickle

import pytest

from slsa_provenance.error import (
    ArrayElementError,
    FieldTypeError,
    FormatError,
    MissingFieldError,
)
from slsa_provenance.validation import (
    UNSET,
    Checker,
    check_date_time,
    check_json_value,
    check_required,
    check_string_map,
    check_type,
    check_uri,
    child_path,
)


def test_unset() -> None:
    assert not UNSET
    assert repr(UNSET) == "UNSET"
    assert UNSET is not None
    assert type(UNSET)() is UNSET
    assert copy.copy(UNSET) is UNSET
    assert copy.deepcopy({"a": UNSET})["a"] is UNSET
    assert pickle.loads(pickle.dumps(UNSET)) is UNSET


def test_checker_fail_fast() -> None:
    checker = Checker()
    with pytest.raises(MissingFieldError) as err:
        check_required(checker, {}, "uri", "/resolvedDependencies/0")
    assert err.value.path == "/resolvedDependencies/0/uri"
    assert checker.errors == []


def test_checker_collect_all() -> None:
    checker = Checker(fail_fast=False)
    assert check_required(checker, {"uri": "x"}, "uri", "")
    assert not check_required(checker, {}, "uri", "")
    assert not check_type(checker, [], "/name", ("string",))
    assert not check_uri(checker, "not a uri", "/uri")
    assert not check_uri(checker, 1, "/downloadLocation")
    assert not check_date_time(checker, "2024-13-40", "/startedOn")
    assert check_date_time(checker, "2024-12-31T23:59:59Z", "/finishedOn")

    assert checker.count == 5
    assert checker.errors == [
        MissingFieldError("/uri"),
        FieldTypeError("/name", "string", "array"),
        FormatError("/uri", "uri", "not a uri"),
        FieldTypeError("/downloadLocation", "string", "number"),
        FormatError("/startedOn", "date-time", "2024-13-40"),
    ]


def test_element_checker() -> None:
    checker = Checker(fail_fast=False)
    element = checker.element("/byproducts", 3)
    check_required(element, {}, "uri", "/byproducts/3")
    assert element.count == 1
    assert element.errors == []

    [error] = checker.errors
    assert isinstance(error, ArrayElementError)
    assert error.path == "/byproducts"
    assert error.index == 3
    assert error.root_cause == MissingFieldError("/byproducts/3/uri")

    with pytest.raises(ArrayElementError) as err:
        check_required(Checker().element("/byproducts", 0), {}, "uri", "/byproducts/0")
    assert err.value.field == "uri"


def test_check_type() -> None:
    checker = Checker(fail_fast=False)
    assert check_type(checker, None, "/version", ("string", "null"))
    assert not check_type(checker, True, "/version", ("string", "null"))
    [error] = checker.errors
    assert error.message == "expected string or null, got boolean"


def test_check_json_value() -> None:
    checker = Checker(fail_fast=False)
    assert check_json_value(checker, {"a": [1, None, {"b": False}]}, "/annotations")
    assert not check_json_value(checker, {"a": {1, 2}}, "/annotations")
    assert checker.errors == [FieldTypeError("/annotations", "JSON value", "object")]


def test_check_string_map() -> None:
    checker = Checker(fail_fast=False)
    assert check_string_map(checker, {"sha256": "abc", "gitCommit": "def"}, "/digest")
    assert check_string_map(checker, {}, "/digest")
    assert not check_string_map(checker, ["abc"], "/digest")
    assert not check_string_map(checker, {"sha256": 12, "md5": None}, "/digest")

    assert checker.errors == [
        FieldTypeError("/digest", "object", "array"),
        FieldTypeError("/digest", "object of strings", "number for key 'sha256'"),
        FieldTypeError("/digest", "object of strings", "null for key 'md5'"),
    ]
    assert all(error.field == "digest" for error in checker.errors)

    with pytest.raises(FieldTypeError) as err:
        check_string_map(Checker(), {"sha256": 12}, "/digest")
    assert err.value.field == "digest"


def test_child_path() -> None:
    assert child_path("", "buildDefinition") == "/buildDefinition"
    assert child_path("/resolvedDependencies", 2) == "/resolvedDependencies/2"
    assert child_path("/annotations", "a/b~c") == "/annotations/a~1b~0c"
