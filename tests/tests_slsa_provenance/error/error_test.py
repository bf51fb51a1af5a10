from slsa_provenance.error import (
    ArrayElementError,
    FieldTypeError,
    FormatError,
    MissingFieldError,
    SLSAError,
    ValidationError,
    escape_pointer_token,
    pointer_field,
    unescape_pointer_token,
)


def test_slsa_error():
    err = None

    try:
        raise SLSAError(None)
    except SLSAError as basicerr:
        assert str(basicerr) == "SLSAError"

    try:
        raise SLSAError(None, origin="here")
    except SLSAError as err0:
        err = err0
        assert str(err).strip() == "here: SLSAError"

    try:
        raise SLSAError("one", origin="here")
    except SLSAError as err1:
        err += err1

    try:
        raise SLSAError(["two"])
    except SLSAError as err2:
        err += err2
    assert str(err).strip() == "here: two"

    assert err.messages == ["one", "two"]

    err += "three"
    assert err.messages == ["one", "two", "three"]


def test_missing_field_error() -> None:
    err = MissingFieldError("/runDetails/metadata/invocationId")
    assert isinstance(err, ValidationError)
    assert isinstance(err, ValueError)
    assert isinstance(err, SLSAError)
    assert err.field == "invocationId"
    assert err.message == "missing required field 'invocationId'"
    assert str(err) == (
        "/runDetails/metadata/invocationId: missing required field 'invocationId'"
    )
    assert err == MissingFieldError("/runDetails/metadata/invocationId")
    assert err != MissingFieldError("/runDetails/metadata/startedOn")
    assert len({err, MissingFieldError("/runDetails/metadata/invocationId")}) == 1


def test_field_type_error() -> None:
    err = FieldTypeError("/digest", "object of strings", "number for key 'sha256'")
    assert isinstance(err, TypeError)
    assert isinstance(err, ValidationError)
    assert err.field == "digest"
    assert err.expected == "object of strings"
    assert err.actual == "number for key 'sha256'"
    assert err.message == "expected object of strings, got number for key 'sha256'"

    # The document root has an empty path.
    root = FieldTypeError("", "object", "array")
    assert root.field == ""
    assert str(root) == "/: expected object, got array"


def test_format_error() -> None:
    err = FormatError("/buildDefinition/buildType", "uri", "not a uri")
    assert err.format == "uri"
    assert err.value == "not a uri"
    assert err.field == "buildType"
    assert err.message == "'not a uri' is not a valid uri"
    assert FormatError("/startedOn", "date-time").message == "not a valid date-time"
    # Same path and message but a different class
    assert err != MissingFieldError("/buildDefinition/buildType")


def test_array_element_error() -> None:
    cause = MissingFieldError("/resolvedDependencies/1/uri")
    err = ArrayElementError("/resolvedDependencies", 1, cause)
    assert err.index == 1
    assert err.cause is cause
    assert err.root_cause is cause
    assert err.path == "/resolvedDependencies"
    assert err.field == "uri"
    assert err.message == "element 1: missing required field 'uri'"

    nested = ArrayElementError("/outer", 0, err)
    assert nested.root_cause is cause
    assert nested.field == "uri"
    assert nested.message == "element 0: element 1: missing required field 'uri'"


def test_json_pointer_tokens() -> None:
    assert escape_pointer_token("a/b~c") == "a~1b~0c"
    assert unescape_pointer_token("a~1b~0c") == "a/b~c"
    assert unescape_pointer_token("~01") == "~1"
    assert pointer_field("/annotations/a~1b") == "a/b"
    assert pointer_field("/resolvedDependencies/0") == "0"
