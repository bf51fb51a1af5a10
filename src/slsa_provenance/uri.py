"""Uniform Resource Identifiers as used by SLSA provenance documents."""

from __future__ import annotations

import re

from urllib.parse import SplitResult, urlsplit

from slsa_provenance.error import FormatError

# RFC 3986 absolute URI: scheme ":" followed by reserved, unreserved or
# percent-encoded characters only.
URI_RE = re.compile(
    r"^[A-Za-z][A-Za-z0-9+.\-]*:"
    r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})*\Z"
)


def is_uri(value: object) -> bool:
    """Check that *value* is a syntactically valid absolute URI.

    The scheme is mandatory, an authority is not (``pkg:`` or ``urn:`` URIs
    are valid). The URI is never resolved.
    """
    if not isinstance(value, str) or URI_RE.match(value) is None:
        return False
    try:
        parsed: SplitResult = urlsplit(value)
        if parsed.netloc:
            # Raises ValueError on out of range or non numeric ports.
            parsed.port
    except ValueError:
        return False
    return True


def validate_uri(value: str, path: str = "") -> None:
    """Validate an absolute URI.

    :param value: the string to check
    :param path: JSON pointer of the checked field, used in the error
    :raise FormatError: if *value* is not a valid URI
    """
    if not is_uri(value):
        raise FormatError(path, "uri", value)


class TypeURI(object):
    """Uniform Resource Identifier as specified in RFC 3986.

    Used as a collision-resistant type identifier.

    Format
    ------
    A TypeURI is represented as a case-sensitive string and **MUST** be case
    normalized as per section 6.2.2.1 of RFC 3986, meaning that the scheme and
    authority **MUST** be in lowercase.

    **SHOULD** resolve to a human-readable description, but **MAY** be
    unresolvable. **SHOULD** include a version number to allow for revisions.

    Example
    -------
    ::

        https://slsa.dev/provenance/v1

    :raise FormatError: if *uri* is not a valid absolute URI.
    """

    def __init__(self, uri: str, path: str = ""):
        validate_uri(uri, path)
        self.__uri = uri

    def __eq__(self, other: object) -> bool:
        """Check if this type uri is equal to *other*."""
        if isinstance(other, TypeURI):
            return self.uri == other.uri
        elif isinstance(other, str):
            return self.uri == other
        return False

    def __hash__(self) -> int:
        return hash(self.uri)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.uri!r})"

    def __str__(self) -> str:
        """Return the string representation of this TypeURI."""
        return self.uri

    @property
    def scheme(self) -> str:
        """Scheme of this URI, in lowercase."""
        return self.uri.split(":", 1)[0].lower()

    @property
    def uri(self) -> str:
        """Actual URI of this TypeURI."""
        return self.__uri


class ResourceURI(TypeURI):
    """Uniform Resource Identifier as specified in RFC 3986.

    Used to identify and locate any resource, service, or software artifact.

    It is **RECOMMENDED** to use
    `Package URL <https://github.com/package-url/purl-spec/>`_ (``pkg:``) or
    `SPDX Download Location
    <https://spdx.github.io/spdx-spec/v2.3/package-information/#77-package-download-location-field>`_
    (e.g. ``git+https:``).

    Example
    -------
    ::

        pkg:deb/debian/stunnel@5.50-3?arch=amd64
    """
