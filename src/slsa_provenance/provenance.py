"""SLSA provenance predicate.

Implementing https://slsa.dev/spec/v1.0/provenance.

Purpose
=======
Describe how an artifact or set of artifacts was produced so that:

- Consumers of the provenance can verify that the artifact was built according
  to expectations.
- Others can rebuild the artifact, if desired.

Every class of this module is an immutable value. Instances are built either
from their constructor, which validates its arguments, or from a decoded JSON
document with :meth:`~_Model.load_dict` / :meth:`~_Model.load_json`. Use
:meth:`~_Model.replace` to derive a modified value.

Optional fields that are absent from a document are set to |UNSET|, which is
distinct from ``None`` (a field explicitly set to ``null``). Properties that
are not part of the schema are kept in :attr:`~_Model.extra_fields` and
written back on serialization.

.. _SLSA: https://slsa.dev

.. |ResourceDescriptor| replace:: :class:`ResourceDescriptor`
.. |ResourceURI| replace:: :class:`~slsa_provenance.uri.ResourceURI`
.. |TypeURI| replace:: :class:`~slsa_provenance.uri.TypeURI`
.. |UNSET| replace:: :data:`~slsa_provenance.validation.UNSET`
.. |SLSA| replace:: `SLSA`_
.. |datetime| replace:: :class:`~datetime.datetime`
.. |dict| replace:: :class:`dict`
"""  # noqa RST304

from __future__ import annotations

import base64

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import slsa_provenance.json
from slsa_provenance.date import format_timestamp, parse_timestamp
from slsa_provenance.error import MissingFieldError
from slsa_provenance.hash import dir_hash, file_hash
from slsa_provenance.json import (
    JsonData,
    copy_json_value,
    dump_document,
    load_document,
)
from slsa_provenance.log import getLogger
from slsa_provenance.uri import ResourceURI, TypeURI
from slsa_provenance.validation import (
    UNSET,
    Checker,
    check_date_time,
    check_json_value,
    check_string,
    check_string_map,
    check_type,
    check_uri,
    child_path,
)

if TYPE_CHECKING:
    from typing import Any, Callable, Iterable, TypeVar

    from slsa_provenance.error import ValidationError
    from slsa_provenance.json import JsonValue
    from slsa_provenance.validation import _Unset

    ModelSelf = TypeVar("ModelSelf", bound="_Model")
    Converter = Callable[[Checker, Any, str], Any]

logger = getLogger("provenance")

PREDICATE_TYPE: str = "https://slsa.dev/provenance/v1"
"""The ``predicateType`` of statements carrying a :class:`Predicate`."""


# ------------------------------ Converters ------------------------------- #

# A converter checks a field value, reporting errors to the checker, and
# returns the value to store in the model.


def _string(checker: Checker, value: Any, path: str) -> str:
    check_string(checker, value, path)
    return value


def _uri(uri_cls: type[TypeURI]) -> Converter:
    def convert(checker: Checker, value: Any, path: str) -> TypeURI | None:
        if isinstance(value, uri_cls):
            return value
        if isinstance(value, TypeURI):
            value = value.uri
        if check_uri(checker, value, path):
            return uri_cls(value)
        return None

    return convert


def _date_time(checker: Checker, value: Any, path: str) -> str:
    if isinstance(value, datetime):
        return format_timestamp(value)
    check_date_time(checker, value, path)
    return value


def _json_value(checker: Checker, value: Any, path: str) -> JsonValue:
    if check_json_value(checker, value, path):
        return copy_json_value(value)
    return None


def _digest(checker: Checker, value: Any, path: str) -> dict[str, str] | None:
    if check_string_map(checker, value, path):
        return dict(value)
    return None


def _model(model_cls: type[_Model]) -> Converter:
    def convert(checker: Checker, value: Any, path: str) -> _Model | None:
        if isinstance(value, model_cls):
            return value
        return model_cls._load(value, path, checker)

    return convert


def _model_list(model_cls: type[_Model]) -> Converter:
    def convert(checker: Checker, value: Any, path: str) -> tuple | None:
        if isinstance(value, tuple):
            value = list(value)
        if not check_type(checker, value, path, ("array",)):
            return None
        return tuple(
            item
            if isinstance(item, model_cls)
            else model_cls._load(
                item, child_path(path, index), checker.element(path, index)
            )
            for index, item in enumerate(value)
        )

    return convert


def _dump(value: Any) -> Any:
    """Return the JSON representation of a stored field value."""
    if isinstance(value, _Model):
        return value.as_dict()
    if isinstance(value, TypeURI):
        return str(value)
    if isinstance(value, tuple):
        return [_dump(item) for item in value]
    return copy_json_value(value)


def _copy_opaque(value: Any) -> Any:
    if value is UNSET:
        return value
    return copy_json_value(value)


@dataclass(frozen=True)
class Attribute:
    """Declaration of a JSON property of a model.

    :param name: the JSON property name
    :param arg: the corresponding constructor keyword argument
    :param convert: the converter checking and transforming the value
    :param required: whether the property must be present
    :param nullable: whether ``null`` is accepted in addition to the
        converter's type
    """

    name: str
    arg: str
    convert: Converter
    required: bool = False
    nullable: bool = False


# -------------------------------- Models --------------------------------- #


class _Model(JsonData):
    """Base class of the provenance document objects.

    Subclasses declare their JSON properties, in schema order, in
    :attr:`ATTRIBUTES`. Validation visits them in that order, which is also
    the order of the first error reported when parsing.
    """

    ATTRIBUTES: ClassVar[tuple[Attribute, ...]] = ()

    def __init__(self, values: dict[str, Any], extra_fields: dict | None) -> None:
        # Constructors validate in fail-fast mode: the first error is raised.
        checker = Checker(fail_fast=True)
        converted = self._convert(values, "", checker)
        assert converted is not None
        self._assign(converted, self._check_extra_fields(extra_fields, checker))

    def _assign(self, values: dict[str, Any], extra_fields: dict[str, Any]) -> None:
        self.__values = values
        self.__extra_fields = extra_fields

    def _get(self, name: str) -> Any:
        return self.__values[name]

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Properties not defined by the schema, in document order."""
        return copy_json_value(self.__extra_fields)  # type: ignore[return-value]

    @classmethod
    def _convert(
        cls, values: dict[str, Any], path: str, checker: Checker
    ) -> dict[str, Any] | None:
        """Check and convert the declared properties found in *values*.

        :return: the converted values, or **None** if an error was reported.
        """
        start = checker.count
        result: dict[str, Any] = {}
        for attr in cls.ATTRIBUTES:
            value = values.get(attr.name, UNSET)
            attr_path = child_path(path, attr.name)
            if value is UNSET:
                if attr.required:
                    checker.report(MissingFieldError(attr_path))
                result[attr.name] = UNSET
            elif value is None and attr.nullable:
                result[attr.name] = None
            else:
                result[attr.name] = attr.convert(checker, value, attr_path)
        return result if checker.count == start else None

    @classmethod
    def _check_extra_fields(
        cls, extra_fields: dict | None, checker: Checker
    ) -> dict[str, Any]:
        if not extra_fields:
            return {}
        known = {attr.name for attr in cls.ATTRIBUTES}
        for key, value in extra_fields.items():
            if not isinstance(key, str) or key in known:
                raise ValueError(f"Invalid extra field name {key!r}")
            check_json_value(checker, value, child_path("", key))
        return copy_json_value(dict(extra_fields))  # type: ignore[return-value]

    @classmethod
    def _load(
        cls: type[ModelSelf], obj: Any, path: str, checker: Checker
    ) -> ModelSelf | None:
        """Build an object from a decoded JSON value.

        :return: the new object, or **None** if an error was reported.
        """
        if not check_type(checker, obj, path, ("object",)):
            return None
        start = checker.count
        values = cls._convert(obj, path, checker)

        # Unknown properties are checked even when they are not kept.
        keep = slsa_provenance.json.provenance_config.keep_extra_fields
        known = {attr.name for attr in cls.ATTRIBUTES}
        extra_fields: dict[str, Any] = {}
        for key, value in obj.items():
            if key in known:
                continue
            if check_json_value(checker, value, child_path(path, key)) and keep:
                extra_fields[key] = copy_json_value(value)
        if values is None or checker.count != start:
            return None

        result = cls.__new__(cls)
        result._assign(values, extra_fields)
        return result

    # --------------------------- Public methods ---------------------------- #

    def as_dict(self) -> dict[str, Any]:
        """Get the dictionary representation of this object.

        Declared properties come first, in schema order. Absent optional
        properties are omitted, properties explicitly set to ``null`` are
        kept, and extra fields follow.

        :return: A new dictionary, valid as a JSON object.
        """
        result = {
            attr.name: _dump(self.__values[attr.name])
            for attr in self.ATTRIBUTES
            if self.__values[attr.name] is not UNSET
        }
        result.update(self.extra_fields)
        return result

    def replace(self: ModelSelf, **changes: Any) -> ModelSelf:
        """Return a copy of this object with some constructor arguments changed.

        The new object is validated like any newly constructed object.
        Passing |UNSET| removes an optional field.

        :raise ValidationError: if the resulting object is invalid
        """  # noqa RST304
        kwargs: dict[str, Any] = {
            attr.arg: self.__values[attr.name] for attr in self.ATTRIBUTES
        }
        kwargs["extra_fields"] = self.__extra_fields
        kwargs.update(changes)
        return self.__class__(**kwargs)

    @classmethod
    def load_dict(cls: type[ModelSelf], initializer: dict[str, Any]) -> ModelSelf:
        """Initialize an object from a decoded JSON object.

        Validation stops at the first error, in schema order.

        :raise ValidationError: the first structural violation found
        """
        result = cls._load(initializer, "", Checker(fail_fast=True))
        assert result is not None
        return result

    @classmethod
    def load_json(cls: type[ModelSelf], initializer: str | bytes) -> ModelSelf:
        """Initialize an object from a JSON string.

        :raise JsonError: if *initializer* is not valid JSON
        :raise ValidationError: the first structural violation found
        """
        return cls.load_dict(load_document(initializer))

    @classmethod
    def validate(cls, document: Any) -> list[ValidationError]:
        """Collect every structural violation of a document.

        Unlike :meth:`load_dict`, validation does not stop at the first
        error: the whole document is visited.

        :param document: a decoded JSON value, or a JSON string
        :return: the violations found, in visiting order; empty if the
            document is valid.
        :raise JsonError: if *document* is a string that is not valid JSON
        """
        if isinstance(document, (str, bytes, bytearray)):
            document = load_document(document)
        checker = Checker(fail_fast=False)
        cls._load(document, "", checker)
        for error in checker.errors:
            logger.debug("%s", error.message, path=error.path or "/")
        logger.debug(
            "%s: %d validation error(s) found", cls.__name__, len(checker.errors)
        )
        return checker.errors


class ResourceDescriptor(_Model):
    """Resource descriptor object.

    A size-efficient description of any software artifact or resource (mutable
    or immutable), used for resolved dependencies, builder dependencies and
    byproducts.

    In a provenance predicate the |uri| is **REQUIRED**; every other field is
    optional.

    :param uri: see |uri|
    :param name: see |name|
    :param download_location: see |download_location|
    :param media_type: see |media_type|
    :param digest: see |digest|
    :param content: see |content|
    :param annotations: see |annotations|
    :param extra_fields: properties not defined by the schema

    :raise ValidationError: if an argument is invalid

    .. |annotations| replace:: :attr:`~ResourceDescriptor.annotations`
    .. |content| replace:: :attr:`~ResourceDescriptor.content`
    .. |digest| replace:: :attr:`~ResourceDescriptor.digest`
    .. |download_location| replace::
        :attr:`~ResourceDescriptor.download_location`
    .. |media_type| replace:: :attr:`~ResourceDescriptor.media_type`
    .. |name| replace:: :attr:`~ResourceDescriptor.name`
    .. |uri| replace:: :attr:`~ResourceDescriptor.uri`
    """  # noqa RST304

    ATTR_URI: str = "uri"
    ATTR_NAME: str = "name"
    ATTR_DOWNLOAD_LOCATION: str = "downloadLocation"
    ATTR_MEDIA_TYPE: str = "mediaType"
    ATTR_DIGEST: str = "digest"
    ATTR_CONTENT: str = "content"
    ATTR_ANNOTATIONS: str = "annotations"

    ATTRIBUTES = (
        Attribute(ATTR_URI, "uri", _uri(ResourceURI), required=True),
        Attribute(ATTR_NAME, "name", _string),
        Attribute(ATTR_DOWNLOAD_LOCATION, "download_location", _uri(ResourceURI)),
        Attribute(ATTR_MEDIA_TYPE, "media_type", _string),
        Attribute(ATTR_DIGEST, "digest", _digest, nullable=True),
        Attribute(ATTR_CONTENT, "content", _string),
        Attribute(ATTR_ANNOTATIONS, "annotations", _json_value),
    )

    def __init__(
        self,
        uri: ResourceURI | str,
        name: str | _Unset = UNSET,
        download_location: ResourceURI | str | _Unset = UNSET,
        media_type: str | _Unset = UNSET,
        digest: dict[str, str] | None | _Unset = UNSET,
        content: str | _Unset = UNSET,
        annotations: JsonValue | _Unset = UNSET,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            {
                self.ATTR_URI: uri,
                self.ATTR_NAME: name,
                self.ATTR_DOWNLOAD_LOCATION: download_location,
                self.ATTR_MEDIA_TYPE: media_type,
                self.ATTR_DIGEST: digest,
                self.ATTR_CONTENT: content,
                self.ATTR_ANNOTATIONS: annotations,
            },
            extra_fields,
        )

    @property
    def uri(self) -> ResourceURI:
        """A URI used to identify the resource or artifact globally."""
        return self._get(self.ATTR_URI)

    @property
    def name(self) -> str | _Unset:
        """Machine-readable identifier for distinguishing between descriptors.

        The semantics are up to the producer and consumer. The name **SHOULD**
        be stable, such as a filename, to allow consumers to reliably use it
        as part of their policy.
        """
        return self._get(self.ATTR_NAME)

    @property
    def download_location(self) -> ResourceURI | _Unset:
        """The location of the described resource, if different from the uri."""
        return self._get(self.ATTR_DOWNLOAD_LOCATION)

    @property
    def media_type(self) -> str | _Unset:
        """The MIME type of the described resource or artifact."""
        return self._get(self.ATTR_MEDIA_TYPE)

    @property
    def digest(self) -> dict[str, str] | None | _Unset:
        """A set of cryptographic digests of the resource contents.

        Maps an algorithm name (``sha256``, ``gitCommit``, ``dirHash1``...) to
        the lowercase hexadecimal digest. No algorithm set is enforced.
        """
        value = self._get(self.ATTR_DIGEST)
        return dict(value) if isinstance(value, dict) else value

    @property
    def content(self) -> str | _Unset:
        """The contents of the resource, as found in the document.

        The encoding is not interpreted; see |content_bytes| for the usual
        base64 encoding.

        .. |content_bytes| replace:: :attr:`content_bytes`
        """  # noqa RST304
        return self._get(self.ATTR_CONTENT)

    @property
    def content_bytes(self) -> bytes | None:
        """The contents of the resource, decoded from base64.

        :return: the decoded bytes, or **None** if |content| is absent.
        :raise ValueError: if |content| is not valid base64.
        """  # noqa RST304
        content = self.content
        if content is UNSET:
            return None
        return base64.b64decode(content.encode("utf-8"), validate=True)

    @property
    def annotations(self) -> JsonValue | _Unset:
        """Additional information about the resource.

        Any JSON value, reproduced exactly on serialization. The producer and
        consumer **SHOULD** agree on its semantics.
        """
        return _copy_opaque(self._get(self.ATTR_ANNOTATIONS))

    @staticmethod
    def encode_content(data: bytes) -> str:
        """Encode raw bytes as a base64 |content| value."""  # noqa RST304
        return base64.b64encode(data).decode("utf-8")

    def with_digest(self, algorithm: str, digest: str) -> ResourceDescriptor:
        """Return a copy of this descriptor with one more digest.

        :param algorithm: The algorithm the new digest has been computed with.
        :param digest: The new digest to add to the digest set.

        :raise KeyError: if *algorithm* already defines a digest in the current
            digest set.
        """
        digests = self.digest or {}
        if algorithm in digests:
            raise KeyError(
                f"Digest algorithm {algorithm} is already set to "
                f"{digests[algorithm]}"
            )
        digests[algorithm] = digest
        return self.replace(digest=digests)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        uri: ResourceURI | str | None = None,
        algorithms: Iterable[str] = ("sha256",),
        **kwargs: Any,
    ) -> ResourceDescriptor:
        """Describe a local file or directory.

        Files get one digest per algorithm. Directories get a single
        ``dirHash1`` digest (see :func:`~slsa_provenance.hash.dir_hash`),
        computed with the first algorithm.

        :param path: the file or directory to describe
        :param uri: the descriptor URI, the ``file:`` URI of *path* by default
        :param algorithms: :mod:`hashlib` algorithm names
        :param kwargs: other constructor arguments, the file name is used as
            default *name*.

        :raise HashError: if *path* cannot be read or an algorithm is unknown
        """
        path = Path(path)
        if path.is_dir():
            digest = {"dirHash1": dir_hash(path, next(iter(algorithms)))}
        else:
            digest = {algo: file_hash(path, algo) for algo in algorithms}
        kwargs.setdefault("name", path.name)
        return cls(
            uri=uri if uri is not None else path.resolve().as_uri(),
            digest=digest,
            **kwargs,
        )


class Builder(_Model):
    """Predicate run details builder object.

    The build platform, or builder for short, represents the transitive closure
    of all the entities that are, by necessity, trusted to faithfully run the
    build and record the provenance.

    The |id| **MUST** reflect the trust base that consumers care about, and
    consumers **MUST** accept only specific signer-builder pairs.

    :param build_id: see |id|
    :param version: see |version|
    :param builder_dependencies: see |builder_dependencies|
    :param extra_fields: properties not defined by the schema

    :raise ValidationError: if an argument is invalid

    .. |id| replace:: :attr:`~Builder.id`
    .. |version| replace:: :attr:`~Builder.version`
    .. |builder_dependencies| replace:: :attr:`~Builder.builder_dependencies`
    """  # noqa RST304

    ATTR_BUILD_ID: str = "id"
    ATTR_VERSION: str = "version"
    ATTR_BUILDER_DEPENDENCIES: str = "builderDependencies"

    ATTRIBUTES = (
        Attribute(ATTR_BUILD_ID, "build_id", _uri(TypeURI), required=True),
        Attribute(ATTR_VERSION, "version", _string, nullable=True),
        Attribute(
            ATTR_BUILDER_DEPENDENCIES,
            "builder_dependencies",
            _model_list(ResourceDescriptor),
            nullable=True,
        ),
    )

    def __init__(
        self,
        build_id: TypeURI | str,
        version: str | None | _Unset = UNSET,
        builder_dependencies: Iterable[ResourceDescriptor] | None | _Unset = UNSET,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            {
                self.ATTR_BUILD_ID: build_id,
                self.ATTR_VERSION: version,
                self.ATTR_BUILDER_DEPENDENCIES: builder_dependencies,
            },
            extra_fields,
        )

    @property
    def id(self) -> TypeURI:
        """Build platform ID.

        URI indicating the transitive closure of the trusted build platform.
        This is intended to be the sole determiner of the SLSA Build level.
        """
        return self._get(self.ATTR_BUILD_ID)

    @property
    def version(self) -> str | None | _Unset:
        """Version of the build platform."""
        return self._get(self.ATTR_VERSION)

    @property
    def builder_dependencies(self) -> list[ResourceDescriptor] | None | _Unset:
        """Builder dependencies.

        Dependencies used by the orchestrator that are not run within the
        workload and that do not affect the build, but might affect the
        provenance generation or security guarantees.
        """
        value = self._get(self.ATTR_BUILDER_DEPENDENCIES)
        return list(value) if isinstance(value, tuple) else value


class BuildMetadata(_Model):
    """Metadata about a build invocation.

    Timestamps are kept as the strings found in the document so that they are
    written back unchanged. The constructor also accepts |datetime| objects,
    converted to UTC and formatted with |TIMESTAMP_FORMAT|.

    :param invocation_id: Identifier of this particular build invocation.
    :param started_on: The timestamp of this build invocation start time.
    :param finished_on: The timestamp of this build invocation finish time.
    :param extra_fields: properties not defined by the schema

    :raise ValidationError: if an argument is invalid

    .. |TIMESTAMP_FORMAT| replace::
        :data:`~slsa_provenance.date.TIMESTAMP_FORMAT`
    """  # noqa RST304

    ATTR_INVOCATION_ID: str = "invocationId"
    ATTR_STARTED_ON: str = "startedOn"
    ATTR_FINISHED_ON: str = "finishedOn"

    ATTRIBUTES = (
        Attribute(ATTR_INVOCATION_ID, "invocation_id", _string, required=True),
        Attribute(ATTR_STARTED_ON, "started_on", _date_time, required=True),
        Attribute(ATTR_FINISHED_ON, "finished_on", _date_time, nullable=True),
    )

    def __init__(
        self,
        invocation_id: str,
        started_on: str | datetime,
        finished_on: str | datetime | None | _Unset = UNSET,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            {
                self.ATTR_INVOCATION_ID: invocation_id,
                self.ATTR_STARTED_ON: started_on,
                self.ATTR_FINISHED_ON: finished_on,
            },
            extra_fields,
        )

    @property
    def invocation_id(self) -> str:
        """Build invocation identifier.

        Identifies this particular build invocation, which can be useful for
        finding associated logs or other ad-hoc analysis. It is treated as
        opaque and case-sensitive.
        """
        return self._get(self.ATTR_INVOCATION_ID)

    @property
    def started_on(self) -> str:
        """The timestamp of when the build started."""
        return self._get(self.ATTR_STARTED_ON)

    @property
    def finished_on(self) -> str | None | _Unset:
        """The timestamp of when the build completed."""
        return self._get(self.ATTR_FINISHED_ON)

    @property
    def started_on_datetime(self) -> datetime:
        """|started_on| as a timezone aware |datetime|.

        .. |started_on| replace:: :attr:`started_on`
        """  # noqa RST304
        return parse_timestamp(self.started_on)

    @property
    def finished_on_datetime(self) -> datetime | None:
        """|finished_on| as a timezone aware |datetime|, if set.

        .. |finished_on| replace:: :attr:`finished_on`
        """  # noqa RST304
        finished_on = self.finished_on
        if finished_on is None or finished_on is UNSET:
            return None
        return parse_timestamp(finished_on)


class Predicate(_Model):
    """SLSA provenance v1 predicate.

    :param build_definition: The input to the build.
    :param run_details: Details specific to this particular execution of the
        build.
    :param extra_fields: properties not defined by the schema

    :raise ValidationError: if an argument is invalid
    """

    ATTR_BUILD_DEFINITION: str = "buildDefinition"
    ATTR_RUN_DETAILS: str = "runDetails"

    class BuildDefinition(_Model):
        """The BuildDefinition describes all the inputs to the build.

        It **SHOULD** contain all the information necessary and sufficient to
        initialize the build and begin execution.

        The |externalParameters| and |internalParameters| are the top-level
        inputs to the template. Each is an arbitrary JSON value, kept opaque
        and reproduced exactly. Metadata about those parameter values,
        particularly digests of artifacts referenced by those parameters,
        **SHOULD** instead go in |resolvedDependencies|. For example::

            "externalParameters": {
                "repository": "https://github.com/octocat/hello-world",
                "ref": "refs/heads/main"
            },
            "resolvedDependencies": [{
                "uri": "git+https://github.com/octocat/hello-world@refs/heads/main",
                "digest": {"gitCommit": "7fd1a60b01f91b314f59955a4e4d4e80d8edf11d"}
            }]

        :param build_type: see |buildType|
        :param external_parameters: see |externalParameters|
        :param internal_parameters: see |internalParameters|
        :param resolved_dependencies: see |resolvedDependencies|
        :param extra_fields: properties not defined by the schema

        :raise ValidationError: if an argument is invalid

        .. |buildType| replace:: :attr:`build_type`
        .. |externalParameters| replace:: :attr:`external_parameters`
        .. |internalParameters| replace:: :attr:`internal_parameters`
        .. |resolvedDependencies| replace:: :attr:`resolved_dependencies`
        """  # noqa RST304

        ATTR_BUILD_TYPE: str = "buildType"
        ATTR_EXTERNAL_PARAMETERS: str = "externalParameters"
        ATTR_INTERNAL_PARAMETERS: str = "internalParameters"
        ATTR_RESOLVED_DEPENDENCIES: str = "resolvedDependencies"

        ATTRIBUTES = (
            Attribute(ATTR_BUILD_TYPE, "build_type", _uri(TypeURI), required=True),
            Attribute(
                ATTR_EXTERNAL_PARAMETERS,
                "external_parameters",
                _json_value,
                required=True,
            ),
            Attribute(
                ATTR_INTERNAL_PARAMETERS,
                "internal_parameters",
                _json_value,
                required=True,
            ),
            Attribute(
                ATTR_RESOLVED_DEPENDENCIES,
                "resolved_dependencies",
                _model_list(ResourceDescriptor),
                required=True,
            ),
        )

        def __init__(
            self,
            build_type: TypeURI | str,
            external_parameters: JsonValue,
            internal_parameters: JsonValue,
            resolved_dependencies: Iterable[ResourceDescriptor],
            extra_fields: dict[str, Any] | None = None,
        ) -> None:
            super().__init__(
                {
                    self.ATTR_BUILD_TYPE: build_type,
                    self.ATTR_EXTERNAL_PARAMETERS: external_parameters,
                    self.ATTR_INTERNAL_PARAMETERS: internal_parameters,
                    self.ATTR_RESOLVED_DEPENDENCIES: resolved_dependencies,
                },
                extra_fields,
            )

        @property
        def build_type(self) -> TypeURI:
            """Predicate build type.

            Identifies the template for how to perform the build and interpret
            the parameters and dependencies, for example
            ``https://slsa-framework.github.io/github-actions-buildtypes/workflow/v1``.
            """
            return self._get(self.ATTR_BUILD_TYPE)

        @property
        def external_parameters(self) -> JsonValue:
            """The parameters that are under external control.

            Such as those set by a user or tenant of the build platform.
            Verifiers **SHOULD** reject unrecognized or unexpected fields
            within ``externalParameters``.
            """
            return copy_json_value(self._get(self.ATTR_EXTERNAL_PARAMETERS))

        @property
        def internal_parameters(self) -> JsonValue:
            """The parameters under the control of the builder."""
            return _copy_opaque(self._get(self.ATTR_INTERNAL_PARAMETERS))

        @property
        def resolved_dependencies(self) -> list[ResourceDescriptor]:
            """Artifacts needed at build time, in document order."""
            return list(self._get(self.ATTR_RESOLVED_DEPENDENCIES))

    class RunDetails(_Model):
        """Details specific to this particular execution of the build.

        :param builder: Run details builder description.
        :param metadata: The metadata for this run details object.
        :param by_products: Run details additional artifacts.
        :param extra_fields: properties not defined by the schema

        :raise ValidationError: if an argument is invalid
        """

        ATTR_BUILDER: str = "builder"
        ATTR_METADATA: str = "metadata"
        ATTR_BY_PRODUCTS: str = "byproducts"

        ATTRIBUTES = (
            Attribute(ATTR_BUILDER, "builder", _model(Builder), required=True),
            Attribute(
                ATTR_METADATA, "metadata", _model(BuildMetadata), required=True
            ),
            Attribute(
                ATTR_BY_PRODUCTS,
                "by_products",
                _model_list(ResourceDescriptor),
                nullable=True,
            ),
        )

        def __init__(
            self,
            builder: Builder,
            metadata: BuildMetadata,
            by_products: Iterable[ResourceDescriptor] | None | _Unset = UNSET,
            extra_fields: dict[str, Any] | None = None,
        ) -> None:
            super().__init__(
                {
                    self.ATTR_BUILDER: builder,
                    self.ATTR_METADATA: metadata,
                    self.ATTR_BY_PRODUCTS: by_products,
                },
                extra_fields,
            )

        @property
        def builder(self) -> Builder:
            """Identifies the build platform that executed the invocation."""
            return self._get(self.ATTR_BUILDER)

        @property
        def metadata(self) -> BuildMetadata:
            """Metadata about this particular execution of the build."""
            return self._get(self.ATTR_METADATA)

        @property
        def by_products(self) -> list[ResourceDescriptor] | None | _Unset:
            """Run details additional artifacts.

            Additional artifacts generated during the build that are not
            considered the output of the build but that might be needed during
            debugging or incident response, such as logs.
            """
            value = self._get(self.ATTR_BY_PRODUCTS)
            return list(value) if isinstance(value, tuple) else value

    ATTRIBUTES = (
        Attribute(
            ATTR_BUILD_DEFINITION,
            "build_definition",
            _model(BuildDefinition),
            required=True,
        ),
        Attribute(
            ATTR_RUN_DETAILS, "run_details", _model(RunDetails), required=True
        ),
    )

    def __init__(
        self,
        build_definition: Predicate.BuildDefinition,
        run_details: Predicate.RunDetails,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            {
                self.ATTR_BUILD_DEFINITION: build_definition,
                self.ATTR_RUN_DETAILS: run_details,
            },
            extra_fields,
        )

    @property
    def build_definition(self) -> Predicate.BuildDefinition:
        """The input to the build.

        The accuracy and completeness are implied by runDetails.builder.id.
        """
        return self._get(self.ATTR_BUILD_DEFINITION)

    @property
    def run_details(self) -> Predicate.RunDetails:
        """Details specific to this particular execution of the build."""
        return self._get(self.ATTR_RUN_DETAILS)


# ---------------------------- Entry points ------------------------------- #


def parse(document: str | bytes | dict[str, Any]) -> Predicate:
    """Parse a provenance predicate.

    :param document: the JSON text of the predicate, or its decoded form
    :return: the validated predicate
    :raise JsonError: if *document* is not valid JSON
    :raise ValidationError: the first structural violation found
    """
    if isinstance(document, (str, bytes, bytearray)):
        predicate = Predicate.load_json(document)
    else:
        predicate = Predicate.load_dict(document)
    logger.debug(
        "parsed provenance predicate of build type %s",
        predicate.build_definition.build_type,
        invocation_id=predicate.run_details.metadata.invocation_id,
    )
    return predicate


def serialize(
    predicate: Predicate, indent: int | None = None, sort_keys: bool | None = None
) -> str:
    """Serialize a provenance predicate to a JSON string.

    :param indent: see :func:`~slsa_provenance.json.dump_document`
    :param sort_keys: see :func:`~slsa_provenance.json.dump_document`
    """
    if not isinstance(predicate, Predicate):
        raise TypeError(f"Invalid predicate type {type(predicate)}")
    return dump_document(predicate.as_dict(), indent=indent, sort_keys=sort_keys)


def validate(document: Any) -> list[ValidationError]:
    """Return every structural violation of a provenance predicate.

    :param document: the JSON text of the predicate, or its decoded form
    :raise JsonError: if *document* is a string that is not valid JSON
    """
    return Predicate.validate(document)
