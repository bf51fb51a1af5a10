"""Model, validate and serialize SLSA provenance v1 predicates."""

from __future__ import annotations

from slsa_provenance.error import (
    ArrayElementError,
    FieldTypeError,
    FormatError,
    JsonError,
    MissingFieldError,
    SLSAError,
    ValidationError,
)
from slsa_provenance.provenance import (
    PREDICATE_TYPE,
    Builder,
    BuildMetadata,
    Predicate,
    ResourceDescriptor,
    parse,
    serialize,
    validate,
)
from slsa_provenance.validation import UNSET

__all__ = [
    "ArrayElementError",
    "BuildMetadata",
    "Builder",
    "FieldTypeError",
    "FormatError",
    "JsonError",
    "MissingFieldError",
    "PREDICATE_TYPE",
    "Predicate",
    "ResourceDescriptor",
    "SLSAError",
    "UNSET",
    "ValidationError",
    "parse",
    "serialize",
    "validate",
]
