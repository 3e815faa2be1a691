"""Read-only schema nodes consumed by the validation engine.

Schema nodes are built once (usually by
:class:`~schemaknobs_validation.loader.SchemaDocument`) and never mutated
afterwards, so a single schema tree can be shared by any number of concurrent
validation calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Tuple, Union

if TYPE_CHECKING:
    from .loader import SchemaDocument


class SchemaKind(str, Enum):
    """Declared schema types the dispatcher knows how to validate."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def parse(cls, declared: Any) -> SchemaKind | None:
        """Map a declared ``type`` to a kind, or None when it is not a known kind."""
        try:
            return cls(declared)
        except ValueError:
            return None


@dataclass(frozen=True)
class SchemaRef:
    """Lazily resolved pointer to another node of a schema document.

    References make recursive schema trees expressible without mutating nodes.
    """

    pointer: str
    document: SchemaDocument = field(compare=False, repr=False)

    @property
    def object_reference(self) -> str:
        return self.pointer

    def resolve(self) -> Schema:
        return self.document.schema(self.pointer)


SchemaLike = Union["Schema", SchemaRef]


@dataclass(frozen=True)
class Discriminator:
    """Polymorphic variant selection: a property name and a value -> schema mapping."""

    property_name: str
    mapping: Mapping[str, SchemaLike] = field(default_factory=dict)
    object_reference: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))


@dataclass(frozen=True, eq=False)
class Schema:
    """One node of a parsed OpenAPI 3.0 style schema tree.

    Only the keywords the validation engine reads are modelled. Collections are
    frozen on construction (tuples and read-only mappings).
    """

    type: str | None = None
    format: str | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    enum: Tuple[Any, ...] | None = None
    discriminator: Discriminator | None = None
    object_reference: str | None = None
    nullable: bool = False

    minimum: Any = None
    maximum: Any = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False

    properties: Mapping[str, SchemaLike] = field(default_factory=dict)
    required: Tuple[str, ...] = ()
    additional_properties: Union[bool, SchemaLike] = True

    items: SchemaLike | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False

    all_of: Tuple[SchemaLike, ...] | None = None
    one_of: Tuple[SchemaLike, ...] | None = None
    any_of: Tuple[SchemaLike, ...] | None = None

    example: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "required", tuple(self.required))
        for name in ("enum", "all_of", "one_of", "any_of"):
            members = getattr(self, name)
            if members is not None:
                object.__setattr__(self, name, tuple(members))

    @property
    def kind(self) -> SchemaKind | None:
        return SchemaKind.parse(self.type)

    @property
    def composition(self) -> str | None:
        """Name of the composition keyword in use, if any."""
        if self.all_of is not None:
            return "allOf"
        if self.one_of is not None:
            return "oneOf"
        if self.any_of is not None:
            return "anyOf"
        return None


def resolve_schema(schema: SchemaLike | None) -> Schema | None:
    """Follow references until a concrete schema node is reached."""
    while isinstance(schema, SchemaRef):
        schema = schema.resolve()
    return schema

