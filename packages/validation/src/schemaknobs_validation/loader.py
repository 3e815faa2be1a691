"""Builds read-only Schema trees from OpenAPI / JSON Schema documents.

The loader sits in front of the validation engine: it turns a decoded document
(a dict, or a YAML/JSON file) into :class:`~schemaknobs_validation.schema.Schema`
nodes whose ``object_reference`` is their JSON pointer. Local ``$ref``s become
:class:`~schemaknobs_validation.schema.SchemaRef` nodes; every schema reachable
through references is built when its referrer is built, so validation never
triggers document parsing.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from schemaknobs_common import NotFoundError, ValidationError
from schemaknobs_config import read_document

from .schema import Discriminator, Schema, SchemaLike, SchemaRef

logger = logging.getLogger(__name__)

COMPONENTS_POINTER = "#/components/schemas"


class SchemaDocumentError(ValidationError):
    """The document cannot be turned into a schema tree."""

    pass


class PointerNotFoundError(NotFoundError):
    """A JSON pointer does not resolve inside the document."""

    pass


def escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


class SchemaDocument:
    """A decoded schema document and the Schema nodes built from it.

    Nodes are cached by JSON pointer, so the same pointer always yields the
    same node. Building is guarded by a lock; lookups of built nodes are not.
    """

    def __init__(self, document: Mapping[str, Any], source: str | None = None):
        if not isinstance(document, Mapping):
            raise SchemaDocumentError(
                "Schema document must be a mapping", context={"source": source}
            )
        self.document = document
        self.source = source
        self._nodes: Dict[str, SchemaLike] = {}
        self._pending: List[str] = []
        self._lock = threading.RLock()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> SchemaDocument:
        """Load a YAML or JSON document."""
        document = read_document(path)
        logger.info(f"Loaded schema document {path}")
        return cls(document or {}, source=str(path))

    def component(self, name: str) -> Schema:
        """Shortcut for ``schema("#/components/schemas/<name>")``."""
        return self.schema(f"{COMPONENTS_POINTER}/{escape_token(name)}")

    def schema(self, pointer: str = "#") -> Schema:
        """The Schema node at ``pointer``, following references.

        Raises:
            PointerNotFoundError: If the pointer does not resolve
            SchemaDocumentError: On remote or circular references
        """
        seen = []
        node = self._nodes.get(pointer)
        while True:
            if node is None:
                with self._lock:
                    node = self._build(pointer)
            if isinstance(node, Schema):
                return node
            if node.pointer in seen:
                raise SchemaDocumentError(
                    f"Circular reference at {node.pointer}",
                    context={"pointer": node.pointer, "chain": seen},
                )
            seen.append(pointer)
            pointer = node.pointer
            node = self._nodes.get(pointer)

    def resolve_pointer(self, pointer: str) -> Any:
        """The raw document data at ``pointer``."""
        if pointer != "#" and not pointer.startswith("#/"):
            raise SchemaDocumentError(
                f"Only local references are supported: {pointer}",
                context={"pointer": pointer, "source": self.source},
            )

        data: Any = self.document
        tokens = pointer[2:].split("/") if pointer != "#" else []
        for token in tokens:
            token = unescape_token(token)
            try:
                if isinstance(data, list):
                    data = data[int(token)]
                else:
                    data = data[token]
            except (KeyError, IndexError, ValueError, TypeError):
                raise PointerNotFoundError(
                    f"Pointer {pointer} does not resolve",
                    context={"pointer": pointer, "source": self.source},
                ) from None
        return data

    def _build(self, pointer: str) -> SchemaLike:
        try:
            node = self._node(self.resolve_pointer(pointer), pointer)
            while self._pending:
                target = self._pending.pop()
                if target not in self._nodes:
                    self._node(self.resolve_pointer(target), target)
        finally:
            self._pending.clear()
        return node

    def _node(self, raw: Any, pointer: str) -> SchemaLike:
        if pointer in self._nodes:
            return self._nodes[pointer]

        if not isinstance(raw, Mapping):
            raise SchemaDocumentError(
                f"Schema at {pointer} must be a mapping", context={"pointer": pointer}
            )

        if "$ref" in raw:
            node: SchemaLike = self._ref(raw["$ref"])
        else:
            node = self._schema(raw, pointer)
        self._nodes[pointer] = node
        return node

    def _ref(self, target: Any) -> SchemaRef:
        if not isinstance(target, str) or not (target == "#" or target.startswith("#/")):
            raise SchemaDocumentError(
                f"Only local references are supported: {target!r}",
                context={"ref": target, "source": self.source},
            )
        if target not in self._nodes:
            self._pending.append(target)
        return SchemaRef(target, self)

    def _children(self, raw: Any, pointer: str) -> List[SchemaLike]:
        return [self._node(item, f"{pointer}/{i}") for i, item in enumerate(raw)]

    def _schema(self, raw: Mapping[str, Any], pointer: str) -> Schema:
        properties = {
            name: self._node(child, f"{pointer}/properties/{escape_token(name)}")
            for name, child in (raw.get("properties") or {}).items()
        }

        additional = raw.get("additionalProperties", True)
        if isinstance(additional, Mapping):
            additional = self._node(additional, f"{pointer}/additionalProperties")

        items = raw.get("items")
        if items is not None:
            items = self._node(items, f"{pointer}/items")

        composition = {}
        for keyword, attr in (("allOf", "all_of"), ("oneOf", "one_of"), ("anyOf", "any_of")):
            if keyword in raw:
                composition[attr] = self._children(raw[keyword], f"{pointer}/{keyword}")

        return Schema(
            type=raw.get("type"),
            format=raw.get("format"),
            pattern=raw.get("pattern"),
            min_length=raw.get("minLength"),
            max_length=raw.get("maxLength"),
            enum=raw.get("enum"),
            discriminator=self._discriminator(raw.get("discriminator"), pointer),
            object_reference=pointer,
            nullable=bool(raw.get("nullable", False)),
            minimum=raw.get("minimum"),
            maximum=raw.get("maximum"),
            exclusive_minimum=bool(raw.get("exclusiveMinimum", False)),
            exclusive_maximum=bool(raw.get("exclusiveMaximum", False)),
            properties=properties,
            required=raw.get("required") or (),
            additional_properties=additional,
            items=items,
            min_items=raw.get("minItems"),
            max_items=raw.get("maxItems"),
            unique_items=bool(raw.get("uniqueItems", False)),
            example=raw.get("example"),
            **composition,
        )

    def _discriminator(self, raw: Any, pointer: str) -> Discriminator | None:
        if raw is None:
            return None
        if not isinstance(raw, Mapping) or not isinstance(raw.get("propertyName"), str):
            raise SchemaDocumentError(
                f"Discriminator at {pointer} needs a propertyName",
                context={"pointer": pointer},
            )

        mapping = {}
        for key, target in (raw.get("mapping") or {}).items():
            # bare names refer to components
            if isinstance(target, str) and not target.startswith("#"):
                target = f"{COMPONENTS_POINTER}/{escape_token(target)}"
            mapping[key] = self._ref(target)

        return Discriminator(
            property_name=raw["propertyName"],
            mapping=mapping,
            object_reference=f"{pointer}/discriminator",
        )


def build_schema(data: Mapping[str, Any], reference: str = "#") -> Schema:
    """Build a Schema tree from a standalone schema mapping.

    ``data`` is treated as a whole document; ``reference`` picks the node.
    """
    return SchemaDocument(data).schema(reference)
