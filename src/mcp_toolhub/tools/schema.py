"""Translation of registry parameter schemas into validated schemas.

Tool registries describe their parameters with loosely-typed JSON-Schema-like
dicts. This module turns them into a small closed tree of schema nodes and
builds a pydantic TypeAdapter from that tree, so arguments can be validated
before they are sent upstream.

Only the subset of shapes emitted by the registry is understood. Constraints
such as format, pattern, enum and min/max are dropped, and anything
unrecognized degrades to a permissive schema instead of failing.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, Strict, TypeAdapter, create_model


@dataclass(frozen=True)
class PermissiveNode:
    """Accepts any value."""


@dataclass(frozen=True)
class PrimitiveNode:
    """A scalar value: "string", "number", "integer" or "boolean"."""

    kind: str


@dataclass(frozen=True)
class SequenceNode:
    """A list whose items all match the item schema."""

    items: "SchemaNode"


@dataclass(frozen=True)
class PropertyNode:
    """A named property of an object schema."""

    name: str
    schema: "SchemaNode"
    required: bool


@dataclass(frozen=True)
class ObjectNode:
    """An object with known properties.

    Attributes:
        properties: Declared properties, in declaration order
        allow_extra: Whether undeclared properties are kept (True) or dropped
    """

    properties: tuple[PropertyNode, ...] = ()
    allow_extra: bool = False


SchemaNode = PrimitiveNode | SequenceNode | ObjectNode | PermissiveNode

# Strict so that "3.5" is not a number and "yes" is not a boolean
_PRIMITIVE_TYPES: dict[str, Any] = {
    "string": Annotated[str, Strict()],
    "number": Annotated[float, Strict()],
    "integer": Annotated[int, Strict()],
    "boolean": Annotated[bool, Strict()],
}


class ValidatedSchema:
    """A schema that can validate payloads and describe itself.

    Wraps a pydantic TypeAdapter built either from a translated SchemaNode
    tree or from a hand-written pydantic model.

    Attributes:
        node: The translated schema tree (None for model-backed schemas)
    """

    def __init__(self, annotation: Any, node: SchemaNode | None = None) -> None:
        self.node = node
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    @classmethod
    def from_node(cls, node: SchemaNode, title: str = "ToolInput") -> "ValidatedSchema":
        """Build a schema from a translated node tree."""
        return cls(_annotation_for(node, title), node=node)

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> "ValidatedSchema":
        """Build a schema from a pydantic model class."""
        return cls(model)

    @classmethod
    def permissive(cls) -> "ValidatedSchema":
        """Build a schema that accepts anything."""
        return cls.from_node(PermissiveNode())

    @property
    def is_permissive(self) -> bool:
        return isinstance(self.node, PermissiveNode)

    def validate(self, payload: Any) -> Any:
        """Validate a payload and return it as plain Python data.

        Translated schemas return exactly the properties the caller sent,
        explicit nulls in passthrough properties included. Model-backed
        schemas fill in their declared defaults.

        Raises:
            pydantic.ValidationError: If the payload does not match the schema
        """
        value = self._adapter.validate_python(payload)
        if self.node is None:
            return self._adapter.dump_python(value, by_alias=True, exclude_none=True)
        return _to_payload(value)

    def json_schema(self) -> dict[str, Any]:
        """Render the schema as JSON Schema (for model runtimes)."""
        return self._adapter.json_schema(by_alias=True)


def translate(descriptor: Mapping[str, Any] | None) -> ValidatedSchema:
    """Translate a registry input schema into a ValidatedSchema.

    Never raises. An empty or missing descriptor yields an object schema
    that accepts any properties, unrecognized shapes yield a permissive one.

    Args:
        descriptor: The tool's inputSchema as received from the registry

    Returns:
        ValidatedSchema: Schema usable for argument validation

    Example:
        >>> schema = translate({
        ...     "type": "object",
        ...     "properties": {"q": {"type": "string"}},
        ...     "required": ["q"],
        ... })
        >>> schema.validate({"q": "python"})
        {'q': 'python'}
    """
    return ValidatedSchema.from_node(translate_node(descriptor))


def translate_node(descriptor: Any) -> SchemaNode:
    """Translate a top-level descriptor into a SchemaNode tree."""
    if not descriptor:
        return ObjectNode(allow_extra=True)
    if not isinstance(descriptor, Mapping):
        return PermissiveNode()
    return _translate_object(descriptor)


def _translate_object(descriptor: Mapping[str, Any]) -> SchemaNode:
    properties = descriptor.get("properties")
    if descriptor.get("type") != "object" or not isinstance(properties, Mapping):
        return PermissiveNode()

    required = descriptor.get("required") or []
    if not isinstance(required, (list, tuple)):
        required = []

    return ObjectNode(
        properties=tuple(
            PropertyNode(
                name=str(name),
                schema=_translate_property(value),
                required=name in required,
            )
            for name, value in properties.items()
        )
    )


def _translate_property(prop: Any) -> SchemaNode:
    if not isinstance(prop, Mapping):
        return PermissiveNode()

    kind = prop.get("type")
    if not isinstance(kind, str):
        # Missing type, or a union like ["string", "null"]
        return PermissiveNode()

    if kind in _PRIMITIVE_TYPES:
        return PrimitiveNode(kind)
    if kind == "array":
        items = prop.get("items")
        return SequenceNode(_translate_property(items) if items else PermissiveNode())
    if kind == "object":
        return _translate_object(prop)
    return PermissiveNode()


def _annotation_for(node: SchemaNode, title: str) -> Any:
    if isinstance(node, PrimitiveNode):
        return _PRIMITIVE_TYPES[node.kind]
    if isinstance(node, SequenceNode):
        return list[_annotation_for(node.items, f"{title}Item")]  # type: ignore[misc]
    if isinstance(node, ObjectNode):
        return _build_model(node, title)
    return Any


def _build_model(node: ObjectNode, title: str) -> type[BaseModel]:
    # Property names become aliases so that names which are not valid Python
    # identifiers (or clash with BaseModel attributes) still work
    fields: dict[str, Any] = {}
    for index, prop in enumerate(node.properties):
        annotation = _annotation_for(prop.schema, f"{title}_{index}")
        if prop.required:
            fields[f"field_{index}"] = (annotation, Field(..., alias=prop.name))
        else:
            # Not nullable: an optional property is either sent with a value
            # or not sent at all
            fields[f"field_{index}"] = (annotation, Field(default=None, alias=prop.name))

    config = ConfigDict(extra="allow" if node.allow_extra else "ignore")
    return create_model(title, __config__=config, **fields)


def _to_payload(value: Any) -> Any:
    """Convert a validated value back into registry-shaped data.

    Declared properties are emitted under their registry names only when the
    caller set them. Passthrough properties are copied as received.
    """
    if isinstance(value, BaseModel):
        payload: dict[str, Any] = {}
        for name, field in type(value).model_fields.items():
            if name in value.model_fields_set:
                payload[field.alias or name] = _to_payload(getattr(value, name))
        payload.update(value.model_extra or {})
        return payload
    if isinstance(value, list):
        return [_to_payload(item) for item in value]
    return value
