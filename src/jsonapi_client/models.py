import collections.abc
import copy
import dataclasses
import typing
from collections import OrderedDict

from .exceptions import ConfigurationError
from .serde.interfaces import RelationshipType


class FieldDescriptor:
    parent: typing.Optional["ModelDefinition"] = None
    name: typing.Optional[str] = None

    T = typing.TypeVar("T", bound="FieldDescriptor")

    def bind(self: T, parent: "ModelDefinition", name: str) -> T:
        bound = copy.copy(self)
        bound.parent = parent
        bound.name = name
        return bound

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class Attr(FieldDescriptor):
    """
    A plain attribute of a model.
    """


class Relationship(FieldDescriptor):
    type: str
    """
    The type name of the model on the other side of the relationship.
    """
    cardinality: RelationshipType

    def __repr__(self):
        return f"{type(self).__name__}({self.type!r})"

    def __init__(self, type: str):
        self.type = type


class HasOne(Relationship):
    cardinality = RelationshipType.TO_ONE


class HasMany(Relationship):
    cardinality = RelationshipType.TO_MANY


@dataclasses.dataclass(frozen=True)
class ModelOptions:
    collection_path: typing.Optional[str] = None
    template_path: typing.Optional[str] = None
    type: typing.Optional[str] = None
    read_only: typing.Tuple[str, ...] = ()


FieldSpec = typing.Union[FieldDescriptor, typing.Mapping[str, typing.Any], None]


def field_from_spec(spec: FieldSpec) -> FieldDescriptor:
    """
    Normalizes a field specification into a :py:class:`FieldDescriptor`.

    Besides descriptor instances, the dictionary form is accepted:
    ``{}`` stands for a plain attribute and ``{"jsonApi": "hasOne", "type": "people"}``
    (or ``"hasMany"``) for a relationship.
    """
    if isinstance(spec, FieldDescriptor):
        return spec
    if spec is None:
        return Attr()
    if not isinstance(spec, collections.abc.Mapping):
        raise ConfigurationError(f"unsupported field specification: {spec!r}")
    kind = spec.get("jsonApi", spec.get("json_api"))
    if kind is None:
        return Attr()
    if "type" not in spec:
        raise ConfigurationError(f"relationship specification lacks a type: {spec!r}")
    if kind == "hasOne":
        return HasOne(spec["type"])
    elif kind == "hasMany":
        return HasMany(spec["type"])
    raise ConfigurationError(f"unknown relationship kind {kind!r}")


def options_from_spec(
    options: typing.Union[ModelOptions, typing.Mapping[str, typing.Any], None]
) -> ModelOptions:
    if options is None:
        return ModelOptions()
    if isinstance(options, ModelOptions):
        return options
    try:
        return ModelOptions(
            collection_path=options.get("collection_path"),
            template_path=options.get("template_path"),
            type=options.get("type"),
            read_only=tuple(options.get("read_only", ())),
        )
    except AttributeError:
        raise ConfigurationError(f"unsupported model options: {options!r}")


class ModelDefinition:
    """
    A :py:class:`ModelDefinition` holds the schema of a resource type.

    :param str name: The name of the model.
    :param Mapping[str, FieldSpec] fields: The field specifications keyed by field name.
    :param ModelOptions options: Path and serialization options.
    """

    name: str
    """
    The name of the model.
    """
    options: ModelOptions
    _fields: typing.Mapping[str, FieldDescriptor]

    @property
    def fields(self) -> typing.Mapping[str, FieldDescriptor]:
        return self._fields

    @property
    def attributes(self) -> typing.Mapping[str, Attr]:
        """
        The mapping of attribute names to plain :py:class:`Attr` descriptors.
        """
        return OrderedDict((k, v) for k, v in self._fields.items() if isinstance(v, Attr))

    @property
    def relationships(self) -> typing.Mapping[str, Relationship]:
        """
        The mapping of relationship names to :py:class:`Relationship` descriptors.
        """
        return OrderedDict(
            (k, v) for k, v in self._fields.items() if isinstance(v, Relationship)
        )

    def is_read_only(self, name: str) -> bool:
        return name in self.options.read_only

    def __repr__(self):
        return f"ModelDefinition({self.name!r}, {list(self._fields.values())!r})"

    def __init__(
        self,
        name: str,
        fields: typing.Optional[typing.Mapping[str, FieldSpec]] = None,
        options: typing.Union[ModelOptions, typing.Mapping[str, typing.Any], None] = None,
    ) -> None:
        self.name = name
        self.options = options_from_spec(options)
        self._fields = OrderedDict(
            (k, field_from_spec(spec).bind(self, k)) for k, spec in (fields or {}).items()
        )
