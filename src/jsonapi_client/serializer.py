"""
:py:mod:`jsonapi_client.serializer` turns in-memory resources into JSON:API request bodies.

Instances may be :py:class:`~jsonapi_client.resources.Resource` objects, plain mappings
(``{"id": "1", "title": "T", "author": {"id": "9"}}``) or arbitrary objects exposing
the fields as attributes. Relationships are always rendered as linkage only.
"""

import collections.abc
import typing

from .exceptions import RelatedResourceNotPersistedError, SerializationError
from .models import ModelDefinition, Relationship
from .registry import ModelRegistry
from .resources import Resource, UnresolvedReference
from .serde.builders import (
    CollectionDocumentBuilder,
    DocumentBuilder,
    ResourceReprBuilder,
    SingletonDocumentBuilder,
)
from .serde.interfaces import RelationshipType
from .serde.models import Missing, MissingType, ResourceRepr
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject

NewBuilder = typing.Callable[[str, typing.Optional[str]], ResourceReprBuilder]


def fetch_value(instance: typing.Any, name: str) -> typing.Any:
    """
    Returns the value of the field, or :py:data:`Missing` if the instance does not carry it.
    """
    if isinstance(instance, Resource):
        if name in instance.attributes:
            return instance.attributes[name]
        return instance.relationships.get(name, Missing)
    elif isinstance(instance, collections.abc.Mapping):
        return instance.get(name, Missing)
    else:
        return getattr(instance, name, Missing)


def fetch_id(instance: typing.Any) -> typing.Optional[str]:
    if isinstance(instance, (Resource, UnresolvedReference)):
        id_ = instance.id
    else:
        id_ = fetch_value(instance, "id")
    if id_ is Missing or id_ is None or id_ == "":
        return None
    return str(id_)


class Serializer:
    _registry: ModelRegistry
    _renderer: ReprRenderer

    def _related_type(self, instance: typing.Any, rel: Relationship) -> str:
        if isinstance(instance, (Resource, UnresolvedReference)):
            return instance.type
        type_ = fetch_value(instance, "type")
        if isinstance(type_, str) and type_:
            return type_
        return self._registry.wire_type(rel.type)

    def _linkage(
        self, definition: ModelDefinition, rel: Relationship, value: typing.Any
    ) -> typing.Tuple[str, str]:
        id_ = fetch_id(value)
        if id_ is None:
            raise RelatedResourceNotPersistedError(definition.name, rel.name or "")
        return self._related_type(value, rel), id_

    def _populate_relationship(
        self,
        builder: ResourceReprBuilder,
        definition: ModelDefinition,
        rel: Relationship,
        value: typing.Any,
    ) -> None:
        name = typing.cast(str, rel.name)
        if rel.cardinality is RelationshipType.TO_ONE:
            to_one = builder.to_one(name)
            if value is None:
                to_one.nullify()
            else:
                to_one.link(*self._linkage(definition, rel, value))
        else:
            to_many = builder.to_many(name)
            if value is None:
                return
            if isinstance(value, (str, bytes, collections.abc.Mapping)) or not isinstance(
                value, collections.abc.Iterable
            ):
                raise SerializationError(
                    f'relationship ({name}) in "{definition.name}" is to-many but got {value!r}'
                )
            for item in value:
                to_many.link(*self._linkage(definition, rel, item))

    def _populate_resource(
        self, new_builder: NewBuilder, type_name: str, instance: typing.Any
    ) -> None:
        definition = self._registry.lookup(type_name)
        builder = new_builder(self._registry.wire_type(type_name), fetch_id(instance))

        for name, field in definition.fields.items():
            if definition.is_read_only(name):
                continue
            value = fetch_value(instance, name)
            if isinstance(value, MissingType):
                continue
            if isinstance(field, Relationship):
                self._populate_relationship(builder, definition, field, value)
            else:
                builder.add_attribute(name, value)

        meta = instance.meta if isinstance(instance, Resource) else fetch_value(instance, "meta")
        if isinstance(meta, collections.abc.Mapping) and meta:
            builder.meta.update(meta)

    def serialize_resource(self, type_name: str, instance: typing.Any) -> MutableJSONObject:
        doc_builder = SingletonDocumentBuilder()
        self._populate_resource(doc_builder.set, type_name, instance)
        return self._renderer.render_resource(typing.cast(ResourceRepr, doc_builder().data))

    def serialize_collection(
        self, type_name: str, instances: typing.Iterable[typing.Any]
    ) -> typing.List[MutableJSONObject]:
        return [self.serialize_resource(type_name, instance) for instance in instances]

    def serialize_document(
        self,
        type_name: str,
        data: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> MutableJSONObject:
        """
        Builds a complete request document around one instance or a sequence of them.
        """
        doc_builder: DocumentBuilder
        if isinstance(data, (list, tuple)):
            doc_builder = CollectionDocumentBuilder()
            for instance in data:
                self._populate_resource(doc_builder.next, type_name, instance)
        else:
            doc_builder = SingletonDocumentBuilder()
            if data is not None:
                self._populate_resource(doc_builder.set, type_name, data)
        if meta:
            doc_builder.meta.update(meta)
        return self._renderer(doc_builder())

    def __init__(self, registry: ModelRegistry, renderer: typing.Optional[ReprRenderer] = None):
        self._registry = registry
        self._renderer = renderer if renderer is not None else ReprRenderer()
