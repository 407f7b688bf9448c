"""
:py:mod:`jsonapi_client.deserializer` turns a JSON:API document into a graph of
:py:class:`~jsonapi_client.resources.Resource` objects.

The graph is built in two sweeps over the records of ``data`` and ``included``:

1. every distinct ``(type, id)`` gets exactly one empty :py:class:`Resource`, registered
   in a lookup table before any field is populated;
2. attributes are copied and every linkage is resolved against the table.

Since no record is ever visited recursively, cyclic and shared references resolve to the
same live objects and the work is linear in the number of records.
"""

import typing

from .exceptions import ApiError
from .logger import ClientLogger
from .models import Attr
from .registry import ModelRegistry
from .resources import RelatedValue, Resource, Result, UnresolvedReference
from .serde.deserializer import ReprDeserializer
from .serde.models import (
    CollectionDocumentRepr,
    DocumentRepr,
    LinkageRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
)
from .serde.types import RecordKey

Pool = typing.Dict[RecordKey, Resource]


class Deserializer:
    _registry: typing.Optional[ModelRegistry]
    _logger: ClientLogger
    _parser: ReprDeserializer

    def _resolve(self, pool: Pool, linkage: ResourceIdRepr) -> typing.Union[Resource, UnresolvedReference]:
        resource = pool.get(linkage.key)
        if resource is not None:
            return resource
        self._logger.debug(
            'linkage to "%s" with id "%s" has no matching record; keeping a reference',
            linkage.type,
            linkage.id,
        )
        return UnresolvedReference(type=linkage.type, id=linkage.id, meta=linkage.meta or None)

    def _resolve_relationship(self, pool: Pool, repr_: LinkageRepr) -> RelatedValue:
        if repr_.data is None:
            return None
        elif isinstance(repr_.data, ResourceIdRepr):
            return self._resolve(pool, repr_.data)
        else:
            return [
                self._resolve(pool, item)
                for item in typing.cast(typing.Sequence[ResourceIdRepr], repr_.data)
            ]

    def _check_schema(self, repr_: ResourceRepr) -> None:
        if self._registry is None or not self._logger.enabled:
            return
        definition = self._registry.definition_for_wire_type(repr_.type)
        if definition is None:
            return
        for name in repr_.attributes:
            if name not in definition.fields:
                self._logger.warning(
                    'Resource response for type "%s" contains attribute "%s", but it is not present on model config.',
                    repr_.type,
                    name,
                )
        for name in repr_.relationships:
            field = definition.fields.get(name)
            if field is None:
                self._logger.warning(
                    'Resource response for type "%s" contains relationship "%s", but it is not present on model config.',
                    repr_.type,
                    name,
                )
            elif isinstance(field, Attr):
                self._logger.warning(
                    'Resource response for type "%s" contains relationship "%s", but it is present on model config as a plain attribute.',
                    repr_.type,
                    name,
                )

    def _fill(self, pool: Pool, resource: Resource, repr_: ResourceRepr) -> None:
        self._check_schema(repr_)
        resource.attributes.update(repr_.attributes)
        for name, linkage in repr_.relationships.items():
            if linkage.data is Missing:
                continue
            resource.relationships[name] = self._resolve_relationship(pool, linkage)
        if repr_.meta:
            resource.meta.update(repr_.meta)
        if repr_.links:
            resource.links = dict(repr_.links)

    def build_graph(
        self, doc: DocumentRepr
    ) -> typing.Tuple[typing.List[Resource], typing.List[Resource]]:
        """
        Builds the graph for a parsed document.

        :return: the resources for ``data`` (in document order) and those for ``included``.
        """
        primary_reprs: typing.Sequence[ResourceRepr]
        if isinstance(doc, CollectionDocumentRepr):
            primary_reprs = doc.data
        else:
            primary_reprs = [doc.data] if doc.data is not None else []

        pool: Pool = {}
        records: typing.List[typing.Tuple[Resource, ResourceRepr]] = []

        def allocate(repr_: ResourceRepr) -> Resource:
            if repr_.id is None:
                # not addressable, so it cannot be the target of a linkage
                resource = Resource(repr_.type)
            else:
                key = (repr_.type, repr_.id)
                resource = pool.get(key)
                if resource is None:
                    pool[key] = resource = Resource(repr_.type, repr_.id)
            records.append((resource, repr_))
            return resource

        primary = [allocate(repr_) for repr_ in primary_reprs]
        included = [allocate(repr_) for repr_ in doc.included]

        for resource, repr_ in records:
            self._fill(pool, resource, repr_)

        return primary, included

    def parse(self, document: typing.Any) -> DocumentRepr:
        doc = self._parser(document)
        if doc.errors:
            raise ApiError(doc.errors)
        return doc

    def deserialize(
        self, document: typing.Any
    ) -> typing.Union[None, Resource, typing.List[Resource]]:
        doc = self.parse(document)
        primary, _ = self.build_graph(doc)
        if isinstance(doc, CollectionDocumentRepr):
            return primary
        return primary[0] if primary else None

    def deserialize_document(self, document: typing.Any) -> Result:
        doc = self.parse(document)
        primary, included = self.build_graph(doc)
        return Result(
            data=primary if isinstance(doc, CollectionDocumentRepr) else (primary[0] if primary else None),
            meta=dict(doc.meta),
            links=doc.links,
            included=included,
        )

    def __init__(
        self,
        registry: typing.Optional[ModelRegistry] = None,
        logger: typing.Optional[ClientLogger] = None,
    ):
        self._registry = registry
        self._logger = logger if logger is not None else ClientLogger()
        self._parser = ReprDeserializer()
