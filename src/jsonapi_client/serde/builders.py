"""
Builders assembling request documents one resource at a time.

A resource builder is created with the identity of the resource already known; only
attributes and linkages are added afterwards, in field order.
"""

import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    LinkageRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class ToOneRelReprBuilder:
    data: typing.Optional[ResourceIdRepr] = None

    def link(self, type: str, id: str) -> None:
        self.data = ResourceIdRepr(type=type, id=id)

    def nullify(self) -> None:
        self.data = None

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(data=self.data)


class ToManyRelReprBuilder:
    data: typing.List[ResourceIdRepr]

    def link(self, type: str, id: str) -> None:
        self.data.append(ResourceIdRepr(type=type, id=id))

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(data=tuple(self.data))

    def __init__(self):
        self.data = []


RelReprBuilder = typing.Union[ToOneRelReprBuilder, ToManyRelReprBuilder]


class ResourceReprBuilder:
    type: str
    id: typing.Optional[str]
    meta: typing.Dict[str, typing.Any]
    attributes: "OrderedDict[str, AttributeValue]"
    relationships: "OrderedDict[str, RelReprBuilder]"

    def add_attribute(self, name: str, value: AttributeValue) -> None:
        self.attributes[name] = value

    def to_one(self, name: str) -> ToOneRelReprBuilder:
        self.relationships[name] = rel = ToOneRelReprBuilder()
        return rel

    def to_many(self, name: str) -> ToManyRelReprBuilder:
        self.relationships[name] = rel = ToManyRelReprBuilder()
        return rel

    def __call__(self) -> ResourceRepr:
        return ResourceRepr(
            type=self.type,
            id=self.id,
            meta=dict(self.meta),
            attributes=self.attributes.items(),
            relationships=((k, v()) for k, v in self.relationships.items()),
        )

    def __init__(self, type: str, id: typing.Optional[str] = None):
        self.type = type
        self.id = id
        self.meta = {}
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class SingletonDocumentBuilder:
    data: typing.Optional[ResourceReprBuilder] = None
    meta: typing.Dict[str, typing.Any]

    def set(self, type: str, id: typing.Optional[str] = None) -> ResourceReprBuilder:
        self.data = builder = ResourceReprBuilder(type, id)
        return builder

    def __call__(self) -> SingletonDocumentRepr:
        return SingletonDocumentRepr(
            data=self.data() if self.data is not None else None,
            meta=dict(self.meta),
        )

    def __init__(self):
        self.meta = {}


class CollectionDocumentBuilder:
    data: typing.List[ResourceReprBuilder]
    meta: typing.Dict[str, typing.Any]

    def next(self, type: str, id: typing.Optional[str] = None) -> ResourceReprBuilder:
        builder = ResourceReprBuilder(type, id)
        self.data.append(builder)
        return builder

    def __call__(self) -> CollectionDocumentRepr:
        return CollectionDocumentRepr(
            data=tuple(b() for b in self.data),
            meta=dict(self.meta),
        )

    def __init__(self):
        self.data = []
        self.meta = {}


DocumentBuilder = typing.Union[SingletonDocumentBuilder, CollectionDocumentBuilder]
