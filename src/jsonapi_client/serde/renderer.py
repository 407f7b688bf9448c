"""
:py:mod:`jsonapi_client.serde.renderer` module renders the internal representation of a JSON:API
request document to a structure ready for JSON encoding.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_client.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   internal_repr = SingletonDocumentRepr(
       data=ResourceRepr(
           type="articles",
           id=None,
           attributes=[
               ("title", "Hello"),
           ],
           relationships=[
               (
                   "tags",
                   LinkageRepr(
                       data=[
                           ResourceIdRepr(type="tags", id="1"),
                           ResourceIdRepr(type="tags", id="2"),
                       ],
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(internal_repr)))

"""

import base64
import collections.abc
import datetime
import decimal
import typing

from ..exceptions import SerializationError
from ..utils import pointer_join
from .models import (
    CollectionDocumentRepr,
    LinkageRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .types import JSONScalar, JSONValue, MutableJSONObject

ScalarRenderer = typing.Callable[["ReprRenderer", str, typing.Any], JSONScalar]


class ReprRenderer:
    """
    Renders request documents. Values that cannot be rendered raise
    :py:class:`SerializationError` carrying the JSON pointer of the value.

    :param bool render_decimal_as_str: render :py:class:`decimal.Decimal` as a string rather than a float.
    :param Optional[datetime.tzinfo] assume_naive_timezone_as: the zone naive datetimes are taken to be in; they are rejected when unset.
    """

    _render_decimal_as_str: bool
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo]

    def _render_datetime(self, pointer: str, value: datetime.datetime) -> JSONScalar:
        if value.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                raise SerializationError(f"{pointer}: naive datetime {value}")
            value = value.replace(tzinfo=self._assume_naive_timezone_as)
        return value.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self, pointer: str, value: datetime.date) -> JSONScalar:
        return value.isoformat()

    def _render_decimal(self, pointer: str, value: decimal.Decimal) -> JSONScalar:
        return str(value) if self._render_decimal_as_str else float(value)

    def _render_bytes(self, pointer: str, value: bytes) -> JSONScalar:
        return base64.b64encode(value).decode("ascii")

    def _render_passthrough(self, pointer: str, value: typing.Any) -> JSONScalar:
        return value

    # datetime precedes date since it is a subclass of it
    _scalar_renderers: typing.ClassVar[typing.Dict[type, ScalarRenderer]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        str: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        bool: _render_passthrough,
        type(None): _render_passthrough,
    }

    def _render_value(self, pointer: str, value: typing.Any) -> JSONValue:
        r = self._scalar_renderers.get(type(value))
        if r is not None:
            return r(self, pointer, value)

        if isinstance(value, collections.abc.Mapping):
            return {
                str(k): self._render_value(pointer_join(pointer, str(k)), v)
                for k, v in value.items()
            }
        elif isinstance(value, (list, tuple)):
            return [self._render_value(pointer_join(pointer, i), v) for i, v in enumerate(value)]

        for type_, r in self._scalar_renderers.items():
            if isinstance(value, type_):
                return r(self, pointer, value)

        raise SerializationError(f"{pointer}: unsupported type {value!r}")

    def _render_linkage(self, repr_: ResourceIdRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type, "id": repr_.id}
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_relationship(self, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceIdRepr):
            retval["data"] = self._render_linkage(repr_.data)
        elif repr_.data is not Missing:
            retval["data"] = [
                self._render_linkage(item)
                for item in typing.cast(typing.Sequence[ResourceIdRepr], repr_.data)
            ]
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def render_resource(self, repr_: ResourceRepr, pointer: str = "/data") -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        if repr_.attributes:
            _pointer = pointer_join(pointer, "attributes")
            retval["attributes"] = {
                k: self._render_value(pointer_join(_pointer, k), v)
                for k, v in repr_.attributes.items()
            }
        if repr_.relationships:
            retval["relationships"] = {
                k: self._render_relationship(v) for k, v in repr_.relationships.items()
            }
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def __call__(
        self, repr_: typing.Union[SingletonDocumentRepr, CollectionDocumentRepr]
    ) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if isinstance(repr_, CollectionDocumentRepr):
            retval["data"] = [
                self.render_resource(item, pointer_join("/", "data", i))
                for i, item in enumerate(repr_.data)
            ]
        else:
            retval["data"] = self.render_resource(repr_.data) if repr_.data is not None else None
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
