import collections.abc
import typing

from ..exceptions import MalformedDocumentError
from ..utils import pointer_join
from .models import (
    CollectionDocumentRepr,
    DocumentRepr,
    ErrorRepr,
    LinkageData,
    LinkageRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    SourceRepr,
)
from .types import JSONObject, JSONValue

EMPTY_ATTRIBUTES_DICT: typing.Mapping[str, JSONValue] = {}


def _type_name(value: typing.Any) -> str:
    if value is None:
        return "null"
    elif isinstance(value, collections.abc.Mapping):
        return "object"
    elif isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


class ReprDeserializer:
    """
    Converts a decoded JSON:API document into its internal representation.

    Every defect is reported as a :py:class:`MalformedDocumentError` carrying the JSON pointer
    of the offending node.
    """

    _document: JSONObject

    def _fail(self, pointer: str, message: str) -> typing.NoReturn:
        raise MalformedDocumentError(message, pointer, self._document)

    def _expect_object(self, pointer: str, value: typing.Any) -> JSONObject:
        if not isinstance(value, collections.abc.Mapping):
            self._fail(pointer, f"value has type {_type_name(value)} where object expected")
        return value

    def _expect_array(self, pointer: str, value: typing.Any) -> typing.Sequence[typing.Any]:
        if not isinstance(value, (list, tuple)):
            self._fail(pointer, f"value has type {_type_name(value)} where array expected")
        return value

    def _optional_object(
        self, pointer: str, value: JSONObject, name: str
    ) -> typing.Optional[typing.Dict[str, typing.Any]]:
        v = value.get(name)
        if v is None:
            return None
        return dict(self._expect_object(pointer_join(pointer, name), v))

    def _convert_identifier(self, pointer: str, value: typing.Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            self._fail(pointer, f"value has type {_type_name(value)} where string expected")
        return str(value)

    def _convert_type(self, pointer: str, value: JSONObject) -> str:
        try:
            type_ = value["type"]
        except KeyError:
            self._fail(pointer_join(pointer, "type"), 'value must have a property "type"')
        if not isinstance(type_, str) or not type_:
            self._fail(pointer_join(pointer, "type"), "type must be a non-empty string")
        return type_

    def _convert_resource_id_repr(self, pointer: str, value: typing.Any) -> ResourceIdRepr:
        value = self._expect_object(pointer, value)
        type_ = self._convert_type(pointer, value)
        if value.get("id") is None:
            self._fail(pointer_join(pointer, "id"), 'value must have a property "id"')
        return ResourceIdRepr(
            type=type_,
            id=self._convert_identifier(pointer_join(pointer, "id"), value["id"]),
            meta=self._optional_object(pointer, value, "meta"),
            _source_=pointer,
        )

    def _convert_linkage_repr(self, pointer: str, value: typing.Any) -> LinkageRepr:
        value = self._expect_object(pointer, value)
        data: LinkageData
        _pointer = pointer_join(pointer, "data")
        if "data" not in value:
            data = Missing
        elif value["data"] is None:
            data = None
        elif isinstance(value["data"], (list, tuple)):
            data = [
                self._convert_resource_id_repr(pointer_join(_pointer, i), v)
                for i, v in enumerate(value["data"])
            ]
        else:
            data = self._convert_resource_id_repr(_pointer, value["data"])
        return LinkageRepr(
            data=data,
            links=self._optional_object(pointer, value, "links"),
            meta=self._optional_object(pointer, value, "meta"),
            _source_=pointer,
        )

    def _convert_resource_repr(self, pointer: str, value: typing.Any) -> ResourceRepr:
        value = self._expect_object(pointer, value)
        type_ = self._convert_type(pointer, value)

        attributes_ = value.get("attributes")
        if attributes_ is None:
            attributes_ = EMPTY_ATTRIBUTES_DICT
        attributes_ = self._expect_object(pointer_join(pointer, "attributes"), attributes_)

        relationships: typing.Sequence[typing.Tuple[str, LinkageRepr]] = ()
        relationships_ = value.get("relationships")
        if relationships_ is not None:
            _pointer = pointer_join(pointer, "relationships")
            relationships = tuple(
                (k, self._convert_linkage_repr(pointer_join(_pointer, k), v))
                for k, v in self._expect_object(_pointer, relationships_).items()
            )

        id_: typing.Optional[str] = None
        id_repr = value.get("id")
        if id_repr is not None:
            id_ = self._convert_identifier(pointer_join(pointer, "id"), id_repr)

        return ResourceRepr(
            type=type_,
            id=id_,
            attributes=attributes_.items(),
            relationships=relationships,
            links=self._optional_object(pointer, value, "links"),
            meta=self._optional_object(pointer, value, "meta"),
            _source_=pointer,
        )

    def _convert_error_repr(self, pointer: str, value: typing.Any) -> ErrorRepr:
        value = self._expect_object(pointer, value)
        source: typing.Optional[SourceRepr] = None
        source_ = value.get("source")
        if source_ is not None:
            source_ = self._expect_object(pointer_join(pointer, "source"), source_)
            source = SourceRepr(
                pointer=source_.get("pointer"),
                parameter=source_.get("parameter"),
                _source_=pointer_join(pointer, "source"),
            )
        status = value.get("status")
        return ErrorRepr(
            id=value.get("id"),
            status=str(status) if status is not None else None,
            code=value.get("code"),
            title=value.get("title"),
            detail=value.get("detail"),
            source=source,
            links=self._optional_object(pointer, value, "links"),
            meta=self._optional_object(pointer, value, "meta") or {},
            _source_=pointer,
        )

    def _convert_errors(self, document: JSONObject) -> typing.Optional[typing.Sequence[ErrorRepr]]:
        if document.get("errors") is None:
            return None
        return tuple(
            self._convert_error_repr(pointer_join("/", "errors", i), v)
            for i, v in enumerate(self._expect_array("/errors", document["errors"]))
        )

    def errors(self, document: typing.Any) -> typing.Sequence[ErrorRepr]:
        """
        Extracts only the ``errors`` member, leaving the rest of the document unchecked.
        """
        self._document = document
        return self._convert_errors(self._expect_object("/", document)) or ()

    def __call__(self, document: typing.Any) -> DocumentRepr:
        self._document = document
        document = self._expect_object("/", document)

        errors = self._convert_errors(document)

        included: typing.Sequence[ResourceRepr] = ()
        if document.get("included") is not None:
            included = tuple(
                self._convert_resource_repr(pointer_join("/", "included", i), v)
                for i, v in enumerate(self._expect_array("/included", document["included"]))
            )

        common = dict(
            errors=errors,
            included=included,
            links=self._optional_object("/", document, "links"),
            meta=self._optional_object("/", document, "meta"),
            _source_="/",
        )

        data = document.get("data")
        if isinstance(data, (list, tuple)):
            return CollectionDocumentRepr(
                data=tuple(
                    self._convert_resource_repr(pointer_join("/", "data", i), v)
                    for i, v in enumerate(data)
                ),
                **common,
            )
        else:
            return SingletonDocumentRepr(
                data=(
                    self._convert_resource_repr("/data", data) if data is not None else None
                ),
                **common,
            )
