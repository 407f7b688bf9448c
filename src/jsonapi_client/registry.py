"""
:py:mod:`jsonapi_client.registry` keeps the model definitions of a client and derives
the paths and wire types from them.
"""

import typing
import urllib.parse
from collections import OrderedDict

import inflection

from .exceptions import UnknownModelError
from .models import FieldSpec, ModelDefinition, ModelOptions

Pluralizer = typing.Callable[[str], str]

# characters encodeURIComponent leaves alone, besides the alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"


def identity(s: str) -> str:
    return s


def resolve_pluralizer(pluralize: typing.Union[Pluralizer, bool, None]) -> Pluralizer:
    """
    ``None`` and ``True`` pick the default English pluralization, ``False`` disables it.
    """
    if pluralize is None or pluralize is True:
        return inflection.pluralize
    elif pluralize is False:
        return identity
    return pluralize


class ModelRegistry:
    _definitions: "OrderedDict[str, ModelDefinition]"
    pluralize: Pluralizer

    def define(
        self,
        type_name: str,
        attributes: typing.Mapping[str, FieldSpec],
        options: typing.Union[ModelOptions, typing.Mapping[str, typing.Any], None] = None,
    ) -> ModelDefinition:
        definition = ModelDefinition(type_name, attributes, options)
        self._definitions[type_name] = definition
        return definition

    def lookup(self, type_name: str) -> ModelDefinition:
        try:
            return self._definitions[type_name]
        except KeyError:
            raise UnknownModelError(type_name, self._definitions.keys()) from None

    def get(self, type_name: str) -> typing.Optional[ModelDefinition]:
        return self._definitions.get(type_name)

    def wire_type(self, type_name: str) -> str:
        definition = self._definitions.get(type_name)
        if definition is not None and definition.options.type is not None:
            return definition.options.type
        return self.pluralize(type_name)

    def definition_for_wire_type(self, wire_type: str) -> typing.Optional[ModelDefinition]:
        definition = self._definitions.get(wire_type)
        if definition is not None:
            return definition
        for name, definition in self._definitions.items():
            if self.wire_type(name) == wire_type:
                return definition
        return None

    def collection_path(self, type_name: str) -> str:
        definition = self._definitions.get(type_name)
        if definition is not None and definition.options.collection_path:
            return definition.options.collection_path
        return self.pluralize(type_name)

    def resource_path(self, type_name: str, id: typing.Any) -> str:
        definition = self._definitions.get(type_name)
        if definition is not None and definition.options.template_path:
            return definition.options.template_path.replace(":id", str(id), 1)
        return (
            f"{self.collection_path(type_name)}/"
            f"{urllib.parse.quote(str(id), safe=URI_COMPONENT_SAFE)}"
        )

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._definitions

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __init__(self, pluralize: typing.Union[Pluralizer, bool, None] = None):
        self._definitions = OrderedDict()
        self.pluralize = resolve_pluralizer(pluralize)
