import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class UnresolvedReference:
    """
    Stands in for a related resource whose full record was not side-loaded.
    Only its identity is known.
    """

    type: str
    id: str
    meta: typing.Optional[typing.Mapping[str, typing.Any]] = dataclasses.field(
        default=None, compare=False, hash=False
    )


RelatedValue = typing.Union[
    None,
    "Resource",
    UnresolvedReference,
    typing.List[typing.Union["Resource", UnresolvedReference]],
]


class Resource:
    """
    An in-memory resource.

    Instances compare by identity: within a deserialized graph a ``(type, id)`` pair is
    always represented by a single :py:class:`Resource`, and the graph may contain cycles.

    :param str type: the wire type of the resource.
    :param Optional[str] id: the identifier; ``None`` for a resource not created yet.
    :param Mapping[str, Any] attributes: the attribute values.
    :param Mapping[str, RelatedValue] relationships: the related resources.
    """

    type: str
    id: typing.Optional[str]
    attributes: typing.Dict[str, typing.Any]
    relationships: typing.Dict[str, RelatedValue]
    meta: typing.Dict[str, typing.Any]
    links: typing.Optional[typing.Dict[str, typing.Any]]

    @property
    def key(self) -> typing.Tuple[str, typing.Optional[str]]:
        return (self.type, self.id)

    def __getitem__(self, name: str) -> typing.Any:
        try:
            return self.attributes[name]
        except KeyError:
            return self.relationships[name]

    def __contains__(self, name: str) -> bool:
        return name in self.attributes or name in self.relationships

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        try:
            return self[name]
        except KeyError:
            return default

    def __repr__(self):
        return f"Resource(type={self.type!r}, id={self.id!r})"

    def __init__(
        self,
        type: str,
        id: typing.Optional[str] = None,
        attributes: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        relationships: typing.Optional[typing.Mapping[str, RelatedValue]] = None,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        links: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ):
        self.type = type
        self.id = id
        self.attributes = dict(attributes) if attributes is not None else {}
        self.relationships = dict(relationships) if relationships is not None else {}
        self.meta = dict(meta) if meta is not None else {}
        self.links = dict(links) if links is not None else None


@dataclasses.dataclass
class Result:
    """
    What a call resolves to: the deserialized primary data along with the document-level members.
    """

    data: typing.Union[None, Resource, typing.List[Resource]] = None
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    links: typing.Optional[typing.Dict[str, typing.Any]] = None
    included: typing.List[Resource] = dataclasses.field(default_factory=list)
    response: typing.Any = dataclasses.field(default=None, repr=False, compare=False)
