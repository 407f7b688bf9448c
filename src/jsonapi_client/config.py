import base64
import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class TrailingSlash:
    collection: bool = False
    resource: bool = False

    @classmethod
    def coerce(
        cls, value: typing.Union["TrailingSlash", bool, typing.Mapping[str, bool], None]
    ) -> "TrailingSlash":
        """
        A bool applies to both kinds of path; a mapping may set either of them.
        """
        if value is None:
            return cls()
        elif isinstance(value, TrailingSlash):
            return value
        elif isinstance(value, bool):
            return cls(collection=value, resource=value)
        return cls(
            collection=bool(value.get("collection", False)),
            resource=bool(value.get("resource", False)),
        )


@dataclasses.dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = ""

    @property
    def header(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8"))
        return f"Basic {token.decode('ascii')}"

    @classmethod
    def coerce(
        cls,
        value: typing.Union["BasicAuth", typing.Tuple[str, str], typing.Mapping[str, str], None],
    ) -> typing.Optional["BasicAuth"]:
        if value is None or isinstance(value, BasicAuth):
            return value
        elif isinstance(value, tuple):
            return cls(*value)
        elif not value or not value.get("username"):
            return None
        return cls(username=value["username"], password=value.get("password", ""))
