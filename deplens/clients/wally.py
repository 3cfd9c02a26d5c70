"""Data models for Wally package indexes and parsing of index URLs."""

from __future__ import annotations

import json
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

__all__ = [
    "IndexConfig",
    "IndexOwners",
    "MetadataRealm",
    "MetadataPackage",
    "MetadataDependencies",
    "Metadata",
    "IndexUrlError",
    "parse_index_url",
]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_GITHUB_PREFIX = "https://github.com/"


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _string(data: Mapping[str, Any], name: str) -> str:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


def _optional_string(data: Mapping[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string or null")
    return value


def _string_list(data: Mapping[str, Any], name: str) -> list[str]:
    value = data.get(name, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{name}` must be a list of strings")
    return list(value)


def _string_map(data: Mapping[str, Any], name: str) -> dict[str, str]:
    value = _mapping(data.get(name, {}), name)
    if not all(isinstance(item, str) for item in value.values()):
        raise ValueError(f"field `{name}` must map to strings")
    return dict(value)


@dataclass(frozen=True)
class IndexConfig:
    """The ``config.json`` at the root of an index repository."""

    api_url: str
    fallback_registries: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndexConfig:
        data = _mapping(data, "index config")
        return cls(
            api_url=_string(data, "api"),
            fallback_registries=tuple(_string_list(data, "fallback_registries")),
        )


@dataclass(frozen=True)
class IndexOwners:
    """The ``owners.json`` at the root of each scope: GitHub user ids."""

    github_user_ids: tuple[int, ...] = ()

    @classmethod
    def from_list(cls, data: Any) -> IndexOwners:
        if not isinstance(data, list) or not all(
            isinstance(item, int) and not isinstance(item, bool) and item >= 0 for item in data
        ):
            raise ValueError("owners must be a list of non-negative integers")
        return cls(github_user_ids=tuple(data))


class MetadataRealm(Enum):
    """The realm a package is meant to run in."""

    DEV = "dev"
    SERVER = "server"
    SHARED = "shared"

    def section_name(self) -> str:
        """The manifest section that holds dependencies of this realm."""
        return _SECTION_NAMES[self]

    def get_suggested_realm(self, found_realm: MetadataRealm) -> MetadataRealm | None:
        """Suggest a better section for a package of ``found_realm`` placed in ``self``."""
        if found_realm is MetadataRealm.SERVER and self is MetadataRealm.SHARED:
            return MetadataRealm.SERVER
        if found_realm is MetadataRealm.DEV and self in (MetadataRealm.SERVER, MetadataRealm.SHARED):
            return MetadataRealm.DEV
        return None


_SECTION_NAMES = {
    MetadataRealm.DEV: "dev-dependencies",
    MetadataRealm.SERVER: "server-dependencies",
    MetadataRealm.SHARED: "dependencies",
}


@dataclass
class MetadataPackage:
    """The ``[package]`` table of a published package."""

    name: str
    version: str
    registry: str
    realm: MetadataRealm
    description: Optional[str] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None
    license: Optional[str] = None
    authors: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    private: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MetadataPackage:
        data = _mapping(data, "package")
        private = data.get("private", False)
        if not isinstance(private, bool):
            raise ValueError("field `private` must be a boolean")
        return cls(
            name=_string(data, "name"),
            version=_string(data, "version"),
            registry=_string(data, "registry"),
            realm=MetadataRealm(_string(data, "realm")),
            description=_optional_string(data, "description"),
            repository=_optional_string(data, "repository"),
            homepage=_optional_string(data, "homepage"),
            license=_optional_string(data, "license"),
            authors=_string_list(data, "authors"),
            include=_string_list(data, "include"),
            exclude=_string_list(data, "exclude"),
            private=private,
        )

    def raw_version_string(self) -> str:
        return self.version


@dataclass
class MetadataDependencies:
    """Dependencies of a published package, by realm."""

    shared: dict[str, str] = field(default_factory=dict)
    server: dict[str, str] = field(default_factory=dict)
    dev: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MetadataDependencies:
        data = _mapping(data, "dependencies")
        return cls(
            shared=_string_map(data, "dependencies"),
            server=_string_map(data, "server-dependencies"),
            dev=_string_map(data, "dev-dependencies"),
        )


@dataclass
class Metadata:
    """One line of a package's index file."""

    package: MetadataPackage
    dependencies: MetadataDependencies = field(default_factory=MetadataDependencies)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Metadata:
        data = _mapping(data, "metadata")
        if "package" not in data:
            raise ValueError("missing field `package`")
        return cls(
            package=MetadataPackage.from_dict(data["package"]),
            dependencies=MetadataDependencies.from_dict(data),
        )

    @classmethod
    def try_from_lines(cls, lines: Iterable[str]) -> list[Metadata]:
        """Parse one JSON document per line; any bad line raises ``ValueError``."""
        return [cls.from_dict(json.loads(line)) for line in lines]

    def raw_version_string(self) -> str:
        return self.package.version


class IndexUrlError(ValueError):
    """An index URL that does not name a GitHub repository."""


def parse_index_url(index_url: str) -> tuple[str, str]:
    """Return the lower-cased GitHub owner and repository of an index URL."""
    url = _ascii_lower(index_url)
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise IndexUrlError(f"invalid index url `{url}`")

    stripped = url
    while stripped.endswith(".git"):
        stripped = stripped[: -len(".git")]
    if stripped.startswith(_GITHUB_PREFIX):
        owner, slash, repo = stripped[len(_GITHUB_PREFIX) :].partition("/")
        if slash:
            return owner, repo

    raise IndexUrlError(
        f"malformed index url - failed to parse github owner & repo from `{url}`"
    )