"""Data models and request URLs for the npm registry."""

from __future__ import annotations

import json
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

__all__ = [
    "BASE_URL_REGISTRY",
    "RegistryMetadataLicense",
    "RegistryMetadataHuman",
    "RegistryMetadataRepositoryKind",
    "RegistryMetadataRepository",
    "RegistryMetadataVersion",
    "RegistryMetadata",
    "human_name",
    "repository_url",
    "registry_url",
]

BASE_URL_REGISTRY = "https://registry.npmjs.org/"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_SHORTHANDS = (
    ("github:", "https://github.com/", ""),
    ("gitlab:", "https://gitlab.com/", ""),
    ("bitbucket:", "https://bitbucket.org/", "/overview"),
)


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


def _optional_string(data: Mapping[str, Any], *names: str) -> Optional[str]:
    value = next((data[name] for name in names if name in data), None)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{names[0]}` must be a string or null")
    return value


@dataclass
class RegistryMetadataLicense:
    """A license given as an object."""

    kind: str
    url: Optional[str] = None


@dataclass
class RegistryMetadataHuman:
    """An author or maintainer given as an object."""

    name: str
    email: Optional[str] = None


class RegistryMetadataRepositoryKind(Enum):
    """The kind of a source repository."""

    GIT = "git"


@dataclass
class RegistryMetadataRepository:
    """A source repository given as an object."""

    kind: RegistryMetadataRepositoryKind
    url: str
    dir: Optional[str] = None


License = Union[str, RegistryMetadataLicense]
Human = Union[str, RegistryMetadataHuman]
Repository = Union[str, RegistryMetadataRepository]


def _license(value: Any) -> Optional[License]:
    if value is None or isinstance(value, str):
        return value
    data = _mapping(value, "license")
    return RegistryMetadataLicense(kind=_string(data, "type"), url=_optional_string(data, "url"))


def _human(value: Any) -> Human:
    if isinstance(value, str):
        return value
    data = _mapping(value, "person")
    return RegistryMetadataHuman(name=_string(data, "name"), email=_optional_string(data, "email"))


def _repository(value: Any) -> Optional[Repository]:
    if value is None or isinstance(value, str):
        return value
    data = _mapping(value, "repository")
    return RegistryMetadataRepository(
        kind=RegistryMetadataRepositoryKind(_string(data, "type")),
        url=_string(data, "url"),
        dir=_optional_string(data, "dir", "directory"),
    )


@dataclass
class RegistryMetadataVersion:
    """Package information as published for one version."""

    name: str
    version: str = ""
    description: Optional[str] = None
    license: Optional[License] = None
    homepage: Optional[str] = None
    repository: Optional[Repository] = None
    author: Optional[Human] = None
    maintainers: list[Human] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RegistryMetadataVersion:
        data = _mapping(data, "package version")
        version = data.get("version", "")
        if not isinstance(version, str):
            raise ValueError("field `version` must be a string")
        maintainers = data.get("maintainers", [])
        if not isinstance(maintainers, list):
            raise ValueError("field `maintainers` must be a list")
        author = data.get("author")
        return cls(
            name=_string(data, "name"),
            version=version,
            description=_optional_string(data, "description"),
            license=_license(data.get("license")),
            homepage=_optional_string(data, "homepage"),
            repository=_repository(data.get("repository")),
            author=None if author is None else _human(author),
            maintainers=[_human(item) for item in maintainers],
        )

    def raw_version_string(self) -> str:
        return self.version


@dataclass
class RegistryMetadata:
    """The registry document of a package: its current data and all versions."""

    current_version: RegistryMetadataVersion
    timestamps: dict[str, str] = field(default_factory=dict)
    versions: dict[str, RegistryMetadataVersion] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str | bytes) -> RegistryMetadata:
        """Parse a registry document; each version takes its key as version string."""
        data = _mapping(json.loads(text), "registry metadata")

        timestamps = _mapping(data.get("time", {}), "time")
        if not all(isinstance(value, str) for value in timestamps.values()):
            raise ValueError("field `time` must map to strings")

        versions = {}
        for key, value in _mapping(data.get("versions", {}), "versions").items():
            version = RegistryMetadataVersion.from_dict(value)
            version.version = key
            versions[key] = version

        return cls(
            current_version=RegistryMetadataVersion.from_dict(data),
            timestamps=dict(timestamps),
            versions=versions,
        )


def human_name(human: Human) -> str:
    """The name of an author or maintainer, however it was given."""
    return human if isinstance(human, str) else human.name


def repository_url(repository: Repository) -> str | None:
    """A browsable URL for a repository, expanding known shorthands."""
    if isinstance(repository, RegistryMetadataRepository):
        return repository.url
    text = repository.strip()
    for prefix, base_url, suffix in _SHORTHANDS:
        if text.startswith(prefix):
            rest = text
            while rest.startswith(prefix):
                rest = rest[len(prefix) :]
            user, slash, repo = rest.partition("/")
            if not slash:
                return None
            return f"{base_url}{user}/{repo}{suffix}"
    return None


def registry_url(name: str) -> str:
    """The registry URL of package ``name``."""
    return f"{BASE_URL_REGISTRY}/{name.translate(_ASCII_LOWER)}"