"""Data models and request URLs for the crates.io API and its sparse index."""

from __future__ import annotations

import json
import string
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

__all__ = [
    "BASE_URL_INDEX",
    "BASE_URL_CRATES",
    "QUERY_STRING_CRATE_SINGLE",
    "QUERY_STRING_CRATE_MULTI",
    "CRAWL_MAX_INTERVAL_SECONDS",
    "CrateDataLinks",
    "CrateDataDownloads",
    "CrateData",
    "CrateDataVersion",
    "CrateDataSingle",
    "CrateDataMulti",
    "IndexMetadataDependency",
    "IndexMetadata",
    "sparse_index_url",
    "crate_data_url",
    "crate_search_url",
]

BASE_URL_INDEX = "https://index.crates.io"
BASE_URL_CRATES = "https://crates.io/api/v1/crates"

# Fetch only what is needed for a single crate.
QUERY_STRING_CRATE_SINGLE = "?include=downloads,versions"
# First page only, with a reasonable number of results.
QUERY_STRING_CRATE_MULTI = "?page=1&per_page=32"

# The crawl policy allows one request per second; stay a little slower.
CRAWL_MAX_INTERVAL_SECONDS = 1.25

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_MISSING = object()


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], names: tuple[str, ...], default: Any = _MISSING) -> Any:
    for name in names:
        if name in data:
            return data[name]
    if default is _MISSING:
        raise ValueError(f"missing field `{names[0]}`")
    return default


def _string(data: Mapping[str, Any], *names: str) -> str:
    value = _field(data, names)
    if not isinstance(value, str):
        raise ValueError(f"field `{names[0]}` must be a string")
    return value


def _optional_string(data: Mapping[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string or null")
    return value


def _count(data: Mapping[str, Any], *names: str) -> int:
    value = _field(data, names)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{names[0]}` must be a non-negative integer")
    return value


def _flag(data: Mapping[str, Any], name: str) -> bool:
    value = _field(data, (name,))
    if not isinstance(value, bool):
        raise ValueError(f"field `{name}` must be a boolean")
    return value


def _string_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{name}` must be a list of strings")
    return list(value)


def _features(value: Any, name: str) -> dict[str, list[str]]:
    features = _mapping(value, name)
    return {key: _string_list(items, name) for key, items in features.items()}


@dataclass
class CrateDataLinks:
    """Links a crate publishes."""

    documentation: Optional[str] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None


@dataclass
class CrateDataDownloads:
    """Download counters of a crate."""

    total_count: int
    recent_count: int


@dataclass
class CrateData:
    """Summary information about a crate."""

    name: str
    description: str
    created_at: str
    updated_at: str
    links: CrateDataLinks
    downloads: CrateDataDownloads

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CrateData:
        data = _mapping(data, "crate")
        return cls(
            name=_string(data, "name"),
            description=_string(data, "description"),
            created_at=_string(data, "created_at"),
            updated_at=_string(data, "updated_at"),
            links=CrateDataLinks(
                documentation=_optional_string(data, "documentation"),
                repository=_optional_string(data, "repository"),
                homepage=_optional_string(data, "homepage"),
            ),
            downloads=CrateDataDownloads(
                total_count=_count(data, "downloads"),
                recent_count=_count(data, "recent_downloads"),
            ),
        )


@dataclass
class CrateDataVersion:
    """One published version of a crate."""

    id: int
    name: str
    version: str
    created_at: str
    updated_at: str
    downloads: int
    features: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CrateDataVersion:
        data = _mapping(data, "crate version")
        return cls(
            id=_count(data, "id"),
            name=_string(data, "name", "crate"),
            version=_string(data, "version", "num"),
            created_at=_string(data, "created_at"),
            updated_at=_string(data, "updated_at"),
            downloads=_count(data, "downloads"),
            features=_features(_field(data, ("features",)), "features"),
        )

    def raw_version_string(self) -> str:
        return self.version


@dataclass
class CrateDataSingle:
    """The response for a single crate, with its versions."""

    inner: CrateData
    versions: list[CrateDataVersion] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CrateDataSingle:
        data = _mapping(data, "crate response")
        versions = _field(data, ("versions",), [])
        if not isinstance(versions, list):
            raise ValueError("field `versions` must be a list")
        return cls(
            inner=CrateData.from_dict(_field(data, ("crate",))),
            versions=[CrateDataVersion.from_dict(item) for item in versions],
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> CrateDataSingle:
        return cls.from_dict(json.loads(text))


@dataclass
class CrateDataMulti:
    """The response of a crate search."""

    inner: list[CrateData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CrateDataMulti:
        data = _mapping(data, "search response")
        crates = _field(data, ("crates",))
        if not isinstance(crates, list):
            raise ValueError("field `crates` must be a list")
        return cls(inner=[CrateData.from_dict(item) for item in crates])

    @classmethod
    def from_json(cls, text: str | bytes) -> CrateDataMulti:
        return cls.from_dict(json.loads(text))


@dataclass
class IndexMetadataDependency:
    """A dependency listed for a crate version in the sparse index."""

    name: str
    version_requirement: str
    features: list[str]
    optional: bool
    default_features: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndexMetadataDependency:
        data = _mapping(data, "index dependency")
        return cls(
            name=_string(data, "name"),
            version_requirement=_string(data, "version_requirement", "req"),
            features=_string_list(_field(data, ("features",)), "features"),
            optional=_flag(data, "optional"),
            default_features=_flag(data, "default_features"),
        )


@dataclass
class IndexMetadata:
    """One line of a crate's sparse index file."""

    name: str
    version: str
    dependencies: list[IndexMetadataDependency] = field(default_factory=list)
    features: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndexMetadata:
        data = _mapping(data, "index metadata")
        dependencies = _field(data, ("dependencies", "deps"), [])
        if not isinstance(dependencies, list):
            raise ValueError("field `dependencies` must be a list")
        return cls(
            name=_string(data, "name"),
            version=_string(data, "version", "vers"),
            dependencies=[IndexMetadataDependency.from_dict(item) for item in dependencies],
            features=_features(_field(data, ("features", "feats"), {}), "features"),
        )

    @classmethod
    def try_from_lines(cls, lines: Iterable[str]) -> list[IndexMetadata]:
        """Parse one JSON document per line; any bad line raises ``ValueError``."""
        return [cls.from_dict(json.loads(line)) for line in lines]

    def raw_version_string(self) -> str:
        return self.version


def sparse_index_url(name: str) -> str:
    """The sparse index URL holding the metadata of crate ``name``."""
    low = _ascii_lower(name)
    if len(low) <= 2:
        return f"{BASE_URL_INDEX}/{len(low)}/{low}"
    if len(low) == 3:
        return f"{BASE_URL_INDEX}/3/{low[:1]}/{low}"
    return f"{BASE_URL_INDEX}/{low[:2]}/{low[2:4]}/{low}"


def crate_data_url(name: str) -> str:
    """The API URL for the data of crate ``name``."""
    crate = _ascii_lower(name.strip())
    return f"{BASE_URL_CRATES}/{crate}{QUERY_STRING_CRATE_SINGLE}"


def crate_search_url(query: str) -> str:
    """The API URL for searching crates matching ``query``."""
    crates_query = _ascii_lower(query.strip())
    return f"{BASE_URL_CRATES}{QUERY_STRING_CRATE_MULTI}&q={crates_query}"