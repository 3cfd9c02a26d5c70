"""Data models for the GitHub REST API: git trees and repository releases."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

__all__ = [
    "GITHUB_API_BASE_URL",
    "GITHUB_API_VERSION_NAME",
    "GITHUB_API_VERSION_VALUE",
    "GITHUB_API_CONTENT_TYPE",
    "GITHUB_API_CONTENT_TYPE_RAW",
    "GitNodeKind",
    "GitTreeNode",
    "GitTreeRoot",
    "RepositoryMetrics",
    "RepositoryReleaseAsset",
    "RepositoryRelease",
]

GITHUB_API_BASE_URL = "https://api.github.com"

GITHUB_API_VERSION_NAME = "X-GitHub-Api-Version"
GITHUB_API_VERSION_VALUE = "2022-11-28"

GITHUB_API_CONTENT_TYPE = "application/vnd.github.v3+json"
GITHUB_API_CONTENT_TYPE_RAW = "application/vnd.github.raw"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_MISSING = object()


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], name: str) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _string(data: Mapping[str, Any], name: str) -> str:
    value = _field(data, name)
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


def _optional_string(data: Mapping[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string or null")
    return value


def _integer(data: Mapping[str, Any], name: str) -> int:
    value = _field(data, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field `{name}` must be an integer")
    return value


def _optional_count(data: Mapping[str, Any], name: str) -> Optional[int]:
    value = data.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{name}` must be a non-negative integer or null")
    return value


def _flag(data: Mapping[str, Any], name: str) -> bool:
    value = _field(data, name)
    if not isinstance(value, bool):
        raise ValueError(f"field `{name}` must be a boolean")
    return value


def _list(data: Mapping[str, Any], name: str) -> list:
    value = _field(data, name)
    if not isinstance(value, list):
        raise ValueError(f"field `{name}` must be a list")
    return value


class GitNodeKind(Enum):
    """The kind of an entry in a git tree."""

    BLOB = "blob"
    TREE = "tree"


@dataclass
class GitTreeNode:
    """One entry of a git tree."""

    sha: str
    url: str
    kind: GitNodeKind
    path: str
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GitTreeNode:
        data = _mapping(data, "git tree node")
        kind = _field(data, "type")
        if not isinstance(kind, str):
            raise ValueError("field `type` must be a string")
        return cls(
            sha=_string(data, "sha"),
            url=_string(data, "url"),
            kind=GitNodeKind(kind),
            path=_string(data, "path"),
            size=_optional_count(data, "size"),
        )

    def is_blob(self) -> bool:
        return self.kind is GitNodeKind.BLOB

    def is_tree(self) -> bool:
        return self.kind is GitNodeKind.TREE


@dataclass
class GitTreeRoot:
    """A git tree and its direct entries."""

    sha: str
    url: str
    tree: list[GitTreeNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GitTreeRoot:
        data = _mapping(data, "git tree")
        return cls(
            sha=_string(data, "sha"),
            url=_string(data, "url"),
            tree=[GitTreeNode.from_dict(node) for node in _list(data, "tree")],
        )

    def find_node_by_path(self, path: str) -> GitTreeNode | None:
        """Return the first entry whose path matches ``path``, ignoring ASCII case."""
        wanted = path.translate(_ASCII_LOWER)
        return next(
            (node for node in self.tree if node.path.translate(_ASCII_LOWER) == wanted),
            None,
        )

    def get_directory_paths(self) -> list[str]:
        return [node.path for node in self.tree if node.is_tree()]

    def get_file_paths_excluding_json(self) -> list[str]:
        return [
            node.path for node in self.tree if node.is_blob() and not node.path.endswith(".json")
        ]


@dataclass
class RepositoryMetrics:
    """Community profile information of a repository."""

    description: Optional[str] = None
    documentation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryMetrics:
        data = _mapping(data, "repository metrics")
        return cls(
            description=_optional_string(data, "description"),
            documentation=_optional_string(data, "documentation"),
        )


@dataclass
class RepositoryReleaseAsset:
    """A file attached to a release."""

    name: str
    content_type: str
    size: int
    download_count: int
    label: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryReleaseAsset:
        data = _mapping(data, "release asset")
        return cls(
            name=_string(data, "name"),
            content_type=_string(data, "content_type"),
            size=_integer(data, "size"),
            download_count=_integer(data, "download_count"),
            label=_optional_string(data, "label"),
            created_at=_optional_string(data, "created_at"),
            updated_at=_optional_string(data, "updated_at"),
        )


@dataclass
class RepositoryRelease:
    """A published release of a repository."""

    tag_name: str
    draft: bool
    prerelease: bool
    name: Optional[str] = None
    body: Optional[str] = None
    created_at: Optional[str] = None
    published_at: Optional[str] = None
    assets: list[RepositoryReleaseAsset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryRelease:
        data = _mapping(data, "release")
        return cls(
            tag_name=_string(data, "tag_name"),
            draft=_flag(data, "draft"),
            prerelease=_flag(data, "prerelease"),
            name=_optional_string(data, "name"),
            body=_optional_string(data, "body"),
            created_at=_optional_string(data, "created_at"),
            published_at=_optional_string(data, "published_at"),
            assets=[RepositoryReleaseAsset.from_dict(a) for a in _list(data, "assets")],
        )

    def raw_version_string(self) -> str:
        """The tag name with any leading ``v`` characters removed."""
        return self.tag_name.lstrip("v")