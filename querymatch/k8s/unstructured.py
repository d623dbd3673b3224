"""
Map-backed Kubernetes objects.

Unstructured wraps the plain dict form of a resource (as served by the API)
and exposes the identity fields the helpers need. UnstructuredList holds a
list of them plus the list-level metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GroupVersionKind:
    """Identifies a Kubernetes resource type."""
    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        """The apiVersion string, e.g. "apps/v1" or "v1" for the core group."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)

    def list_kind(self) -> GroupVersionKind:
        """The GVK of the matching list type (kind + "List")."""
        return GroupVersionKind(self.group, self.version, f"{self.kind}List")

    def item_kind(self) -> GroupVersionKind:
        """The GVK of a list's items (kind without the "List" suffix)."""
        kind = self.kind[: -len("List")] if self.kind.endswith("List") else self.kind
        return GroupVersionKind(self.group, self.version, kind)

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


@dataclass
class Unstructured:
    """A single Kubernetes object stored as its JSON-shaped mapping."""
    object: dict[str, Any] = field(default_factory=dict)

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(
            self.object.get("apiVersion", ""), self.object.get("kind", "")
        )

    def set_group_version_kind(self, gvk: GroupVersionKind) -> None:
        self.object["apiVersion"] = gvk.api_version
        self.object["kind"] = gvk.kind

    @property
    def metadata(self) -> dict[str, Any]:
        return self.object.setdefault("metadata", {})

    @property
    def name(self) -> str | None:
        return self.object.get("metadata", {}).get("name")

    @name.setter
    def name(self, value: str) -> None:
        self.metadata["name"] = value

    @property
    def namespace(self) -> str | None:
        return self.object.get("metadata", {}).get("namespace")

    @namespace.setter
    def namespace(self, value: str | None) -> None:
        if value:
            self.metadata["namespace"] = value
        else:
            self.metadata.pop("namespace", None)


@dataclass
class UnstructuredList:
    """A list of Unstructured objects plus list-level fields (apiVersion, kind, metadata)."""
    items: list[Unstructured] = field(default_factory=list)
    object: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UnstructuredList:
        items = [Unstructured(dict(item)) for item in data.get("items") or []]
        rest = {key: value for key, value in data.items() if key != "items"}
        return cls(items=items, object=rest)

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(
            self.object.get("apiVersion", ""), self.object.get("kind", "")
        )

    def set_group_version_kind(self, gvk: GroupVersionKind) -> None:
        self.object["apiVersion"] = gvk.api_version
        self.object["kind"] = gvk.kind

    def __len__(self) -> int:
        return len(self.items)
