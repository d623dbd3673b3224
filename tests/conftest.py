"""Shared fixtures: isolated converter registry, formatting config, fake dynamic client."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

import pytest
from kubernetes.client.exceptions import ApiException

from querymatch.config import FormatConfig, configure, get_config
from querymatch.conversion import BUILTIN_CONVERTERS, ConverterRegistry, default_registry


@pytest.fixture
def registry() -> ConverterRegistry:
    """A registry with only the built-in converters, independent of the default one."""
    return ConverterRegistry(BUILTIN_CONVERTERS)


@pytest.fixture
def format_config():
    """Restore the process-wide formatting config after the test."""
    previous = get_config()
    yield configure
    configure(previous)


@pytest.fixture(autouse=True)
def _default_format_config():
    configure(FormatConfig())


@pytest.fixture(autouse=True)
def _default_converters(monkeypatch):
    """Drop converters a test registers on the process-wide registry."""
    monkeypatch.setattr(default_registry, "_converters", default_registry.converters)


# ─────────────────────────────────────────────────────────────────────────────
# Fake kubernetes DynamicClient
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FakeResource:
    api_version: str
    kind: str


class FakeInstance:
    """Stands in for kubernetes.dynamic.ResourceInstance."""

    def __init__(self, data: dict[str, Any]):
        self._data = data

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)


class FakeResources:
    def get(self, api_version: str, kind: str) -> FakeResource:
        return FakeResource(api_version, kind)


class FakeDynamicClient:
    """In-memory object store with the DynamicClient call signatures the helpers use."""

    def __init__(self) -> None:
        self.resources = FakeResources()
        self.objects: dict[tuple[str, str, str | None, str], dict[str, Any]] = {}
        self.calls: list[tuple[str, str, str | None]] = []
        self.fail_replace = False

    def add(self, obj: dict[str, Any]) -> None:
        meta = obj.setdefault("metadata", {})
        meta.setdefault("resourceVersion", "1")
        key = (obj["apiVersion"], obj["kind"], meta.get("namespace"), meta["name"])
        self.objects[key] = copy.deepcopy(obj)

    def get(self, resource: FakeResource, name: str | None = None,
            namespace: str | None = None, label_selector: str | None = None, **kwargs: Any):
        self.calls.append(("get", resource.kind, name))
        if name is not None:
            key = (resource.api_version, resource.kind, namespace, name)
            if key not in self.objects:
                raise ApiException(status=404, reason="Not Found")
            return FakeInstance(self.objects[key])

        items = [
            obj for (api_version, kind, ns, _), obj in sorted(self.objects.items())
            if api_version == resource.api_version and kind == resource.kind
            and (namespace is None or ns == namespace)
            and _selects(label_selector, obj)
        ]
        return FakeInstance({
            "apiVersion": resource.api_version,
            "kind": f"{resource.kind}List",
            "metadata": {"resourceVersion": "7"},
            "items": items,
        })

    def delete(self, resource: FakeResource, name: str | None = None,
               namespace: str | None = None, **kwargs: Any) -> None:
        self.calls.append(("delete", resource.kind, name))
        key = (resource.api_version, resource.kind, namespace, name)
        if key not in self.objects:
            raise ApiException(status=404, reason="Not Found")
        del self.objects[key]

    def replace(self, resource: FakeResource, body: dict[str, Any], name: str | None = None,
                namespace: str | None = None, **kwargs: Any) -> FakeInstance:
        self.calls.append(("replace", resource.kind, name))
        if self.fail_replace:
            raise ApiException(status=409, reason="Conflict")
        stored = copy.deepcopy(body)
        meta = stored["metadata"]
        meta["resourceVersion"] = str(int(meta.get("resourceVersion", "1")) + 1)
        self.objects[(resource.api_version, resource.kind, namespace, name)] = stored
        return FakeInstance(stored)


def _selects(label_selector: str | None, obj: dict[str, Any]) -> bool:
    if not label_selector:
        return True
    labels = obj.get("metadata", {}).get("labels", {})
    for requirement in label_selector.split(","):
        key, _, value = requirement.partition("=")
        if labels.get(key) != value:
            return False
    return True


@pytest.fixture
def dynamic_client() -> FakeDynamicClient:
    client = FakeDynamicClient()
    client.add({
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {"name": "settings", "namespace": "default", "labels": {"app": "web"}},
        "data": {"mode": "fast"},
    })
    client.add({
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {"name": "other", "namespace": "default", "labels": {"app": "db"}},
        "data": {"mode": "slow"},
    })
    client.add({
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": "web", "namespace": "prod"},
        "spec": {"replicas": 3},
    })
    return client
