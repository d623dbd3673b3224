"""
Object keys for addressing Kubernetes resources.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ObjectKey:
    """Name plus optional namespace (None for cluster-scoped resources)."""
    name: str
    namespace: str | None = None

    def in_namespace(self, namespace: str) -> ObjectKey:
        """Return a copy of the key in the given namespace."""
        return replace(self, namespace=namespace)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name


def named(name: str) -> ObjectKey:
    """Key for a resource by name; chain .in_namespace() for namespaced ones."""
    return ObjectKey(name=name)


def namespaced_named(namespace: str, name: str) -> ObjectKey:
    """Key for a namespaced resource."""
    return ObjectKey(name=name, namespace=namespace)
