"""
Kubernetes helpers addressed by typed model objects.

The resource type comes from the object's class via a Scheme, and the key
from its metadata, so tests can reuse the models they already build:

    scheme = Scheme()
    scheme.add_known_types("v1", V1ConfigMap, V1ConfigMapList)

    k = TypedMatcher(DynamicClient(api_client), scheme)
    cm = V1ConfigMap(metadata=V1ObjectMeta(name="settings", namespace="default"))

    eventually(k.get(cm)).should(jq.match('.data.mode == "fast"'))
    eventually(k.list(V1ConfigMapList, namespace="default")).should(jq.match("length == 1"))
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable

from ..errors import SchemeError
from .client import UnstructuredMatcher
from .keys import ObjectKey
from .unstructured import GroupVersionKind, Unstructured, UnstructuredList

if TYPE_CHECKING:
    from kubernetes.dynamic import DynamicClient

# V1ConfigMap -> ConfigMap, V2beta1HorizontalPodAutoscaler -> HorizontalPodAutoscaler
_VERSION_PREFIX = re.compile(r"^V\d+(?:(?:alpha|beta)\d+)?(?=[A-Z])")


class Scheme:
    """Maps model classes to the GroupVersionKind they represent."""

    def __init__(self) -> None:
        self._kinds: dict[type, GroupVersionKind] = {}

    def add_known_type(self, model: type, gvk: GroupVersionKind) -> None:
        self._kinds[model] = gvk

    def add_known_types(self, api_version: str, *models: type) -> None:
        """
        Register models under one apiVersion, deriving each kind from the
        class name with any version prefix removed.
        """
        for model in models:
            kind = _VERSION_PREFIX.sub("", model.__name__)
            self.add_known_type(model, GroupVersionKind.from_api_version(api_version, kind))

    def object_kinds(self, obj: Any) -> list[GroupVersionKind]:
        """
        Return the GVKs for an object or model class.

        Falls back to the object's own api_version and kind attributes
        when its class is not registered.

        Raises:
            SchemeError: If no GVK can be determined
        """
        model = obj if isinstance(obj, type) else type(obj)
        if model in self._kinds:
            return [self._kinds[model]]

        api_version = getattr(obj, "api_version", None)
        kind = getattr(obj, "kind", None)
        if isinstance(api_version, str) and isinstance(kind, str) and api_version and kind:
            return [GroupVersionKind.from_api_version(api_version, kind)]

        raise SchemeError(f"no GVK found for object type {model.__name__}")


class TypedMatcher:
    """Typed-object front end to UnstructuredMatcher."""

    def __init__(self, client: DynamicClient, scheme: Scheme):
        self.scheme = scheme
        self._unstructured = UnstructuredMatcher(client)

    def get(self, obj: Any, **kwargs: Any) -> Callable[[], Unstructured]:
        """Return a function fetching the resource obj identifies."""
        def get() -> Unstructured:
            gvk, key = self._identify(obj)
            return self._unstructured._get(gvk, key, **kwargs)
        return get

    def list(
        self,
        list_type: Any,
        namespace: str | None = None,
        label_selector: str | None = None,
        **kwargs: Any,
    ) -> Callable[[], UnstructuredList]:
        """Return a function listing resources for a list model (class or instance)."""
        def list_() -> UnstructuredList:
            gvk = self.scheme.object_kinds(list_type)[0]
            return self._unstructured._list(
                gvk, namespace=namespace, label_selector=label_selector, **kwargs
            )
        return list_

    def delete(self, obj: Any, **kwargs: Any) -> Callable[[], None]:
        """Return a function deleting the resource obj identifies."""
        def delete() -> None:
            gvk, key = self._identify(obj)
            self._unstructured._delete(gvk, key, **kwargs)
        return delete

    def update(
        self,
        obj: Any,
        update_fn: Callable[[Unstructured], None],
        **kwargs: Any,
    ) -> Callable[[], Unstructured]:
        """Return a function running a read-modify-write on the resource obj identifies."""
        def update() -> Unstructured:
            gvk, key = self._identify(obj)
            return self._unstructured._update(gvk, key, update_fn, **kwargs)
        return update

    def _identify(self, obj: Any) -> tuple[GroupVersionKind, ObjectKey]:
        gvk = self.scheme.object_kinds(obj)[0]
        metadata = getattr(obj, "metadata", None)
        name = getattr(metadata, "name", None)
        if not name:
            raise SchemeError(f"{type(obj).__name__} has no metadata.name")
        return gvk, ObjectKey(name=name, namespace=getattr(metadata, "namespace", None))
