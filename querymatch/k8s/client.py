"""
Kubernetes helpers addressed by GroupVersionKind.

Each helper returns a zero-argument function so the call can be handed
to eventually() and retried until the cluster converges:

    k = UnstructuredMatcher(DynamicClient(api_client))
    pod = GroupVersionKind("", "v1", "Pod")

    eventually(k.get(pod, named("web").in_namespace("default")), timeout=30).should(
        jq.match('.status.phase == "Running"')
    )
    eventually(k.list(pod, namespace="default")).should(jq.match("length > 0"))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from kubernetes.client.exceptions import ApiException

from ..errors import ResourceError
from .keys import ObjectKey
from .unstructured import GroupVersionKind, Unstructured, UnstructuredList

if TYPE_CHECKING:
    from kubernetes.dynamic import DynamicClient

logger = logging.getLogger(__name__)


class UnstructuredMatcher:
    """
    Wraps a kubernetes DynamicClient with GVK-addressed helpers.

    Errors from the API server (ApiException and its dynamic-client
    subclasses such as NotFoundError) propagate unchanged, except from
    update(), which adds which step of the read-modify-write failed.
    """

    def __init__(self, client: DynamicClient):
        self.client = client

    def get(self, gvk: GroupVersionKind, key: ObjectKey, **kwargs: Any) -> Callable[[], Unstructured]:
        """Return a function fetching one resource."""
        def get() -> Unstructured:
            return self._get(gvk, key, **kwargs)
        return get

    def list(
        self,
        gvk: GroupVersionKind,
        namespace: str | None = None,
        label_selector: str | None = None,
        **kwargs: Any,
    ) -> Callable[[], UnstructuredList]:
        """
        Return a function listing resources of a kind.

        gvk may name the item kind ("Pod") or the list kind ("PodList").
        """
        def list_() -> UnstructuredList:
            return self._list(gvk, namespace=namespace, label_selector=label_selector, **kwargs)
        return list_

    def delete(self, gvk: GroupVersionKind, key: ObjectKey, **kwargs: Any) -> Callable[[], None]:
        """Return a function deleting one resource."""
        def delete() -> None:
            self._delete(gvk, key, **kwargs)
        return delete

    def update(
        self,
        gvk: GroupVersionKind,
        key: ObjectKey,
        update_fn: Callable[[Unstructured], None],
        **kwargs: Any,
    ) -> Callable[[], Unstructured]:
        """
        Return a function performing a read-modify-write.

        The current object is fetched, passed to update_fn to be modified in
        place, written back, and re-read. Retrying the returned function
        after a conflict starts again from a fresh read.
        """
        def update() -> Unstructured:
            return self._update(gvk, key, update_fn, **kwargs)
        return update

    # ── Calls ──────────────────────────────────────────────────────────────

    def _resource(self, gvk: GroupVersionKind) -> Any:
        return self.client.resources.get(api_version=gvk.api_version, kind=gvk.kind)

    def _get(self, gvk: GroupVersionKind, key: ObjectKey, **kwargs: Any) -> Unstructured:
        logger.debug(f"GET {gvk} {key}")
        instance = self.client.get(
            self._resource(gvk), name=key.name, namespace=key.namespace, **kwargs
        )
        obj = Unstructured(instance.to_dict())
        obj.set_group_version_kind(gvk)
        return obj

    def _list(
        self,
        gvk: GroupVersionKind,
        namespace: str | None = None,
        label_selector: str | None = None,
        **kwargs: Any,
    ) -> UnstructuredList:
        item_gvk = gvk.item_kind()
        if label_selector is not None:
            kwargs["label_selector"] = label_selector

        logger.debug(f"LIST {item_gvk} namespace={namespace}")
        instance = self.client.get(self._resource(item_gvk), namespace=namespace, **kwargs)

        result = UnstructuredList.from_dict(instance.to_dict())
        result.set_group_version_kind(item_gvk.list_kind())
        return result

    def _delete(self, gvk: GroupVersionKind, key: ObjectKey, **kwargs: Any) -> None:
        logger.info(f"Deleting {gvk} {key}")
        self.client.delete(self._resource(gvk), name=key.name, namespace=key.namespace, **kwargs)

    def _update(
        self,
        gvk: GroupVersionKind,
        key: ObjectKey,
        update_fn: Callable[[Unstructured], None],
        **kwargs: Any,
    ) -> Unstructured:
        try:
            current = self._get(gvk, key)
        except ApiException as e:
            raise ResourceError(f"failed to get resource for update: {e}") from e

        update_fn(current)

        logger.info(f"Updating {gvk} {key}")
        try:
            self.client.replace(
                self._resource(gvk), body=current.object, name=key.name,
                namespace=key.namespace, **kwargs,
            )
        except ApiException as e:
            raise ResourceError(f"failed to update resource: {e}") from e

        try:
            return self._get(gvk, key)
        except ApiException as e:
            raise ResourceError(f"failed to get updated resource: {e}") from e
