"""
Kubernetes test helpers.

Helpers wrap a kubernetes DynamicClient and return zero-argument
functions that fetch or mutate resources, for use with expect() and
eventually(). Results are Unstructured / UnstructuredList objects, which
the conversion pipeline accepts directly.

Usage:
    from kubernetes import config
    from kubernetes.client import ApiClient
    from kubernetes.dynamic import DynamicClient

    from querymatch.assertions import eventually, jq
    from querymatch.k8s import GroupVersionKind, UnstructuredMatcher, named

    k = UnstructuredMatcher(DynamicClient(ApiClient(config.load_kube_config())))
    pod = GroupVersionKind("", "v1", "Pod")

    eventually(k.get(pod, named("web").in_namespace("default")), timeout=30).should(
        jq.match('.status.phase == "Running"')
    )
"""

# Models
from .unstructured import GroupVersionKind, Unstructured, UnstructuredList
from .keys import ObjectKey, named, namespaced_named

# Helpers
from .client import UnstructuredMatcher
from .typed import Scheme, TypedMatcher

__all__ = [
    # Models
    "GroupVersionKind",
    "Unstructured",
    "UnstructuredList",
    "ObjectKey",
    "named",
    "namespaced_named",
    # Helpers
    "UnstructuredMatcher",
    "Scheme",
    "TypedMatcher",
]
