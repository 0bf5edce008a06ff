"""
The views of the objects as they come from the Kubernetes API or manifests.

The objects are dicts or dict-like classes as JSON-decoded from the API
(or YAML-decoded from the manifests). They are never modified here:
they are owned by whoever delivers the events (an informer, a watcher,
an operator framework), and can be shared between concurrent filters.
"""
from typing import Any, Mapping, Optional, cast

from typing_extensions import TypedDict

from ingressclass.structs import dicts

Annotations = Mapping[str, str]


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    annotations: Annotations


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta
    spec: Mapping[str, Any]


class Meta(dicts.MappingView):

    def __init__(self, src: Mapping[str, Any]) -> None:
        super().__init__(src, 'metadata')
        self._annotations = dicts.MappingView(src, ('metadata', 'annotations'))

    @property
    def annotations(self) -> Annotations:
        return self._annotations

    @property
    def name(self) -> Optional[str]:
        return cast(Optional[str], self.get('name'))

    @property
    def namespace(self) -> Optional[str]:
        return cast(Optional[str], self.get('namespace'))


class Spec(dicts.MappingView):
    def __init__(self, src: Mapping[str, Any]) -> None:
        super().__init__(src, 'spec')


class Body(dicts.MappingView):

    def __init__(self, src: Mapping[str, Any]) -> None:
        super().__init__(src)
        self._meta = Meta(src)
        self._spec = Spec(src)

    @property
    def metadata(self) -> Meta:
        return self._meta

    @property
    def spec(self) -> Spec:
        return self._spec


def as_body(obj: Mapping[str, Any]) -> Body:
    """ Wrap a raw object into a `Body` unless it is already wrapped. """
    return obj if isinstance(obj, Body) else Body(obj)


class ObjectReference(TypedDict, total=False):
    apiVersion: str
    kind: str
    namespace: Optional[str]
    name: str
    uid: str


def build_object_reference(
        body: Mapping[str, Any],
) -> ObjectReference:
    """
    Construct an object reference for the log records.

    Only the identifying fields are taken. Some of them can be absent:
    e.g. ``namespace`` for the IngressClasses, or ``uid`` for the objects
    loaded from the manifests instead of the cluster.
    """
    meta = Meta(body)
    ref = dict(
        apiVersion=body.get('apiVersion'),
        kind=body.get('kind'),
        name=meta.get('name'),
        uid=meta.get('uid'),
        namespace=meta.get('namespace'),
    )
    return cast(ObjectReference, {key: val for key, val in ref.items() if val})
