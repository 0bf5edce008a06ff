"""
Recognised kinds of the class-carrying objects, and their annotation keys.

Historically, the ingress class was declared via an annotation; later, via
the ``spec.ingressClassName`` field of the Ingress resource. Knative's
Ingress-like resources have never followed either convention and use
their own annotation key with the same meaning.

Only a small closed set of kinds is recognised. Everything else falls into
`ObjectKind.OTHER` and is treated conservatively: annotations only, with the
standard key.
"""
import enum
from typing import Any, Mapping, Tuple

from ingressclass.structs import references

INGRESS_CLASS_KEY = 'kubernetes.io/ingress.class'
KNATIVE_INGRESS_CLASS_KEY = 'networking.knative.dev/ingress.class'
CLASS_KEYS = (INGRESS_CLASS_KEY, KNATIVE_INGRESS_CLASS_KEY)

DEFAULT_CLASS_KEY = 'ingressclass.kubernetes.io/is-default-class'
DEFAULT_CLASS_VALUE = 'true'


class ObjectKind(enum.Enum):
    INGRESS = enum.auto()
    INGRESS_V1BETA1 = enum.auto()
    INGRESS_EXTENSIONS = enum.auto()
    KNATIVE_INGRESS = enum.auto()
    INGRESS_CLASS = enum.auto()
    OTHER = enum.auto()

    @property
    def has_class_field(self) -> bool:
        """ Whether the kind can declare its class via ``spec.ingressClassName``. """
        return self in INGRESS_KINDS


INGRESS_KINDS = frozenset({
    ObjectKind.INGRESS,
    ObjectKind.INGRESS_V1BETA1,
    ObjectKind.INGRESS_EXTENSIONS,
})

_KNOWN_KINDS: Mapping[Tuple[str, str], ObjectKind] = {
    (references.INGRESSES.api_version, 'Ingress'): ObjectKind.INGRESS,
    (references.INGRESSES_V1BETA1.api_version, 'Ingress'): ObjectKind.INGRESS_V1BETA1,
    (references.INGRESSES_EXTENSIONS.api_version, 'Ingress'): ObjectKind.INGRESS_EXTENSIONS,
    (references.KNATIVE_INGRESSES.api_version, 'Ingress'): ObjectKind.KNATIVE_INGRESS,
    (references.INGRESS_CLASSES.api_version, 'IngressClass'): ObjectKind.INGRESS_CLASS,
}


def identify(body: Mapping[str, Any]) -> ObjectKind:
    """
    Identify the object's kind by its ``apiVersion`` & ``kind`` fields.

    Objects with these fields absent or unrecognised are `ObjectKind.OTHER`.
    """
    api_version = body.get('apiVersion')
    kind = body.get('kind')
    if not isinstance(api_version, str) or not isinstance(kind, str):
        return ObjectKind.OTHER
    return _KNOWN_KINDS.get((api_version, kind), ObjectKind.OTHER)


def annotation_key_for(body: Mapping[str, Any]) -> str:
    """
    Get the annotation key that declares the class for this kind of objects.
    """
    if identify(body) is ObjectKind.KNATIVE_INGRESS:
        return KNATIVE_INGRESS_CLASS_KEY
    else:
        return INGRESS_CLASS_KEY
