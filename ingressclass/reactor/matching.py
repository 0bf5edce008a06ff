"""
Matching of the objects to the ingress classes.

An object can declare its class in one of these ways, in the order
of precedence:

* ``spec.ingressClassName`` (for the Ingress resources only);
* the ``kubernetes.io/ingress.class`` annotation
  (``networking.knative.dev/ingress.class`` for Knative's Ingresses);
* nothing at all -- then it belongs to the cluster's default class, if any.

Which class is the default one is the cluster's mutable state, so it is
never detected here: the callers must provide it fresh for every check.

All functions are pure and never modify the objects.
"""
from typing import Any, Mapping, Optional

from ingressclass.structs import bodies, dicts, kinds


def matches_class(
        body: Mapping[str, Any],
        class_name: str,
        is_default: bool,
) -> bool:
    """
    Check if the object declares the class via its annotation.

    The objects with no class annotation belong to the default class.
    """
    annotations = _get_annotations(body)
    key = kinds.annotation_key_for(body)
    if key not in annotations:
        return is_default
    return annotations[key] == class_name


def matches_ingress_class_name(
        body: Mapping[str, Any],
        class_name: str,
        is_default: bool,
) -> bool:
    """
    Check if the object declares the class via its spec or its annotations.

    The explicitly declared ``spec.ingressClassName`` always wins:
    if it names another class, the object does not match even if it has
    no annotations and the checked class is the default one.

    An empty string in the field is not a class name that can be claimed
    by anyone but ``""``, so such objects are judged by their annotations.
    """
    if kinds.identify(body) is kinds.ObjectKind.INGRESS:
        spec_class_name = _get_spec_class_name(body)
        if spec_class_name is not None and spec_class_name == class_name:
            return True
        elif spec_class_name:
            return False
        elif spec_class_name is None and is_default:
            annotations = _get_annotations(body)
            if not any(key in annotations for key in kinds.CLASS_KEYS):
                return True

    return matches_class(body, class_name, is_default)


def is_ingress_class_annotation_configured(
        body: Mapping[str, Any],
        class_name: str,
) -> bool:
    """
    Check if any of the known class annotations declares the specified class.

    Note: the annotations are deprecated in favour of ``spec.ingressClassName``,
    but are still used in the wild, and by the non-Ingress resources.
    """
    annotations = _get_annotations(body)
    return any(
        key in annotations and annotations[key] == class_name
        for key in kinds.CLASS_KEYS
    )


def is_ingress_class_spec_configured(
        body: Mapping[str, Any],
        class_name: str,
) -> bool:
    """
    Check if ``spec.ingressClassName`` declares the specified class.

    Only the Ingress resources (of all API versions) have this field.
    For other kinds, the same-named field, if any, is ignored.
    """
    if not kinds.identify(body).has_class_field:
        return False
    spec_class_name = _get_spec_class_name(body)
    return spec_class_name is not None and spec_class_name == class_name


def is_ingress_class_empty(
        body: Mapping[str, Any],
) -> bool:
    """
    Check if the object has no ingress class information at all.

    Such objects belong to the default class, if there is one.
    """
    annotations = _get_annotations(body)
    if kinds.identify(body) is kinds.ObjectKind.INGRESS:
        return kinds.INGRESS_CLASS_KEY not in annotations and _get_spec_class_name(body) is None
    else:
        return not any(key in annotations for key in kinds.CLASS_KEYS)


def is_default_ingress_class(
        body: Mapping[str, Any],
) -> bool:
    """
    Check if the object is an IngressClass marked as the cluster's default.

    The marker is compared literally: ``"TRUE"`` or ``"1"`` are not true.
    """
    if kinds.identify(body) is not kinds.ObjectKind.INGRESS_CLASS:
        return False
    annotations = _get_annotations(body)
    return annotations.get(kinds.DEFAULT_CLASS_KEY) == kinds.DEFAULT_CLASS_VALUE


def _get_annotations(body: Mapping[str, Any]) -> bodies.Annotations:
    return bodies.as_body(body).metadata.annotations


def _get_spec_class_name(body: Mapping[str, Any]) -> Optional[str]:
    value = dicts.resolve(body, 'spec.ingressClassName', None)
    return value if isinstance(value, str) else None
