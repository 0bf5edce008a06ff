"""
The main module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the package's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from ingressclass.clients.discovery import (
    resource_kind_exists,
)
from ingressclass.clients.errors import (
    APIError,
    APIForbiddenError,
    APINotFoundError,
    NoKindMatchError,
)
from ingressclass.clients.mapping import (
    RESTMapper,
    StaticRESTMapper,
    DiscoveryRESTMapper,
)
from ingressclass.engines.loggers import (
    LogFormat,
    ObjectLogger,
    configure,
)
from ingressclass.reactor.matching import (
    matches_class,
    matches_ingress_class_name,
    is_ingress_class_annotation_configured,
    is_ingress_class_spec_configured,
    is_ingress_class_empty,
    is_default_ingress_class,
)
from ingressclass.reactor.predicates import (
    ClassPredicates,
    build_class_predicates,
)
from ingressclass.structs.bodies import (
    RawBody,
    Meta,
    Spec,
    Body,
    Annotations,
    ObjectReference,
    build_object_reference,
)
from ingressclass.structs.configuration import (
    ClassSettings,
    NetworkingSettings,
    FilteringSettings,
)
from ingressclass.structs.kinds import (
    ObjectKind,
    INGRESS_CLASS_KEY,
    KNATIVE_INGRESS_CLASS_KEY,
    DEFAULT_CLASS_KEY,
    identify,
    annotation_key_for,
)
from ingressclass.structs.references import (
    Resource,
    parse_resource,
    INGRESSES,
    INGRESS_CLASSES,
    KNATIVE_INGRESSES,
)

__all__ = [
    'resource_kind_exists',
    'APIError',
    'APIForbiddenError',
    'APINotFoundError',
    'NoKindMatchError',
    'RESTMapper',
    'StaticRESTMapper',
    'DiscoveryRESTMapper',
    'LogFormat',
    'ObjectLogger',
    'configure',
    'matches_class',
    'matches_ingress_class_name',
    'is_ingress_class_annotation_configured',
    'is_ingress_class_spec_configured',
    'is_ingress_class_empty',
    'is_default_ingress_class',
    'ClassPredicates',
    'build_class_predicates',
    'RawBody',
    'Meta',
    'Spec',
    'Body',
    'Annotations',
    'ObjectReference',
    'build_object_reference',
    'ClassSettings',
    'NetworkingSettings',
    'FilteringSettings',
    'ObjectKind',
    'INGRESS_CLASS_KEY',
    'KNATIVE_INGRESS_CLASS_KEY',
    'DEFAULT_CLASS_KEY',
    'identify',
    'annotation_key_for',
    'Resource',
    'parse_resource',
    'INGRESSES',
    'INGRESS_CLASSES',
    'KNATIVE_INGRESSES',
]
