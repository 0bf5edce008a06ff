import dataclasses
import re
from typing import Optional

# Detect conventional API versions for some cases: e.g. in "ingresses.v1.networking.k8s.io".
# Non-conventional versions are indistinguishable from API groups ("ingresses.foo1.example.com").
# See also: https://kubernetes.io/docs/tasks/extend-kubernetes/custom-resources/custom-resource-definition-versioning/
K8S_VERSION_PATTERN = re.compile(r'^v\d+(?:(?:alpha|beta)\d+)?$')


@dataclasses.dataclass(frozen=True, eq=False, repr=False)
class Resource:
    """
    A reference to an API endpoint serving one resource kind.

    The group, version, and plural name address the endpoint and are the
    identity of the reference. The kind is what the endpoint is expected
    to serve, if known; it takes no part in the comparison.
    """

    group: str
    """
    The resource's API group; e.g. ``"networking.k8s.io"``, ``"configuration.konghq.com"``.
    For Core v1 API resources, an empty string: ``""``.
    """

    version: str
    """
    The resource's API version; e.g. ``"v1"``, ``"v1beta1"``, etc.
    """

    plural: str
    """
    The resource's plural name; e.g. ``"ingresses"``, ``"ingressclasses"``.
    """

    kind: Optional[str] = None
    """
    The resource's kind (as in YAML files); e.g. ``"Ingress"``, ``"IngressClass"``.
    """

    def __hash__(self) -> int:
        return hash((self.group, self.version, self.plural))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            self_tuple = (self.group, self.version, self.plural)
            other_tuple = (other.group, other.version, other.plural)
            return self_tuple == other_tuple
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return f'{self.plural}.{self.version}.{self.group}'.strip('.')

    @property
    def api_version(self) -> str:
        # Strip heading/trailing slashes if group is absent (e.g. for "v1").
        return f'{self.group}/{self.version}'.strip('/')

    def get_version_url(
            self,
            *,
            server: Optional[str] = None,
    ) -> str:
        """
        Build a URL of the API group/version discovery document.

        The document lists all resources served in that group/version,
        with their plural names and kinds.
        """
        path = '/api/v1' if self.group == '' and self.version == 'v1' else f'/apis/{self.api_version}'
        return path if server is None else server.rstrip('/') + '/' + path.lstrip('/')


def parse_resource(text: str) -> Resource:
    """
    Parse a ``kubectl``-style fully qualified resource name.

    The name has the form ``plural.version.group`` (e.g.
    ``ingresses.v1.networking.k8s.io``), or ``plural.v1`` for the core API.
    The version is mandatory: a specific group/version is needed to check
    it in the cluster, and no selection of a "preferred" version is done.
    """
    parts = text.split('.')
    if len(parts) < 2 or not parts[0] or not K8S_VERSION_PATTERN.match(parts[1]):
        raise ValueError(f"Resource must be specified as plural.version[.group]; got {text!r}")
    group = '.'.join(parts[2:])
    return Resource(group=group, version=parts[1], plural=parts[0])


# Some predefined API endpoints of the resources that carry the ingress classes.
INGRESSES = Resource('networking.k8s.io', 'v1', 'ingresses', kind='Ingress')
INGRESSES_V1BETA1 = Resource('networking.k8s.io', 'v1beta1', 'ingresses', kind='Ingress')
INGRESSES_EXTENSIONS = Resource('extensions', 'v1beta1', 'ingresses', kind='Ingress')
INGRESS_CLASSES = Resource('networking.k8s.io', 'v1', 'ingressclasses', kind='IngressClass')
KNATIVE_INGRESSES = Resource('networking.internal.knative.dev', 'v1alpha1', 'ingresses', kind='Ingress')
