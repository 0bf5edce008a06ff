"""
All configuration flags, options, settings to fine-tune the class filtering.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults).
"""
import dataclasses
from typing import Optional


@dataclasses.dataclass
class ClassSettings:

    name: str = 'kong'
    """
    The ingress class claimed by the controller.

    The objects declaring this class (via the annotations or via the spec)
    are reconciled; the objects declaring other classes are filtered out.
    """

    check_annotations: bool = True
    """
    Should the legacy ``kubernetes.io/ingress.class`` annotation
    (and its Knative counterpart) be checked when filtering the events.

    The annotation is deprecated in favour of ``spec.ingressClassName``,
    but is still used widely in the existing manifests.
    """

    check_spec: bool = True
    """
    Should the ``spec.ingressClassName`` field be checked when filtering
    the events. Only applies to the Ingress resources of all API versions.
    """


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: Optional[float] = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the discovery requests to the API server (in seconds).

    There are no retries: a failed or timed-out request is escalated
    to the caller, which decides on its own retrying policy.
    """

    connect_timeout: Optional[float] = None
    """
    A timeout for the connection establishment (in seconds).
    ``None`` means the same as ``request_timeout``, i.e. no separate limit.
    """


@dataclasses.dataclass
class FilteringSettings:
    classes: ClassSettings = dataclasses.field(default_factory=ClassSettings)
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
