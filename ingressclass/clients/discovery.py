from ingressclass.clients import errors, mapping
from ingressclass.structs import references


async def resource_kind_exists(
        resource: references.Resource,
        *,
        mapper: mapping.RESTMapper,
) -> bool:
    """
    Check if the resource is served by the cluster (e.g. its CRD is installed).

    Only the explicit absence of the kind is reported as ``False``.
    All other errors of the mapper (connectivity, permissions, timeouts)
    are escalated: they say nothing about the existence of the resource,
    and should not make a controller believe that the CRDs are absent.
    """
    try:
        await mapper.kind_for(resource)
    except errors.NoKindMatchError:
        return False
    else:
        return True
