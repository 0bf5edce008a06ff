"""
Resolution of the resource references to the kinds served by the cluster.

A "REST mapper" answers which kind is served at a specific API endpoint
(group, version, plural), or that nothing is served there at all --
as `errors.NoKindMatchError`. All other failures, such as the connectivity
issues or the permission errors, are escalated as is: they are not answers.
"""
import asyncio
import logging
from typing import Collection, Dict, Mapping, Optional

import aiohttp
from typing_extensions import Protocol

from ingressclass.clients import errors
from ingressclass.structs import configuration, references

logger = logging.getLogger(__name__)


class RESTMapper(Protocol):
    async def kind_for(self, resource: references.Resource) -> str: ...


class StaticRESTMapper:
    """
    A mapper over the pre-defined resources, e.g. as scanned before.
    """

    def __init__(self, resources: Collection[references.Resource]) -> None:
        super().__init__()
        self._resources = {resource: resource for resource in resources}

    async def kind_for(self, resource: references.Resource) -> str:
        try:
            kind = self._resources[resource].kind
        except KeyError:
            raise errors.NoKindMatchError(resource) from None
        if kind is None:
            raise errors.NoKindMatchError(resource)
        return kind


class DiscoveryRESTMapper:
    """
    A mapper that looks into the cluster's API discovery documents.

    The session is owned by the caller, and must be pre-configured with
    the credentials & SSL settings of the cluster. The server's URL is
    the root URL of the API, e.g. ``https://10.96.0.1:443``.

    The discovered group/versions are remembered, so that multiple checks
    of the same group/version cost only one request. The missing ones
    are not remembered, as they can be installed later (e.g. the CRDs).
    """

    def __init__(
            self,
            *,
            session: aiohttp.ClientSession,
            server: str,
            settings: Optional[configuration.FilteringSettings] = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._server = server
        self._settings = settings if settings is not None else configuration.FilteringSettings()
        self._discovered: Dict[str, Mapping[str, references.Resource]] = {}
        self._lock: Optional[asyncio.Lock] = None

    async def kind_for(self, resource: references.Resource) -> str:
        served = await self._discover(resource)
        if served is None or resource.plural not in served or served[resource.plural].kind is None:
            raise errors.NoKindMatchError(resource)
        return str(served[resource.plural].kind)

    def reset(self) -> None:
        """ Forget all discovered group/versions; e.g. when the CRDs change. """
        self._discovered.clear()

    async def _discover(
            self,
            resource: references.Resource,
    ) -> Optional[Mapping[str, references.Resource]]:
        api_version = resource.api_version
        if api_version not in self._discovered:
            # Created on first use: it must belong to the running loop, not to the constructing one.
            if self._lock is None:
                self._lock = asyncio.Lock()
            async with self._lock:
                if api_version not in self._discovered:
                    served = await self._read_version(resource)
                    if served is None:
                        return None
                    self._discovered[api_version] = served
        return self._discovered[api_version]

    async def _read_version(
            self,
            resource: references.Resource,
    ) -> Optional[Mapping[str, references.Resource]]:
        url = resource.get_version_url(server=self._server)
        timeout = aiohttp.ClientTimeout(
            total=self._settings.networking.request_timeout,
            sock_connect=self._settings.networking.connect_timeout,
        )
        try:
            response = await self._session.get(url, timeout=timeout)
            async with response:
                rsp = await errors.parse_response(response)
        except errors.APINotFoundError:
            # This happens when the group/version is not served at all: e.g. the CRDs are absent,
            # or the last and the only resource of a group/version has been deleted.
            logger.debug(f"No resources are served in {resource.api_version!r}.")
            return None

        served = {
            info['name']: references.Resource(
                group=resource.group,
                version=resource.version,
                plural=info['name'],
                kind=info.get('kind'),
            )
            for info in rsp.get('resources', [])
            if '/' not in info['name']
        }
        logger.debug(f"Discovered {len(served)} resources in {resource.api_version!r}.")
        return served
