"""
The errors of the API discovery.

Two different things can go wrong when the cluster is asked about a kind:

* The cluster answers that nothing is served there: `NoKindMatchError`.
  This is an answer, not a failure, so it is not an `APIError`.
* The cluster does not answer properly: `APIError` and its descendants
  for the HTTP-level failures; the connectivity issues and timeouts
  are escalated from ``aiohttp`` as is.

``aiohttp``'s own response errors are chained as the causes of `APIError`,
but never leak to the callers as the errors of this package.
"""
import collections.abc
import json
from typing import Any, Mapping, Optional

import aiohttp

from ingressclass.structs import references


class APIError(Exception):
    """
    The API responded with an HTTP error.

    Only the K8s ``Status`` payloads are kept: other payloads can be
    the pages of the proxies and balancers, with whatever content in them.
    """

    def __init__(
            self,
            payload: Optional[Mapping[str, Any]],
            *,
            status: int,
    ) -> None:
        self.status = status
        self.payload = payload
        super().__init__(self.message, payload)

    @property
    def code(self) -> Optional[int]:
        return self.payload.get('code') if self.payload else None

    @property
    def message(self) -> Optional[str]:
        return self.payload.get('message') if self.payload else None

    @property
    def details(self) -> Optional[Mapping[str, Any]]:
        return self.payload.get('details') if self.payload else None


class APIForbiddenError(APIError):
    pass


class APINotFoundError(APIError):
    pass


class NoKindMatchError(LookupError):
    """ No kind is registered in the cluster for the requested resource. """

    def __init__(self, resource: references.Resource) -> None:
        super().__init__(f"No kind is registered for the resource {resource!r}.")
        self.resource = resource


async def check_response(
        response: aiohttp.ClientResponse,
) -> None:
    """ Raise an `APIError` for an HTTP error response; let successes pass. """
    if response.status < 400:
        return

    # The payload must be read before raise_for_status() releases the response.
    payload: Optional[Mapping[str, Any]]
    try:
        payload = await response.json()
    except (json.JSONDecodeError, aiohttp.ContentTypeError, aiohttp.ClientConnectionError):
        payload = None
    if not isinstance(payload, collections.abc.Mapping) or payload.get('kind') != 'Status':
        payload = None

    cls = (
        APIForbiddenError if response.status == 403 else
        APINotFoundError if response.status == 404 else
        APIError
    )
    try:
        response.raise_for_status()
    except aiohttp.ClientResponseError as e:
        raise cls(payload, status=response.status) from e


async def parse_response(
        response: aiohttp.ClientResponse,
) -> Any:
    """ Return the JSON-decoded payload of a successful response, or raise. """
    await check_response(response)
    return await response.json()
