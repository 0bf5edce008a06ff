import json
import logging
import re
from unittest.mock import AsyncMock, MagicMock

import aiohttp.test_utils
import aiohttp.web
import pytest

from ingressclass.structs.configuration import FilteringSettings


def pytest_configure(config):
    # Warnings from the testing tools out of our control should not fail the tests.
    config.addinivalue_line('filterwarnings', 'ignore::DeprecationWarning:aiohttp')


def _make_body(
        api_version='networking.k8s.io/v1',
        kind='Ingress',
        *,
        name='name1',
        namespace='ns1',
        annotations=None,
        class_name=None,
        with_spec_field=None,
):
    """
    Build a raw object as JSON-decoded from the API.

    ``class_name=None`` means the absent ``spec.ingressClassName``,
    unless explicitly requested to be present as a null (``with_spec_field=True``).
    """
    body = {'apiVersion': api_version, 'kind': kind, 'metadata': {'name': name}}
    if namespace is not None:
        body['metadata']['namespace'] = namespace
    if annotations is not None:
        body['metadata']['annotations'] = dict(annotations)
    if class_name is not None or with_spec_field:
        body['spec'] = {'ingressClassName': class_name}
    return body


@pytest.fixture()
def make_body():
    return _make_body


@pytest.fixture()
def settings():
    return FilteringSettings()


@pytest.fixture()
def responses():
    """
    The API server's responses by path (no query), to be filled by the tests.

    Every value is a coroutine function accepting a request (see `resp_mocker`).
    All unknown paths respond with 404 as K8s API does.
    """
    return {}


@pytest.fixture()
async def api_server(responses):
    async def dispatch(request):
        handler = responses.get(request.path)
        if handler is None:
            return aiohttp.web.json_response(status=404, data={
                'apiVersion': 'v1', 'kind': 'Status', 'status': 'Failure', 'code': 404,
                'reason': 'NotFound', 'message': 'the server could not find the requested resource',
            })
        return await handler(request)

    app = aiohttp.web.Application()
    app.router.add_route('*', '/{tail:.*}', dispatch)
    async with aiohttp.test_utils.TestServer(app) as server:
        yield server


@pytest.fixture()
def server_url(api_server):
    return str(api_server.make_url('/')).rstrip('/')


@pytest.fixture()
async def session(api_server):
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture()
def resp_mocker():
    """
    A factory of server-side callbacks for the fake API server with spying.

    The value of the fixture is a function, which return a coroutine mock.
    That coroutine mock should be put into `responses` under a specific path.
    When called, it calls the mock defined by the function's arguments
    (specifically, return_value or side_effects).

    The difference from passing the plain handlers to `responses` is that
    it is possible to assert on whether the response was handled
    by that callback at all, especially if there are multiple responses.

    Sample usage::

        def test_me(resp_mocker, responses):
            callback = resp_mocker(return_value={'a': 'b'})
            responses['/path'] = callback
            do_something()
            assert callback.call_count == 1

    The dicts are sent as JSON with status 200; the responses are sent as is.
    """
    def resp_maker(*args, **kwargs):
        actual_response = MagicMock(*args, **kwargs)

        async def resp_mock_effect(request):
            response = actual_response()
            if isinstance(response, aiohttp.web.StreamResponse):
                return response
            return aiohttp.web.Response(text=json.dumps(response), content_type='application/json')

        return AsyncMock(side_effect=resp_mock_effect)
    return resp_maker


@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    caplog.set_level(logging.DEBUG)

    def assert_logs_fn(patterns, prohibited=[], strict=False):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            # The expected pattern is at position 0.
            # Looking-ahead: if one of the following patterns matches, while the
            # 0th does not, then the log message is missing, and we fail the test.
            for idx, pattern in enumerate(remaining_patterns):
                m = re.search(pattern, message)
                if m:
                    if idx == 0:
                        remaining_patterns[:1] = []
                        break  # out of `remaining_patterns` cycle
                    else:
                        skipped_patterns = remaining_patterns[:idx]
                        raise AssertionError(f"Few patterns were skipped: {skipped_patterns!r}")
                elif strict:
                    raise AssertionError(f"Unexpected log message: {message!r}")

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                m = re.search(pattern, message)
                if m:
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        # If all patterns have been matched in order, we are done.
        # if some are left, but the messages are over, then we fail.
        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn
