import asyncio
import functools
from typing import Any, Callable, List, Mapping, Optional

import aiohttp
import click

from ingressclass.clients import discovery, errors, mapping
from ingressclass.engines import loggers
from ingressclass.reactor import matching, predicates
from ingressclass.structs import bodies, configuration, references
from ingressclass.utilities import loaders

EXIT_ABSENT = 3
""" The exit code of `exists` when the resource is not served. """


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='plain')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.PLAIN,
                log_prefix: Optional[bool] = False,
                log_refkey: Optional[str] = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


@click.version_option(prog_name='ingressclass')
@click.group(name='ingressclass', context_settings=dict(
    auto_envvar_prefix='INGRESSCLASS',
))
def main() -> None:
    pass


@main.command()
@logging_options
@click.option('-c', '--class', 'class_name', type=str, required=True)
@click.option('--default/--no-default', 'is_default', default=None,
              help="Whether the class is the cluster's default one. "
                   "Detected from the IngressClasses in the files if not set.")
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def match(
        paths: List[str],
        class_name: str,
        is_default: Optional[bool],
) -> None:
    """ Check which objects in the manifests belong to the ingress class. """
    objs = list(loaders.load_objects(paths))
    if is_default is None:
        is_default = any(
            matching.is_default_ingress_class(obj) and
            bodies.as_body(obj).metadata.name == class_name
            for obj in objs
        )
    for obj in objs:
        verdict = matching.matches_ingress_class_name(obj, class_name, is_default)
        click.echo(f"{'match' if verdict else 'skip':5s} {_describe(obj)}")


@main.command(name='filter')
@logging_options
@click.option('-c', '--class', 'class_name', type=str, required=True)
@click.option('--annotations/--no-annotations', 'check_annotations', default=True)
@click.option('--spec/--no-spec', 'check_spec', default=True)
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def filter_(
        paths: List[str],
        class_name: str,
        check_annotations: bool,
        check_spec: bool,
) -> None:
    """ Check which objects in the manifests would be queued for reconciliation. """
    settings = configuration.FilteringSettings()
    settings.classes.name = class_name
    settings.classes.check_annotations = check_annotations
    settings.classes.check_spec = check_spec
    preds = predicates.ClassPredicates.from_settings(settings)
    for obj in loaders.load_objects(paths):
        verdict = preds.generic(obj)
        click.echo(f"{'pass' if verdict else 'drop':5s} {_describe(obj)}")


@main.command()
@logging_options
@click.option('-s', '--server', type=str, required=True)
@click.option('-t', '--token', type=str)
@click.option('--insecure', is_flag=True)
@click.option('--request-timeout', type=float)
@click.argument('resource')
def exists(
        resource: str,
        server: str,
        token: Optional[str],
        insecure: bool,
        request_timeout: Optional[float],
) -> None:
    """
    Check if the resource (plural.version.group) is served by the cluster.

    Exits with 0 if it is served, with 3 if it is not, and with 1 if
    the cluster could not be asked (HTTP errors, connectivity, timeouts).
    """
    try:
        ref = references.parse_resource(resource)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='RESOURCE')

    settings = configuration.FilteringSettings()
    if request_timeout is not None:
        settings.networking.request_timeout = request_timeout

    try:
        found = asyncio.run(_check_existence(
            ref, server=server, token=token, insecure=insecure, settings=settings))
    except errors.APIForbiddenError as e:
        raise click.ClickException(f"Discovery of {ref.api_version!r} is forbidden: {e.message or e.status}")
    except errors.APIError as e:
        raise click.ClickException(f"Discovery failed with HTTP {e.status}: {e.message or e}")
    except asyncio.TimeoutError:
        raise click.ClickException(f"Discovery timed out at {server}")
    except aiohttp.ClientError as e:
        raise click.ClickException(f"Discovery failed at {server}: {e!r}")

    click.echo(f"{ref!r} {'exists' if found else 'does not exist'}")
    if not found:
        raise click.exceptions.Exit(EXIT_ABSENT)


async def _check_existence(
        resource: references.Resource,
        *,
        server: str,
        token: Optional[str],
        insecure: bool,
        settings: configuration.FilteringSettings,
) -> bool:
    headers = {'Authorization': f'Bearer {token}'} if token else {}
    connector = aiohttp.TCPConnector(ssl=False) if insecure else None
    async with aiohttp.ClientSession(headers=headers, connector=connector) as session:
        mapper = mapping.DiscoveryRESTMapper(session=session, server=server, settings=settings)
        return await discovery.resource_kind_exists(resource, mapper=mapper)


def _describe(obj: Mapping[str, Any]) -> str:
    ref = bodies.build_object_reference(obj)
    namespace = ref.get('namespace')
    name = ref.get('name', '')
    what = f"{ref.get('kind', '?')}.{ref.get('apiVersion', '?')}"
    return f"{what} {namespace}/{name}" if namespace else f"{what} {name}"
