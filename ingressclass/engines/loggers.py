"""
Per-object logging and the logging configuration for the CLI.

The messages about specific objects carry a reference to that object
in the log records' extras (``k8s_ref``), so that the formatters could either
prefix the messages with the object's namespace & name (in plain text logs),
or put the reference into a separate field (in JSON logs).
"""
import copy
import enum
import logging
from typing import Any, Mapping, MutableMapping, Optional, Tuple, Union

import pythonjsonlogger.core
import pythonjsonlogger.json

from ingressclass.structs import bodies

DEFAULT_JSON_REFKEY = 'object'
""" A key for object references in JSON logs, as seen by the log parsers. """

SEVERITIES = [
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
]


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = '-json-'


class ObjectFormatter(logging.Formatter):
    """
    A text formatter, which optionally prefixes the messages about objects.

    The prefix is ``[namespace/name]`` for namespaced objects,
    and ``[name]`` for cluster-wide ones (e.g. the IngressClasses).
    """

    def __init__(self, *args: Any, prefix: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.prefix = prefix

    def format(self, record: logging.LogRecord) -> str:
        ref = getattr(record, 'k8s_ref', None)
        if self.prefix and ref is not None:
            namespace = ref.get('namespace')
            name = ref.get('name', '')
            record = copy.copy(record)  # the record is shared by all handlers
            record.msg = f"[{namespace}/{name}] {record.msg}" if namespace else f"[{name}] {record.msg}"
        return super().format(record)


class ObjectJsonFormatter(ObjectFormatter, pythonjsonlogger.json.JsonFormatter):
    """
    A JSON formatter with the object reference and severity as fields.
    """

    def __init__(
            self,
            *args: Any,
            refkey: Optional[str] = None,
            **kwargs: Any,
    ) -> None:
        reserved_attrs = set(kwargs.pop('reserved_attrs', pythonjsonlogger.core.RESERVED_ATTRS))
        kwargs.update(reserved_attrs=reserved_attrs | {'k8s_ref'})
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self.refkey = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: MutableMapping[str, Any],
            record: logging.LogRecord,
            message_dict: MutableMapping[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        ref = getattr(record, 'k8s_ref', None)
        if ref is not None:
            log_record[self.refkey] = ref
        log_record.setdefault('severity', next(
            (name for level, name in SEVERITIES if record.levelno <= level), 'fatal'))


class ObjectLogger(logging.LoggerAdapter):
    """
    A logger/adapter to carry the object identifiers for formatting.

    The internal structure is made the same as an object reference in K8s API.
    Only the identifying fields are copied, never the whole object,
    so that the log records do not hold the objects owned by others.
    """

    def __init__(
            self,
            *,
            body: Mapping[str, Any],
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger if logger is not None else objects_logger, dict(
            k8s_ref=bodies.build_object_reference(body),
        ))

    def process(
            self,
            msg: str,
            kwargs: MutableMapping[str, Any],
    ) -> Tuple[str, MutableMapping[str, Any]]:
        # The stdlib adapter replaces the call's extras; both are needed.
        kwargs["extra"] = dict(self.extra or {}, **kwargs.get('extra', {}))
        return msg, kwargs


objects_logger = logging.getLogger('ingressclass.objects')


def configure(
        debug: Optional[bool] = None,
        verbose: Optional[bool] = None,
        quiet: Optional[bool] = None,
        log_format: Union[LogFormat, str] = LogFormat.FULL,
        log_prefix: Optional[bool] = False,
        log_refkey: Optional[str] = None,
) -> None:
    """
    Send all logs to stderr, with one handler at the root logger.

    The ``asyncio`` and ``aiohttp`` logs are muted unless in the debug mode.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(make_formatter(log_format=log_format, log_prefix=log_prefix,
                                        log_refkey=log_refkey))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug or verbose else logging.WARNING if quiet else logging.INFO)

    for name in ['asyncio', 'aiohttp']:
        lowlevel = logging.getLogger(name)
        lowlevel.propagate = bool(debug)
        if not debug:
            lowlevel.handlers[:] = [logging.NullHandler()]


def make_formatter(
        log_format: Union[LogFormat, str] = LogFormat.FULL,
        log_prefix: Optional[bool] = False,
        log_refkey: Optional[str] = None,
) -> ObjectFormatter:
    """
    Make a formatter for a named format or for a custom ``%``-style one.

    Unless explicitly requested, only the text logs are prefixed:
    the JSON logs have the object reference in a separate field.
    """
    prefix = log_prefix if log_prefix is not None else log_format is not LogFormat.JSON
    if log_format is LogFormat.JSON:
        return ObjectJsonFormatter(refkey=log_refkey, prefix=prefix)
    elif isinstance(log_format, LogFormat):
        return ObjectFormatter(log_format.value, prefix=prefix)
    elif isinstance(log_format, str):
        return ObjectFormatter(log_format, prefix=prefix)
    else:
        raise ValueError(f"Unsupported log format: {log_format!r}")
