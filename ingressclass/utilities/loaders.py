"""
Loading of the objects from the YAML manifests, as used by ``kubectl apply``.

Multi-document files are supported, as well as the ``kind: List``
and ``kind: IngressList`` documents (as produced by ``kubectl get -o yaml``),
which are flattened into their items.
Empty documents (e.g. after a trailing ``---``) are skipped.
"""
import collections.abc
from typing import Any, Iterable, Iterator, Mapping

import yaml


def load_objects(
        paths: Iterable[str],
) -> Iterator[Mapping[str, Any]]:
    for path in paths:
        with open(path, encoding='utf-8') as f:
            for document in yaml.safe_load_all(f):
                yield from _flatten(document, path=path)


def _flatten(document: Any, *, path: str) -> Iterator[Mapping[str, Any]]:
    if document is None:
        pass
    elif not isinstance(document, collections.abc.Mapping):
        raise ValueError(f"Not an object in {path!r}: {document!r}")
    elif str(document.get('kind', '')).endswith('List') and 'items' in document:
        for item in document.get('items') or []:
            yield from _flatten(item, path=path)
    else:
        yield document
