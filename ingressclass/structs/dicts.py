"""
Tolerant access to the nested fields of the raw objects.

The objects come either from the API or from the hand-written manifests.
The latter often contain keys with no value (``annotations:``, ``spec:``),
which are decoded as ``None``; or even scalars where a dict is expected.
For the class decisions, all of these are the same as the absent fields.
"""
import collections.abc
from typing import Any, Iterator, Mapping, Sequence, TypeVar, Union

FieldPath = Union[str, Sequence[str]]

_T = TypeVar('_T')


def resolve(
        d: Any,
        field: FieldPath,
        default: _T,
) -> Union[Any, _T]:
    """
    Dig into a nested field, or return the default if it cannot be reached.

    The dotted notation (``"spec.ingressClassName"``) is for the plain keys.
    The keys with dots in them (the annotation keys) go as a sequence.
    """
    path = field.split('.') if isinstance(field, str) else field
    for key in path:
        if not isinstance(d, collections.abc.Mapping) or key not in d:
            return default
        d = d[key]
    return d


class MappingView(Mapping[str, Any]):
    """
    A read-only dict of a nested field, which is empty if not reachable.

    The view is resolved on every access, so it follows the source object.
    Nothing is ever created in the source: e.g. no ``.setdefault('spec', {})``
    on the objects owned by the callers.
    """

    def __init__(self, src: Mapping[str, Any], path: FieldPath = ()) -> None:
        super().__init__()
        self._src = src
        self._path = path

    def __repr__(self) -> str:
        return repr(dict(self))

    def __len__(self) -> int:
        return len(self._target())

    def __iter__(self) -> Iterator[str]:
        return iter(self._target())

    def __getitem__(self, key: str) -> Any:
        return self._target()[key]

    def _target(self) -> Mapping[str, Any]:
        value = resolve(self._src, self._path, None)
        return value if isinstance(value, collections.abc.Mapping) else {}
