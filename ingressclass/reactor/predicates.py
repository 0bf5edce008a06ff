"""
Event filters for the controllers watching a specific ingress class.

The filters are evaluated by the event-dispatching side (an informer,
a watcher, an operator framework) for every event, before the event is queued
for reconciliation. They have access to the object itself only, not to
the cluster: so they cannot know which class is currently the default one.

For this reason, the objects without any class information always pass
the filters: they might belong to the default class, and it is the job
of the reconciler (which has the cluster access) to finally decide
and to skip them if the controller's class is not the default one.

The filters are frozen values without any state, and are safe to be used
from multiple threads or tasks concurrently.
"""
import dataclasses
import logging
from typing import Any, Mapping, Optional

from ingressclass.engines import loggers
from ingressclass.reactor import matching
from ingressclass.structs import configuration

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ClassPredicates:
    """
    A set of per-event filters for one ingress class.

    The method names follow the event types: ``create``, ``update``,
    ``delete``, and ``generic`` (re-syncs and other non-change triggers).
    All single-object events are filtered the same way.

    When called directly, the set accepts the keyword arguments in the style
    of the operators' ``when=`` callbacks: ``body`` for all events, and
    ``old`` & ``new`` for the updates; unused kwargs are ignored.
    """
    class_name: str
    check_annotations: bool = True
    check_spec: bool = True

    @classmethod
    def from_settings(cls, settings: configuration.FilteringSettings) -> "ClassPredicates":
        return cls(
            class_name=settings.classes.name,
            check_annotations=settings.classes.check_annotations,
            check_spec=settings.classes.check_spec,
        )

    def check(self, body: Mapping[str, Any]) -> bool:
        """
        Check if a single object is potentially served by the class.

        This is the decision only, with no side effects. The event methods
        also log the objects they filter out.
        """
        if self.check_annotations and matching.is_ingress_class_annotation_configured(body, self.class_name):
            return True
        if self.check_spec and matching.is_ingress_class_spec_configured(body, self.class_name):
            return True
        return matching.is_ingress_class_empty(body)

    def create(self, body: Mapping[str, Any]) -> bool:
        return self._filter(body)

    def delete(self, body: Mapping[str, Any]) -> bool:
        return self._filter(body)

    def generic(self, body: Mapping[str, Any]) -> bool:
        return self._filter(body)

    def update(self, old: Mapping[str, Any], new: Mapping[str, Any]) -> bool:
        """
        Check if either the old or the new state is served by the class.

        The objects that have left the class must be reconciled one last time
        for the clean-up, the objects that have joined it -- for the set-up.
        """
        if self.check(old) or self.check(new):
            return True
        self._log_rejection(new)
        return False

    def __call__(
            self,
            *,
            body: Optional[Mapping[str, Any]] = None,
            old: Optional[Mapping[str, Any]] = None,
            new: Optional[Mapping[str, Any]] = None,
            **_: Any,
    ) -> bool:
        if old is not None and new is not None:
            return self.update(old, new)
        elif body is not None:
            return self.generic(body)
        else:
            raise TypeError("Either body=, or both old= & new= must be provided.")

    def _filter(self, body: Mapping[str, Any]) -> bool:
        if self.check(body):
            return True
        self._log_rejection(body)
        return False

    def _log_rejection(self, body: Mapping[str, Any]) -> None:
        loggers.ObjectLogger(body=body, logger=logger).debug(
            f"Filtered out: no ingress class {self.class_name!r} is declared.")


def build_class_predicates(
        class_name: str,
        *,
        check_annotations: bool = True,
        check_spec: bool = True,
) -> ClassPredicates:
    """
    Build the event filters for a controller of a specific ingress class.

    Either way of declaring the class can be turned off: e.g. to ignore
    the deprecated annotations, or the spec fields of the older clusters.
    The objects with no class information at all pass regardless.
    """
    return ClassPredicates(
        class_name=class_name,
        check_annotations=check_annotations,
        check_spec=check_spec,
    )
