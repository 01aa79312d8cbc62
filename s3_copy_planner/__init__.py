"""
S3 copy planner package.

Turns copy instructions into a resolved, destination annotated object list and
gates the copy on archived objects being thawed.
"""

from . import config, destination, errors, expander, models, prober, resolver, thaw_gate, thaw_policy, validation
from .destination import compute_destination_key
from .errors import (
    CopyPlannerError,
    DeadlineExceededError,
    SourceKeyNotAnObjectError,
    SourceObjectNotFound,
    StillThawingError,
    ValidationError,
    WildcardExpansionEmptyError,
    WildcardExpansionMaximumError,
)
from .models import BatchInput, ResolvedObject, SourceItem, ThawItem
from .resolver import CopyPlanner, order_resolved, resolve_event
from .thaw_gate import Ready, StillThawing, ThawGate, gate_event
from .thaw_policy import ThawPolicy

__all__ = [
    "BatchInput",
    "CopyPlanner",
    "CopyPlannerError",
    "DeadlineExceededError",
    "Ready",
    "ResolvedObject",
    "SourceItem",
    "SourceKeyNotAnObjectError",
    "SourceObjectNotFound",
    "StillThawing",
    "StillThawingError",
    "ThawGate",
    "ThawItem",
    "ThawPolicy",
    "ValidationError",
    "WildcardExpansionEmptyError",
    "WildcardExpansionMaximumError",
    "compute_destination_key",
    "config",
    "destination",
    "errors",
    "expander",
    "gate_event",
    "models",
    "order_resolved",
    "prober",
    "resolve_event",
    "resolver",
    "thaw_gate",
    "thaw_policy",
    "validation",
]
