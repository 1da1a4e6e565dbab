"""mrosniff — look for class composition code smells.

Builds the inheritance hierarchy above a class, derives its left-most,
depth-first method search paths and reports overridden, unreachable and
exported methods plus multiple inheritance.
"""

from .detectors import UnreachableMethod
from .errors import (
    CircularInheritance,
    InvalidArgument,
    NotFound,
    SniffError,
    UnbalancedInput,
)
from .providers import DeclarativeProvider, ReflectionProvider, RuntimeProvider
from .session import HierarchySniff, combine_sniff_graphs, sniffs_from_namespace

__version__ = "0.4.0"

__all__ = [
    "CircularInheritance",
    "DeclarativeProvider",
    "HierarchySniff",
    "InvalidArgument",
    "NotFound",
    "ReflectionProvider",
    "RuntimeProvider",
    "SniffError",
    "UnbalancedInput",
    "UnreachableMethod",
    "combine_sniff_graphs",
    "sniffs_from_namespace",
]
