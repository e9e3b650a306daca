"""Infrastructure adapters for the visibility bounded context."""

from visibility.infrastructure.predicate_compiler import (
    EVENT_TARGET,
    GROUP_TARGET,
    CompileTarget,
    compile_predicate,
)
from visibility.infrastructure.store import SqlAlchemyVisibilityStore

__all__ = [
    "CompileTarget",
    "EVENT_TARGET",
    "GROUP_TARGET",
    "SqlAlchemyVisibilityStore",
    "compile_predicate",
]
