"""Declarative visibility predicates.

A predicate is a small immutable expression tree describing which rows of a
listing an actor may see. The persistence layer compiles it into its native
query form (see ``visibility.infrastructure.predicate_compiler``); the same
tree can be evaluated in-process against a ``RowFacts`` projection of one row.

Membership and subscription nodes are relative to the row being filtered:

- for a Group row, "the row's group" is the group itself;
- for an Event row, it is the event's owning group, and subscriptions are
  the event's attendee list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from shared_kernel.authorization.types import GroupRole


@dataclass(frozen=True)
class RowFacts:
    """Everything a predicate may observe about one candidate row.

    Attributes:
        fields: Column values of the row (e.g. ``{"visible": False}``)
        group_roles: Role per user id in the row's group
        subscribers: User ids subscribed to the row (events only)
    """

    fields: Mapping[str, Any]
    group_roles: Mapping[str, GroupRole] = field(default_factory=dict)
    subscribers: frozenset[str] = frozenset()


class Predicate:
    """Base class of all predicate nodes."""

    def matches(self, facts: RowFacts) -> bool:
        """Evaluate the predicate against one row."""
        raise NotImplementedError


@dataclass(frozen=True)
class MatchAll(Predicate):
    """Matches every row."""

    def matches(self, facts: RowFacts) -> bool:
        return True


@dataclass(frozen=True)
class MatchNone(Predicate):
    """Matches no row.

    The fail-closed sentinel: an explicit "nothing" rather than an empty
    condition that a query layer could read as "no restriction".
    """

    def matches(self, facts: RowFacts) -> bool:
        return False


@dataclass(frozen=True)
class Eq(Predicate):
    """Column equality."""

    field: str
    value: Any

    def matches(self, facts: RowFacts) -> bool:
        return facts.fields[self.field] == self.value


@dataclass(frozen=True)
class And(Predicate):
    """Conjunction. An empty conjunction matches every row."""

    operands: tuple[Predicate, ...]

    def matches(self, facts: RowFacts) -> bool:
        return all(operand.matches(facts) for operand in self.operands)


@dataclass(frozen=True)
class Or(Predicate):
    """Disjunction. An empty disjunction matches no row."""

    operands: tuple[Predicate, ...]

    def matches(self, facts: RowFacts) -> bool:
        return any(operand.matches(facts) for operand in self.operands)


@dataclass(frozen=True)
class MembershipExists(Predicate):
    """The user holds a membership in the row's group.

    Attributes:
        user_id: The member to look for
        role: Required role, or None for any role
    """

    user_id: str
    role: GroupRole | None = None

    def matches(self, facts: RowFacts) -> bool:
        held = facts.group_roles.get(self.user_id)
        if held is None:
            return False
        return self.role is None or held == self.role


@dataclass(frozen=True)
class SubscriptionExists(Predicate):
    """The user is subscribed to the row (an event)."""

    user_id: str

    def matches(self, facts: RowFacts) -> bool:
        return self.user_id in facts.subscribers


def all_of(*operands: Predicate) -> Predicate:
    """Combine operands with AND, flattening trivial cases."""
    if any(isinstance(operand, MatchNone) for operand in operands):
        return MatchNone()
    remaining = tuple(op for op in operands if not isinstance(op, MatchAll))
    if not remaining:
        return MatchAll()
    if len(remaining) == 1:
        return remaining[0]
    return And(remaining)


def any_of(*operands: Predicate) -> Predicate:
    """Combine operands with OR, flattening trivial cases."""
    if any(isinstance(operand, MatchAll) for operand in operands):
        return MatchAll()
    remaining = tuple(op for op in operands if not isinstance(op, MatchNone))
    if not remaining:
        return MatchNone()
    if len(remaining) == 1:
        return remaining[0]
    return Or(remaining)
