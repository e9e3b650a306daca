"""Domain layer for the visibility bounded context."""

from visibility.domain.predicates import (
    And,
    Eq,
    MatchAll,
    MatchNone,
    MembershipExists,
    Or,
    Predicate,
    RowFacts,
    SubscriptionExists,
    all_of,
    any_of,
)
from visibility.domain.rules import (
    event_visibility_filter,
    event_visibility_modifiable_by,
    event_visible_to,
    group_visibility_filter,
    group_visibility_modifiable_by,
    group_visible_to,
)
from visibility.domain.value_objects import EventFlags, GroupFlags

__all__ = [
    "And",
    "Eq",
    "EventFlags",
    "GroupFlags",
    "MatchAll",
    "MatchNone",
    "MembershipExists",
    "Or",
    "Predicate",
    "RowFacts",
    "SubscriptionExists",
    "all_of",
    "any_of",
    "event_visibility_filter",
    "event_visibility_modifiable_by",
    "event_visible_to",
    "group_visibility_filter",
    "group_visibility_modifiable_by",
    "group_visible_to",
]
