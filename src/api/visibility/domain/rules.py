"""Visibility rules for groups and events.

Pure functions: filter builders turn an actor context into a predicate for
listings, and decision functions turn an actor context plus the flags of one
entity into a yes/no answer. Both families encode the same rules, so for any
row ``decide(flags_of(row), ctx) == filter(ctx).matches(row)``.

Rules:
- anonymous callers see nothing;
- site admins see and may modify everything;
- visible groups and events are seen by every authenticated caller;
- a hidden group is seen by its group admins;
- a hidden event is seen by its subscribers and by admins of its owning group;
- group visibility may be changed by group admins;
- event visibility may be changed by the event's creator and by admins of
  its owning group.

Group and event flags are independent. Event rules re-derive group-admin
status from the owning group rather than inheriting the group's visibility.
"""

from __future__ import annotations

from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import GroupRole
from visibility.domain.predicates import (
    And,
    Eq,
    MatchAll,
    MatchNone,
    MembershipExists,
    Or,
    Predicate,
    SubscriptionExists,
)
from visibility.domain.value_objects import EventFlags, GroupFlags

VISIBLE = "visible"


def _base_filter(context: ActorContext) -> Predicate | None:
    """Shared head of the group and event filters.

    Returns the final predicate for anonymous, site-admin and unidentified
    callers, or None when per-user disjuncts are needed.
    """
    if not context.is_authenticated:
        return MatchNone()
    if context.is_site_admin:
        return MatchAll()
    if context.user_id is None:
        return Eq(VISIBLE, True)
    return None


def group_visibility_filter(context: ActorContext) -> Predicate:
    """Build the predicate selecting the groups ``context`` may see."""
    base = _base_filter(context)
    if base is not None:
        return base

    assert context.user_id is not None
    return Or(
        (
            Eq(VISIBLE, True),
            And(
                (
                    Eq(VISIBLE, False),
                    MembershipExists(context.user_id, GroupRole.ADMIN),
                )
            ),
        )
    )


def event_visibility_filter(context: ActorContext) -> Predicate:
    """Build the predicate selecting the events ``context`` may see."""
    base = _base_filter(context)
    if base is not None:
        return base

    assert context.user_id is not None
    return Or(
        (
            Eq(VISIBLE, True),
            And((Eq(VISIBLE, False), SubscriptionExists(context.user_id))),
            And(
                (
                    Eq(VISIBLE, False),
                    MembershipExists(context.user_id, GroupRole.ADMIN),
                )
            ),
        )
    )


def group_visible_to(flags: GroupFlags | None, context: ActorContext) -> bool:
    """Decide whether ``context`` may see a group.

    Args:
        flags: The group's flags resolved for the caller, None if not found
        context: The requesting actor
    """
    if context.is_site_admin:
        return True
    if flags is None:
        return False
    if flags.visible:
        return context.is_authenticated
    return context.user_id is not None and flags.caller_is_group_admin


def event_visible_to(flags: EventFlags | None, context: ActorContext) -> bool:
    """Decide whether ``context`` may see an event.

    Args:
        flags: The event's flags resolved for the caller, None if not found
        context: The requesting actor
    """
    if context.is_site_admin:
        return True
    if flags is None:
        return False
    if flags.visible:
        return context.is_authenticated
    return context.user_id is not None and (
        flags.caller_is_subscribed or flags.caller_is_group_admin
    )


def group_visibility_modifiable_by(
    membership_role: GroupRole | None, context: ActorContext
) -> bool:
    """Decide whether ``context`` may change a group's visibility.

    Args:
        membership_role: The caller's role in the group, None if not a member
        context: The requesting actor
    """
    if context.is_site_admin:
        return True
    if context.user_id is None:
        return False
    return membership_role == GroupRole.ADMIN


def event_visibility_modifiable_by(
    flags: EventFlags | None, context: ActorContext
) -> bool:
    """Decide whether ``context`` may change an event's visibility.

    Being subscribed is not enough; the caller must have created the event
    or administer its owning group.

    Args:
        flags: The event's flags resolved for the caller, None if not found
        context: The requesting actor
    """
    if context.is_site_admin:
        return True
    if context.user_id is None or flags is None:
        return False
    return flags.created_by == context.user_id or flags.caller_is_group_admin
