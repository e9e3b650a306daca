"""Compile visibility predicates into SQLAlchemy boolean clauses.

Membership and subscription nodes become correlated EXISTS sub-selects
against ``user_groups`` and ``event_subscriptions``, so a listing is filtered
in the same statement that selects it:

    stmt = select(GroupModel).where(compile_predicate(predicate, GROUP_TARGET))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, and_, exists, false, or_, true

from events.infrastructure.models import EventModel, EventSubscriptionModel
from iam.infrastructure.models import GroupModel, UserGroupModel
from shared_kernel.authorization.types import GroupRole, ResourceType
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
from visibility.ports.exceptions import UnsupportedPredicateError


@dataclass(frozen=True)
class CompileTarget:
    """The entity a predicate filters.

    Attributes:
        resource_type: Kind of row being filtered
        model: ORM model whose columns ``Eq`` nodes refer to
        group_id_column: Column naming the row's group (its own id for groups)
        event_id_column: Column naming the row as an event, None for groups
    """

    resource_type: ResourceType
    model: Any
    group_id_column: Any
    event_id_column: Any | None = None

    def column(self, name: str) -> Any:
        """Resolve a column by name, rejecting unknown fields."""
        try:
            return self.model.__table__.c[name]
        except KeyError:
            raise UnsupportedPredicateError(
                f"Unknown field '{name}' for {self.resource_type}"
            ) from None


GROUP_TARGET = CompileTarget(
    resource_type=ResourceType.GROUP,
    model=GroupModel,
    group_id_column=GroupModel.id,
)

EVENT_TARGET = CompileTarget(
    resource_type=ResourceType.EVENT,
    model=EventModel,
    group_id_column=EventModel.group_id,
    event_id_column=EventModel.id,
)


def membership_exists_clause(
    group_id_column: Any,
    user_id: str,
    role: GroupRole | None = None,
) -> ColumnElement[bool]:
    """EXISTS a user_groups row for ``user_id`` in the group named by the column."""
    conditions = [
        UserGroupModel.group_id == group_id_column,
        UserGroupModel.user_id == user_id,
    ]
    if role is not None:
        conditions.append(UserGroupModel.role == role.value)
    return exists().where(*conditions)


def subscription_exists_clause(
    event_id_column: Any, user_id: str
) -> ColumnElement[bool]:
    """EXISTS an event_subscriptions row for ``user_id`` on the event."""
    return exists().where(
        EventSubscriptionModel.event_id == event_id_column,
        EventSubscriptionModel.user_id == user_id,
    )


def compile_predicate(
    predicate: Predicate, target: CompileTarget
) -> ColumnElement[bool]:
    """Translate a predicate tree into a WHERE clause for ``target``.

    Raises:
        UnsupportedPredicateError: If a node does not apply to the target
    """
    match predicate:
        case MatchAll():
            return true()
        case MatchNone():
            return false()
        case Eq(field=name, value=value):
            return target.column(name) == value
        case And(operands=operands):
            if not operands:
                return true()
            return and_(*(compile_predicate(op, target) for op in operands))
        case Or(operands=operands):
            if not operands:
                return false()
            return or_(*(compile_predicate(op, target) for op in operands))
        case MembershipExists(user_id=user_id, role=role):
            return membership_exists_clause(target.group_id_column, user_id, role)
        case SubscriptionExists(user_id=user_id):
            if target.event_id_column is None:
                raise UnsupportedPredicateError(
                    f"Subscription predicates do not apply to {target.resource_type}"
                )
            return subscription_exists_clause(target.event_id_column, user_id)
        case _:
            raise UnsupportedPredicateError(
                f"Cannot compile predicate of type {type(predicate).__name__}"
            )
