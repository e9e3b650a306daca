"""Visibility resolver.

Single authority for "who may see what" and "who may change whose
visibility" over groups and events. Listing filters are built without I/O;
point checks resolve the target through one ``IVisibilityStore`` lookup.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TypeVar

from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import Permission, ResourceType
from visibility.application.observability import (
    DefaultVisibilityProbe,
    VisibilityProbe,
)
from visibility.domain import rules
from visibility.domain.predicates import Predicate
from visibility.ports.store import IVisibilityStore

T = TypeVar("T")


class VisibilityResolver:
    """Answers visibility questions for one actor at a time.

    Store failures are recorded on the probe and re-raised unchanged. They
    are never reported as "not visible".
    """

    def __init__(
        self,
        store: IVisibilityStore,
        probe: VisibilityProbe | None = None,
    ):
        """Initialize the resolver.

        Args:
            store: Lookup port for group, event and membership facts
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultVisibilityProbe()

    def group_visibility_filter(self, context: ActorContext) -> Predicate:
        """Predicate selecting the groups the actor may see."""
        predicate = rules.group_visibility_filter(context)
        self._probe.filter_built(
            resource_type=ResourceType.GROUP,
            user_id=context.user_id,
            kind=type(predicate).__name__,
        )
        return predicate

    def event_visibility_filter(self, context: ActorContext) -> Predicate:
        """Predicate selecting the events the actor may see."""
        predicate = rules.event_visibility_filter(context)
        self._probe.filter_built(
            resource_type=ResourceType.EVENT,
            user_id=context.user_id,
            kind=type(predicate).__name__,
        )
        return predicate

    async def can_see_group(self, group_id: str, context: ActorContext) -> bool:
        """Whether the actor may see one group.

        Returns False for missing groups and for anonymous callers.
        """
        if context.is_site_admin:
            return self._decided(
                ResourceType.GROUP, group_id, Permission.VIEW, context, True
            )
        if not context.is_authenticated:
            return self._decided(
                ResourceType.GROUP, group_id, Permission.VIEW, context, False
            )

        flags = await self._lookup(
            ResourceType.GROUP,
            group_id,
            self._store.get_group_flags(group_id, context.user_id),
        )
        if flags is None:
            self._probe.target_not_found(ResourceType.GROUP, group_id)

        return self._decided(
            ResourceType.GROUP,
            group_id,
            Permission.VIEW,
            context,
            rules.group_visible_to(flags, context),
        )

    async def can_see_event(self, event_id: str, context: ActorContext) -> bool:
        """Whether the actor may see one event.

        The event's own flag is consulted, never its group's.
        """
        if context.is_site_admin:
            return self._decided(
                ResourceType.EVENT, event_id, Permission.VIEW, context, True
            )
        if not context.is_authenticated:
            return self._decided(
                ResourceType.EVENT, event_id, Permission.VIEW, context, False
            )

        flags = await self._lookup(
            ResourceType.EVENT,
            event_id,
            self._store.get_event_flags(event_id, context.user_id),
        )
        if flags is None:
            self._probe.target_not_found(ResourceType.EVENT, event_id)

        return self._decided(
            ResourceType.EVENT,
            event_id,
            Permission.VIEW,
            context,
            rules.event_visible_to(flags, context),
        )

    async def can_modify_group_visibility(
        self, group_id: str, context: ActorContext
    ) -> bool:
        """Whether the actor may flip a group's visibility flag."""
        permission = Permission.MODIFY_VISIBILITY
        if context.is_site_admin:
            return self._decided(
                ResourceType.GROUP, group_id, permission, context, True
            )
        if context.user_id is None:
            return self._decided(
                ResourceType.GROUP, group_id, permission, context, False
            )

        role = await self._lookup(
            ResourceType.GROUP,
            group_id,
            self._store.get_membership_role(context.user_id, group_id),
        )
        return self._decided(
            ResourceType.GROUP,
            group_id,
            permission,
            context,
            rules.group_visibility_modifiable_by(role, context),
        )

    async def can_modify_event_visibility(
        self, event_id: str, context: ActorContext
    ) -> bool:
        """Whether the actor may flip an event's visibility flag.

        Granted to the event's creator and to admins of its owning group.
        """
        permission = Permission.MODIFY_VISIBILITY
        if context.is_site_admin:
            return self._decided(
                ResourceType.EVENT, event_id, permission, context, True
            )
        if context.user_id is None:
            return self._decided(
                ResourceType.EVENT, event_id, permission, context, False
            )

        flags = await self._lookup(
            ResourceType.EVENT,
            event_id,
            self._store.get_event_flags(event_id, context.user_id),
        )
        if flags is None:
            self._probe.target_not_found(ResourceType.EVENT, event_id)

        return self._decided(
            ResourceType.EVENT,
            event_id,
            permission,
            context,
            rules.event_visibility_modifiable_by(flags, context),
        )

    async def _lookup(
        self,
        resource_type: ResourceType,
        resource_id: str,
        lookup: Awaitable[T],
    ) -> T:
        """Await a store lookup, recording failures before re-raising."""
        try:
            return await lookup
        except Exception as e:
            self._probe.lookup_failed(
                resource_type=resource_type,
                resource_id=resource_id,
                error=str(e),
            )
            raise

    def _decided(
        self,
        resource_type: ResourceType,
        resource_id: str,
        permission: Permission,
        context: ActorContext,
        granted: bool,
    ) -> bool:
        self._probe.access_decided(
            resource_type=resource_type,
            resource_id=resource_id,
            permission=permission,
            user_id=context.user_id,
            granted=granted,
        )
        return granted
