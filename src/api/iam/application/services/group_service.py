"""Group application service for IAM bounded context.

Orchestrates group listing, creation, visibility changes, membership,
member administration and deletion. Every visibility decision is delegated
to the visibility resolver.
"""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from iam.application.value_objects import GroupPage
from iam.domain.aggregates import Group
from iam.domain.value_objects import (
    GroupId,
    GroupListOptions,
    GroupMembership,
    UserId,
)
from iam.ports.exceptions import (
    GroupNotFoundError,
    NotAMemberError,
    UnauthorizedError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IGroupEventPurger,
    IGroupRepository,
    IMembershipRepository,
    IUserRepository,
)
from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import GroupRole
from visibility.application.resolver import VisibilityResolver
from visibility.domain.predicates import MembershipExists, all_of


class GroupService:
    """Application service for group management.

    Manages database transactions: each write use case runs its visibility
    checks and mutations in one transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        membership_repository: IMembershipRepository,
        user_repository: IUserRepository,
        event_purger: IGroupEventPurger,
        resolver: VisibilityResolver,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            membership_repository: Repository for group memberships
            user_repository: Looks up users added to a group
            event_purger: Removes a group's events when the group is deleted
            resolver: Visibility resolver for permission checks
            probe: Optional domain probe for observability
        """
        self._session = session
        self._group_repository = group_repository
        self._membership_repository = membership_repository
        self._user_repository = user_repository
        self._event_purger = event_purger
        self._resolver = resolver
        self._probe = probe or DefaultGroupServiceProbe()

    async def list_groups(
        self,
        actor: ActorContext,
        options: GroupListOptions | None = None,
    ) -> GroupPage:
        """List one page of groups the actor may see.

        Site admins see every group, hidden ones included; ``include_hidden``
        is accepted but never narrows their listing. Other users see the
        visible groups they belong to and the hidden groups they administer.

        Args:
            actor: The requesting actor
            options: Search text and paging

        Returns:
            GroupPage with the page items and totals
        """
        options = options or GroupListOptions()
        predicate = self._resolver.group_visibility_filter(actor)

        if not actor.is_site_admin and actor.user_id is not None:
            predicate = all_of(predicate, MembershipExists(actor.user_id))

        groups, total = await self._group_repository.list_matching(predicate, options)
        return GroupPage(
            items=groups, total=total, page=options.page, limit=options.limit
        )

    async def get_group(self, group_id: GroupId, actor: ActorContext) -> Group | None:
        """Get a group if the actor may see it.

        Returns None if the group doesn't exist or is hidden from the actor.

        Args:
            group_id: The group ID to retrieve
            actor: The requesting actor

        Returns:
            The Group aggregate, or None if not found or not visible
        """
        if not await self._resolver.can_see_group(group_id.value, actor):
            return None
        return await self._group_repository.get_by_id(group_id)

    async def create_group(
        self,
        actor: ActorContext,
        name: str,
        description: str | None = None,
        visible: bool = True,
    ) -> Group:
        """Create a new group with the creator as its first admin.

        Args:
            actor: The requesting actor (must be a site admin)
            name: Group name
            description: Optional description
            visible: Initial visibility flag

        Returns:
            The created Group aggregate

        Raises:
            UnauthorizedError: If the actor is not a site admin
            DuplicateGroupNameError: If the name is already taken
            ValueError: If the name is blank
        """
        if not actor.is_site_admin or actor.user_id is None:
            self._probe.permission_denied("create_group", None, actor.user_id)
            raise UnauthorizedError("Only administrators can create groups")

        creator_id = UserId(value=actor.user_id)
        try:
            group = Group.create(
                name=name,
                created_by=creator_id,
                description=description,
                visible=visible,
            )

            async with self._session.begin():
                await self._group_repository.save(group)
                await self._membership_repository.add(
                    GroupMembership(
                        user_id=creator_id,
                        group_id=group.id,
                        role=GroupRole.ADMIN,
                    )
                )

            self._probe.group_created(
                group_id=group.id.value,
                name=group.name,
                creator_id=creator_id.value,
            )
            return group

        except Exception as e:
            self._probe.group_creation_failed(name=name, error=str(e))
            raise

    async def set_group_visibility(
        self,
        group_id: GroupId,
        actor: ActorContext,
        visible: bool,
    ) -> Group:
        """Show or hide a group.

        Args:
            group_id: The group to update
            actor: The requesting actor
            visible: The new visibility flag

        Returns:
            The updated Group aggregate

        Raises:
            GroupNotFoundError: If the group is missing or hidden from the actor
            UnauthorizedError: If the actor may not change its visibility
        """
        async with self._session.begin():
            group = await self._group_repository.get_by_id(group_id)
            if group is None or not await self._resolver.can_see_group(
                group_id.value, actor
            ):
                raise GroupNotFoundError(f"Group {group_id.value} not found")

            if not await self._resolver.can_modify_group_visibility(
                group_id.value, actor
            ):
                self._probe.permission_denied(
                    "set_group_visibility", group_id.value, actor.user_id
                )
                raise UnauthorizedError(
                    "Only group admins can change group visibility"
                )

            group.set_visibility(visible)
            await self._group_repository.save(group)

        self._probe.group_visibility_changed(
            group_id=group_id.value, visible=visible, changed_by=actor.user_id
        )
        return group

    async def join_group(
        self, group_id: GroupId, actor: ActorContext
    ) -> GroupMembership:
        """Join a group as a MEMBER.

        Args:
            group_id: The group to join
            actor: The requesting actor

        Returns:
            The new membership

        Raises:
            UnauthorizedError: If the actor is not an identified user
            GroupNotFoundError: If the group is missing or hidden from the actor
            AlreadyMemberError: If the actor already belongs to the group
        """
        if actor.user_id is None:
            raise UnauthorizedError("Authentication required to join a group")

        membership = GroupMembership(
            user_id=UserId(value=actor.user_id),
            group_id=group_id,
            role=GroupRole.MEMBER,
        )

        async with self._session.begin():
            group = await self._group_repository.get_by_id(group_id)
            if group is None or not await self._resolver.can_see_group(
                group_id.value, actor
            ):
                raise GroupNotFoundError(f"Group {group_id.value} not found")

            await self._membership_repository.add(membership)

        self._probe.group_joined(group_id=group_id.value, user_id=actor.user_id)
        return membership

    async def leave_group(self, group_id: GroupId, actor: ActorContext) -> None:
        """Leave a group.

        Raises:
            UnauthorizedError: If the actor is not an identified user
            NotAMemberError: If the actor is not a member of the group
        """
        if actor.user_id is None:
            raise UnauthorizedError("Authentication required to leave a group")

        async with self._session.begin():
            removed = await self._membership_repository.remove(
                UserId(value=actor.user_id), group_id
            )
            if not removed:
                raise NotAMemberError(
                    f"User {actor.user_id} is not a member of group {group_id.value}"
                )

        self._probe.group_left(group_id=group_id.value, user_id=actor.user_id)

    async def delete_group(self, group_id: GroupId, actor: ActorContext) -> None:
        """Delete a group with its events, subscriptions and memberships.

        Everything is removed in one transaction: subscriptions and events
        first, then memberships, then the group row.

        Args:
            group_id: The group to delete
            actor: The requesting actor (must be a site admin)

        Raises:
            UnauthorizedError: If the actor is not a site admin
            GroupNotFoundError: If the group does not exist
        """
        if not actor.is_site_admin:
            self._probe.permission_denied("delete_group", group_id.value, actor.user_id)
            raise UnauthorizedError("Only administrators can delete groups")

        async with self._session.begin():
            group = await self._group_repository.get_by_id(group_id)
            if group is None:
                raise GroupNotFoundError(f"Group {group_id.value} not found")

            events_removed = await self._event_purger.delete_by_group(group_id.value)
            memberships_removed = await self._membership_repository.delete_by_group(
                group_id
            )
            await self._group_repository.delete(group_id)

        self._probe.group_deleted(
            group_id=group_id.value,
            events_removed=events_removed,
            memberships_removed=memberships_removed,
        )

    async def list_members(
        self, group_id: GroupId, actor: ActorContext
    ) -> list[GroupMembership]:
        """List a group's memberships, admins first.

        Raises:
            GroupNotFoundError: If the group is missing or hidden from the actor
            UnauthorizedError: If the actor administers neither the site nor
                the group
        """
        async with self._session.begin():
            await self._require_group_admin(group_id, actor, "list_members")
            return await self._membership_repository.list_by_group(group_id)

    async def add_member(
        self,
        group_id: GroupId,
        actor: ActorContext,
        user_id: str,
        role: GroupRole = GroupRole.MEMBER,
    ) -> GroupMembership:
        """Add a user to a group with the given role.

        Args:
            group_id: The group to add to
            actor: The requesting actor (site admin or group admin)
            user_id: The user to add
            role: The new member's group role

        Returns:
            The new membership

        Raises:
            GroupNotFoundError: If the group is missing or hidden from the actor
            UnauthorizedError: If the actor may not manage the group's members
            UserNotFoundError: If the user does not exist
            ValueError: If the user is deactivated
            AlreadyMemberError: If the user already belongs to the group
        """
        membership = GroupMembership(
            user_id=UserId(value=user_id), group_id=group_id, role=role
        )

        async with self._session.begin():
            await self._require_group_admin(group_id, actor, "add_member")

            user = await self._user_repository.get_by_id(membership.user_id)
            if user is None:
                raise UserNotFoundError(f"User {user_id} not found")
            if not user.active:
                raise ValueError("Cannot add a deactivated user to a group")

            await self._membership_repository.add(membership)

        self._probe.member_added(
            group_id=group_id.value,
            user_id=user_id,
            role=role.value,
            added_by=actor.user_id,
        )
        return membership

    async def change_member_role(
        self,
        group_id: GroupId,
        actor: ActorContext,
        user_id: str,
        role: GroupRole,
    ) -> GroupMembership:
        """Promote or demote a member.

        A member promoted to ADMIN can see the group while it is hidden and
        can change its visibility.

        Raises:
            GroupNotFoundError: If the group is missing or hidden from the actor
            UnauthorizedError: If the actor may not manage the group's members
            NotAMemberError: If the user is not a member of the group
        """
        member_id = UserId(value=user_id)

        async with self._session.begin():
            await self._require_group_admin(group_id, actor, "change_member_role")

            membership = await self._membership_repository.get(member_id, group_id)
            if membership is None:
                raise NotAMemberError(
                    f"User {user_id} is not a member of group {group_id.value}"
                )

            await self._membership_repository.update_role(member_id, group_id, role)

        self._probe.member_role_changed(
            group_id=group_id.value,
            user_id=user_id,
            role=role.value,
            changed_by=actor.user_id,
        )
        return replace(membership, role=role)

    async def remove_member(
        self, group_id: GroupId, actor: ActorContext, user_id: str
    ) -> None:
        """Remove a member from a group.

        Raises:
            GroupNotFoundError: If the group is missing or hidden from the actor
            UnauthorizedError: If the actor may not manage the group's members
            NotAMemberError: If the user is not a member of the group
        """
        async with self._session.begin():
            await self._require_group_admin(group_id, actor, "remove_member")

            removed = await self._membership_repository.remove(
                UserId(value=user_id), group_id
            )
            if not removed:
                raise NotAMemberError(
                    f"User {user_id} is not a member of group {group_id.value}"
                )

        self._probe.member_removed(
            group_id=group_id.value, user_id=user_id, removed_by=actor.user_id
        )

    async def _require_group_admin(
        self, group_id: GroupId, actor: ActorContext, operation: str
    ) -> None:
        group = await self._group_repository.get_by_id(group_id)
        if group is None or not await self._resolver.can_see_group(
            group_id.value, actor
        ):
            raise GroupNotFoundError(f"Group {group_id.value} not found")

        if not await self._resolver.can_modify_group_visibility(group_id.value, actor):
            self._probe.permission_denied(operation, group_id.value, actor.user_id)
            raise UnauthorizedError("Only group admins can manage group members")
