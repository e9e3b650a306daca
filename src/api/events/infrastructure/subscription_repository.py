"""PostgreSQL implementation of ISubscriptionRepository."""

from __future__ import annotations

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from events.domain.value_objects import EventId, Subscription
from events.infrastructure.models import EventSubscriptionModel
from events.infrastructure.observability import (
    DefaultSubscriptionRepositoryProbe,
    SubscriptionRepositoryProbe,
)
from events.ports.exceptions import AlreadySubscribedError
from events.ports.repositories import ISubscriptionRepository


class SubscriptionRepository(ISubscriptionRepository):
    """Repository for rows of the event_subscriptions table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: SubscriptionRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultSubscriptionRepositoryProbe()

    async def exists(self, event_id: EventId, user_id: str) -> bool:
        stmt = select(
            exists().where(
                EventSubscriptionModel.event_id == event_id.value,
                EventSubscriptionModel.user_id == user_id,
            )
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def add(self, subscription: Subscription) -> None:
        """Persist a subscription.

        Raises:
            AlreadySubscribedError: If the user is already subscribed
        """
        if await self.exists(subscription.event_id, subscription.user_id):
            raise AlreadySubscribedError(
                f"User {subscription.user_id} is already subscribed to "
                f"event {subscription.event_id.value}"
            )

        self._session.add(
            EventSubscriptionModel(
                event_id=subscription.event_id.value,
                user_id=subscription.user_id,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "pk_event_subscriptions" in str(e):
                raise AlreadySubscribedError(
                    f"User {subscription.user_id} is already subscribed to "
                    f"event {subscription.event_id.value}"
                ) from e
            raise

        self._probe.subscription_added(
            event_id=subscription.event_id.value, user_id=subscription.user_id
        )

    async def remove(self, event_id: EventId, user_id: str) -> bool:
        stmt = delete(EventSubscriptionModel).where(
            EventSubscriptionModel.event_id == event_id.value,
            EventSubscriptionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            return False

        self._probe.subscription_removed(event_id=event_id.value, user_id=user_id)
        return True
