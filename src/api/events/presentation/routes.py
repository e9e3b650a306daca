"""HTTP routes for events and event subscriptions.

Read endpoints accept anonymous callers; the visibility rules then hide every
event from them. Write endpoints require an authenticated caller.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from events.application.services import EventService
from events.dependencies import get_event_service
from events.domain.value_objects import EventId, EventListOptions
from events.ports.exceptions import (
    AlreadySubscribedError,
    EventNotFoundError,
    NotSubscribedError,
    OwningGroupNotFoundError,
    UnauthorizedError,
)
from events.presentation.models import (
    CreateEventRequest,
    EventListResponse,
    EventResponse,
    SubscriptionResponse,
    UpdateVisibilityRequest,
)
from iam.dependencies.user import get_actor_context, require_authenticated_actor
from shared_kernel.authorization.context import ActorContext

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


@router.get(
    "",
    response_model=EventListResponse,
    summary="List events",
    description="List the events the caller may see, ordered by start date",
    responses={
        200: {"description": "Events listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_events(
    actor: Annotated[ActorContext, Depends(get_actor_context)],
    service: Annotated[EventService, Depends(get_event_service)],
    group_id: str | None = None,
    upcoming: bool = False,
    subscribed: bool = False,
) -> EventListResponse:
    """List events visible to the caller."""
    options = EventListOptions(
        group_id=group_id,
        upcoming=upcoming,
        subscribed=subscribed,
    )
    try:
        events = await service.list_events(actor, options)
        return EventListResponse(
            events=[EventResponse.from_domain(event) for event in events],
            count=len(events),
        )

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list events",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> EventResponse:
    """Create an event in a group.

    Site administrators and admins of the owning group may create events.

    Args:
        request: Event creation request
        actor: The authenticated caller
        service: Event service

    Returns:
        EventResponse with created event details

    Raises:
        HTTPException: 400 if the event data is invalid
        HTTPException: 403 if the caller may not create events in the group
        HTTPException: 404 if the owning group does not exist
        HTTPException: 500 for unexpected errors
    """
    try:
        event = await service.create_event(
            actor,
            title=request.title,
            start_date=request.start_date,
            end_date=request.end_date,
            group_id=request.group_id,
            description=request.description,
            location=request.location,
            visible=request.visible,
        )
        return EventResponse.from_domain(event)

    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to create events in this group",
        )
    except OwningGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event",
        )


@router.get("/{event_id}")
async def get_event(
    event_id: str,
    actor: Annotated[ActorContext, Depends(get_actor_context)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> EventResponse:
    """Get an event by ID.

    Raises:
        HTTPException: 404 if event not found or not visible
        HTTPException: 500 for unexpected errors
    """
    event_id_obj = EventId(value=event_id)

    try:
        event = await service.get_event(event_id_obj, actor)
        if event is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )
        return EventResponse.from_domain(event)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve event",
        )


@router.patch(
    "/{event_id}/visibility",
    response_model=EventResponse,
    summary="Show or hide an event",
    description="Change an event's visibility flag. Requires the event creator "
    "or an ADMIN of the owning group.",
    responses={
        200: {"description": "Visibility updated"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Event not found"},
        500: {"description": "Internal server error"},
    },
)
async def set_event_visibility(
    event_id: str,
    request: UpdateVisibilityRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> EventResponse:
    """Change an event's visibility flag."""
    event_id_obj = EventId(value=event_id)

    try:
        event = await service.set_event_visibility(
            event_id_obj, actor, visible=request.visible
        )
        return EventResponse.from_domain(event)

    except EventNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to change event visibility",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update event visibility",
        )


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> None:
    """Delete an event and its subscriptions.

    Raises:
        HTTPException: 403 if the caller is not a site admin
        HTTPException: 404 if event not found
        HTTPException: 500 for unexpected errors
    """
    event_id_obj = EventId(value=event_id)

    try:
        await service.delete_event(event_id_obj, actor)

    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can delete events",
        )
    except EventNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete event",
        )


@router.post(
    "/{event_id}/subscription",
    status_code=status.HTTP_201_CREATED,
    response_model=SubscriptionResponse,
    summary="Subscribe to event",
    responses={
        201: {"description": "Subscribed"},
        403: {"description": "Not a member of the owning group"},
        404: {"description": "Event not found"},
        409: {"description": "Already subscribed"},
        500: {"description": "Internal server error"},
    },
)
async def subscribe(
    event_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> SubscriptionResponse:
    """Put the caller on an event's attendee list."""
    event_id_obj = EventId(value=event_id)

    try:
        subscription = await service.subscribe(event_id_obj, actor)
        return SubscriptionResponse.from_domain(subscription)

    except EventNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Must be group member to subscribe",
        )
    except AlreadySubscribedError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already subscribed to this event",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to subscribe",
        )


@router.delete("/{event_id}/subscription", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    event_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[EventService, Depends(get_event_service)],
) -> None:
    """Remove the caller from an event's attendee list."""
    event_id_obj = EventId(value=event_id)

    try:
        await service.unsubscribe(event_id_obj, actor)

    except NotSubscribedError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not subscribed to this event",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot unsubscribe",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unsubscribe",
        )
