"""Value objects for the visibility domain.

Minimal projections of a group or event row, already resolved against the
calling user, so each point check needs a single store lookup.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupFlags:
    """What a point check needs to know about one group.

    Attributes:
        visible: The group's visibility flag
        caller_is_group_admin: The calling user holds an ADMIN membership
    """

    visible: bool
    caller_is_group_admin: bool = False


@dataclass(frozen=True)
class EventFlags:
    """What a point check needs to know about one event.

    Attributes:
        visible: The event's own visibility flag (not the group's)
        created_by: User id of the event's creator
        caller_is_subscribed: The calling user is on the attendee list
        caller_is_group_admin: The calling user holds an ADMIN membership
            in the event's owning group
    """

    visible: bool
    created_by: str
    caller_is_subscribed: bool = False
    caller_is_group_admin: bool = False
