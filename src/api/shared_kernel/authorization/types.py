"""Authorization type definitions.

Defines the site-wide and group-scoped roles, the resource kinds whose
visibility is governed, and the permissions checked on them. These enums
keep role strings out of the rest of the codebase.
"""

from enum import StrEnum


class UserRole(StrEnum):
    """Site-wide role of a user.

    ADMIN is a superset view: a site admin sees and may modify everything.
    """

    USER = "USER"
    ADMIN = "ADMIN"


class GroupRole(StrEnum):
    """A user's role within one group (the UserGroup membership row).

    Independent of the site-wide role: a group admin is not a site admin,
    and a user may be ADMIN in one group and MEMBER in another.
    """

    MEMBER = "MEMBER"
    ADMIN = "ADMIN"


class ResourceType(StrEnum):
    """Kinds of resources carrying a visibility flag."""

    GROUP = "group"
    EVENT = "event"


class Permission(StrEnum):
    """Permissions answered by the visibility resolver."""

    VIEW = "view"
    MODIFY_VISIBILITY = "modify_visibility"
