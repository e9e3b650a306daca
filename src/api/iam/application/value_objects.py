"""Application-layer value objects for IAM bounded context.

Read-only view objects returned by application services.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from iam.domain.aggregates import Group


@dataclass(frozen=True)
class GroupPage:
    """One page of a group listing.

    Attributes:
        items: Groups on this page, newest first
        total: Number of groups matching across all pages
        page: 1-based page number
        limit: Page size
    """

    items: list[Group]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Number of pages needed for ``total`` items."""
        return math.ceil(self.total / self.limit) if self.total else 0
