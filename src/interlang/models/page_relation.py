"""
Canonical undirected "is a translation of" edge between two pages.

Every relation is stored once, with the lower page id first, so that the
``(page_id, related_page_id)`` primary key of ``site_page_relation`` is a
uniqueness constraint on the undirected pair.  Construction normalizes the
order; self loops are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from ._validation import validate_id


class PageRelationDbParams(NamedTuple):
    """Positional parameters for the ``site_page_relation`` insert."""

    page_id: int
    related_page_id: int


@dataclass(frozen=True, slots=True, order=True)
class PageRelation:
    """Immutable canonical page pair.

    Attributes:
        page_id: The lower of the two page ids.
        related_page_id: The higher of the two page ids.

    Raises:
        TypeError: If an id is not an ``int``.
        ValueError: If an id is not positive or both ids are equal.

    Examples:
        ```python
        PageRelation(7, 3)                 # PageRelation(page_id=3, related_page_id=7)
        PageRelation(7, 3).other(3)        # 7
        PageRelation(3, 7).to_db_params()  # PageRelationDbParams(page_id=3, related_page_id=7)
        ```
    """

    page_id: int
    related_page_id: int
    _db_params: PageRelationDbParams | None = field(
        default=None, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        validate_id(self.page_id, "page_id")
        validate_id(self.related_page_id, "related_page_id")
        if self.page_id == self.related_page_id:
            raise ValueError(f"A page cannot be related to itself (page_id={self.page_id})")

        if self.page_id > self.related_page_id:
            low, high = self.related_page_id, self.page_id
            object.__setattr__(self, "page_id", low)
            object.__setattr__(self, "related_page_id", high)

        object.__setattr__(
            self,
            "_db_params",
            PageRelationDbParams(page_id=self.page_id, related_page_id=self.related_page_id),
        )

    def touches(self, page_id: int) -> bool:
        """Whether *page_id* is one of the two endpoints."""
        return page_id in (self.page_id, self.related_page_id)

    def other(self, page_id: int) -> int:
        """Return the endpoint opposite to *page_id*.

        Raises:
            ValueError: If *page_id* is not an endpoint of this relation.
        """
        if page_id == self.page_id:
            return self.related_page_id
        if page_id == self.related_page_id:
            return self.page_id
        raise ValueError(f"Page {page_id} is not part of {self!r}")

    def to_db_params(self) -> PageRelationDbParams:
        """Return cached positional parameters for the insert statement."""
        assert self._db_params is not None  # noqa: S101  # Always set in __post_init__
        return self._db_params

    @classmethod
    def from_db_params(cls, params: PageRelationDbParams) -> PageRelation:
        """Reconstruct a relation from a database row tuple."""
        return cls(params.page_id, params.related_page_id)
