"""
Store-level query model shared by every record store implementation
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any, Tuple
from enum import IntEnum


class SortDirection(IntEnum):
    ASCENDING = 1
    DESCENDING = -1


class RecordQuery(BaseModel):
    """
    A small, closed query language over flat documents.

    All conditions are AND-ed together. ``contains`` is a case-insensitive
    literal substring match; ``at_most`` is an inclusive upper bound.
    """

    equals: Dict[str, Any] = Field(default_factory=dict)
    contains: Dict[str, str] = Field(default_factory=dict)
    at_most: Dict[str, float] = Field(default_factory=dict)
    sort: List[Tuple[str, SortDirection]] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=0)

    def matches(self, document: Dict[str, Any]) -> bool:
        """Check a single document against the filter part of the query"""
        for field, expected in self.equals.items():
            if document.get(field) != expected:
                return False

        for field, term in self.contains.items():
            value = document.get(field)
            if not isinstance(value, str) or term.lower() not in value.lower():
                return False

        for field, bound in self.at_most.items():
            value = document.get(field)
            if value is None or value > bound:
                return False

        return True

    def apply(self, documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Filter, sort and limit documents in memory"""
        results = [doc for doc in documents if self.matches(doc)]

        # Stable sorts applied from the least significant key upwards
        for field, direction in reversed(self.sort):
            results.sort(
                key=lambda doc: doc.get(field),
                reverse=direction == SortDirection.DESCENDING,
            )

        if self.limit is not None:
            results = results[: self.limit]

        return results
