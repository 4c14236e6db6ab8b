"""Compound sort engine for market lists

Keeps a short, prioritized chain of sort keys. Each field cycles through
OFF -> DESC -> ASC -> OFF as it is toggled; the first chain entry has the
highest priority and later entries break its ties.
"""

from collections.abc import Iterable
from functools import cmp_to_key

from loguru import logger

from kanga_markets.domain.models import (
    MarketRecord,
    SortDirection,
    SortField,
    SortSpec,
)
from kanga_markets.shared.constants import DEFAULT_MAX_SORTS

from .comparators import compare_by_field, compare_nullable

DEFAULT_SORT = (SortSpec(SortField.VOLUME, SortDirection.DESC),)


def _normalize_field(field: SortField | str) -> SortField | str:
    try:
        return SortField(field)
    except ValueError:
        return field


def _normalize_chain(
    sorts: SortSpec | Iterable[SortSpec] | None,
) -> tuple[SortSpec, ...]:
    if sorts is None:
        return ()
    if isinstance(sorts, SortSpec):
        return (sorts,)
    return tuple(sorts)


class MarketSorter:
    """Stateful multi-key sorter with toggle semantics"""

    def __init__(
        self,
        default_sort: SortSpec | Iterable[SortSpec] | None = DEFAULT_SORT,
        max_sorts: int = DEFAULT_MAX_SORTS,
    ) -> None:
        """Initialize sorter

        Args:
            default_sort: Chain used initially and whenever the chain would
                become empty; None or () means no default
            max_sorts: Maximum number of simultaneous sort keys

        Raises:
            ValueError: If max_sorts < 1 or the default chain exceeds it
        """
        if max_sorts < 1:
            raise ValueError("max_sorts must be at least 1")

        self._default = _normalize_chain(default_sort)
        if len(self._default) > max_sorts:
            raise ValueError(
                f"Default sort has {len(self._default)} keys, "
                f"maximum is {max_sorts}"
            )

        self.max_sorts = max_sorts
        self._chain: tuple[SortSpec, ...] = self._default

    @property
    def sort_chain(self) -> tuple[SortSpec, ...]:
        """Current chain, highest priority first"""
        return self._chain

    @property
    def default_sort(self) -> tuple[SortSpec, ...]:
        return self._default

    def direction_of(self, field: SortField | str) -> SortDirection | None:
        """Direction of ``field`` in the chain, or None if it is off"""
        field = _normalize_field(field)
        for spec in self._chain:
            if spec.field == field:
                return spec.direction
        return None

    def priority_of(self, field: SortField | str) -> int | None:
        """1-based chain position of ``field``, or None if it is off"""
        field = _normalize_field(field)
        for index, spec in enumerate(self._chain):
            if spec.field == field:
                return index + 1
        return None

    def toggle_sort(self, field: SortField | str) -> tuple[SortSpec, ...]:
        """Advance ``field`` one step through OFF -> DESC -> ASC -> OFF

        A new field is appended as the lowest priority key. When the chain is
        full the oldest (first) entry is evicted to make room.

        Returns:
            The new sort chain
        """
        field = _normalize_field(field)
        current = self._chain
        index = next(
            (i for i, spec in enumerate(current) if spec.field == field), None
        )

        if index is None:
            added = SortSpec(field, SortDirection.DESC)
            if len(current) >= self.max_sorts:
                logger.debug(f"Sort chain full, evicting {current[0].field}")
                updated = current[1:] + (added,)
            else:
                updated = current + (added,)
        elif current[index].direction == SortDirection.DESC:
            updated = (
                current[:index] + (current[index].flipped(),) + current[index + 1 :]
            )
        else:
            updated = current[:index] + current[index + 1 :]
            if not updated:
                updated = self._default

        self._chain = updated
        logger.debug(f"Sort chain: {self.describe()}")
        return updated

    def clear_sorts(self) -> tuple[SortSpec, ...]:
        """Reset the chain to the configured default"""
        self._chain = self._default
        return self._chain

    def describe(self) -> str:
        if not self._chain:
            return "unsorted"
        return ", ".join(f"{spec.field} {spec.direction}" for spec in self._chain)

    def sort_markets(self, records) -> list[MarketRecord]:
        """Return a sorted copy of ``records`` using the current chain

        The sort is stable: records equal on every chain key keep their input
        order. An empty chain returns the input order.
        """
        chain = self._chain
        if not chain:
            return list(records)
        return sorted(records, key=cmp_to_key(lambda a, b: _compare(a, b, chain)))


def _compare(
    a: MarketRecord, b: MarketRecord, chain: tuple[SortSpec, ...]
) -> float:
    for spec in chain:
        # None values sort last in both directions, so decide them before
        # the direction is applied
        nullable = compare_nullable(a, b, spec.field)
        if nullable is not None:
            if nullable != 0:
                return nullable
            continue

        comparison = compare_by_field(a, b, spec.field)
        if comparison != 0:
            return comparison if spec.direction == SortDirection.ASC else -comparison

    return 0
