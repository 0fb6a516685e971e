"""
Catalog query engine for the browse view.

This module filters and orders an in-memory listing collection according to
a FilterConfig. It is pure: no I/O, and the caller's collection is never
mutated.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from thriftx.models import ALL, CatalogResult, FilterConfig, Listing, SortKey


# Sort key -> (key function, descending)
SORT_ORDERS: Dict[SortKey, Tuple[Callable[[Listing], object], bool]] = {
    SortKey.NEWEST: (lambda listing: listing.created_at, True),
    SortKey.OLDEST: (lambda listing: listing.created_at, False),
    SortKey.POINTS_HIGH: (lambda listing: listing.points, True),
    SortKey.POINTS_LOW: (lambda listing: listing.points, False),
    SortKey.MOST_VIEWED: (lambda listing: listing.view_count, True),
}


class CatalogQuery:
    """Filters and sorts catalog listings for display.

    Every predicate is conjunctive: a listing is kept only when it passes
    all active predicates of the config.
    """

    def matches_search(self, listing: Listing, search_text: str) -> bool:
        """Case-insensitive substring match on title, description or any tag.

        Args:
            listing: Listing to test
            search_text: Raw search text; blank text matches everything

        Returns:
            True if the listing matches the search text
        """
        needle = search_text.strip().lower()
        if not needle:
            return True

        if needle in (listing.title or "").lower():
            return True
        if needle in (listing.description or "").lower():
            return True
        return any(needle in tag.lower() for tag in listing.tags)

    def matches_category(self, listing: Listing, category: str) -> bool:
        return category == ALL or listing.category == category

    def matches_size(self, listing: Listing, size: str) -> bool:
        return size == ALL or listing.size == size

    def matches_condition(self, listing: Listing, condition: str) -> bool:
        return condition == ALL or listing.condition.value == condition

    def matches_points(self, listing: Listing, config: FilterConfig) -> bool:
        """Inclusive points range check; a missing bound is unbounded."""
        if config.min_points is not None and listing.points < config.min_points:
            return False
        if config.max_points is not None and listing.points > config.max_points:
            return False
        return True

    def matches(self, listing: Listing, config: FilterConfig) -> bool:
        return (
            self.matches_search(listing, config.search_text)
            and self.matches_category(listing, config.category)
            and self.matches_size(listing, config.size)
            and self.matches_condition(listing, config.condition)
            and self.matches_points(listing, config)
        )

    def filter_listings(
        self,
        listings: Sequence[Listing],
        config: FilterConfig
    ) -> List[Listing]:
        """Return the listings that satisfy every predicate, in input order."""
        return [listing for listing in listings if self.matches(listing, config)]

    def sort_listings(
        self,
        listings: Sequence[Listing],
        sort_key: SortKey
    ) -> List[Listing]:
        """Return a new list ordered by sort_key.

        sorted() is stable in both directions, so listings that compare
        equal keep their input order.
        """
        key_func, descending = SORT_ORDERS[SortKey.parse(sort_key)]
        return sorted(listings, key=key_func, reverse=descending)

    def filter_sort(
        self,
        listings: Sequence[Listing],
        config: FilterConfig
    ) -> List[Listing]:
        """Filter then order listings according to config.

        Args:
            listings: Source collection (left untouched)
            config: Filter and sort configuration

        Returns:
            New list containing the ordered view
        """
        return self.sort_listings(self.filter_listings(listings, config), config.sort_key)

    def active_filter_count(self, config: FilterConfig) -> int:
        """Number of axes currently constraining the result.

        Used for display only; it takes no part in filtering.
        """
        return sum([
            bool(config.search_text.strip()),
            config.category != ALL,
            config.size != ALL,
            config.condition != ALL,
            config.min_points is not None,
            config.max_points is not None,
        ])

    def run(self, listings: Sequence[Listing], config: FilterConfig) -> CatalogResult:
        """Produce the ordered view together with its derived counts."""
        ordered = self.filter_sort(listings, config)
        return CatalogResult(
            listings=ordered,
            total_count=len(ordered),
            active_filter_count=self.active_filter_count(config),
        )


_default_query = CatalogQuery()


def filter_sort(listings: Sequence[Listing], config: FilterConfig) -> List[Listing]:
    """Module-level shortcut for CatalogQuery().filter_sort."""
    return _default_query.filter_sort(listings, config)


def active_filter_count(config: FilterConfig) -> int:
    return _default_query.active_filter_count(config)


def run_query(listings: Sequence[Listing], config: FilterConfig) -> CatalogResult:
    return _default_query.run(listings, config)
