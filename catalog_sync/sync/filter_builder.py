"""
Filter Builder

Translates sync configuration into a declarative collection filter.
"""

from ..models import CollectionFilter, FieldCondition, SyncConfig, Visibility, VisibilityMode

# Visibility mode -> platform visibility values to include
VISIBILITY_FILTERS = {
    VisibilityMode.IN_CATALOG: (Visibility.IN_CATALOG,),
    VisibilityMode.IN_SEARCH: (Visibility.IN_SEARCH,),
    VisibilityMode.BOTH: (Visibility.BOTH,),
}


class FilterBuilder:
    """Builds collection filters from a SyncConfig. Stateless."""

    def build(self, config: SyncConfig) -> CollectionFilter:
        """
        Build the product collection filter for a sync run.

        Args:
            config: Sync settings

        Returns:
            CollectionFilter with a saleable condition (if saleable_only)
            and at most one visibility condition (none for UNSET)
        """
        collection_filter = CollectionFilter()

        if config.saleable_only:
            collection_filter = collection_filter.with_condition(
                FieldCondition('is_saleable', 'eq', True)
            )

        visibility = VISIBILITY_FILTERS.get(config.visibility_mode)
        if visibility is not None:
            collection_filter = collection_filter.with_condition(
                FieldCondition('visibility', 'in', visibility)
            )

        return collection_filter
