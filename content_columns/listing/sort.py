"""Sort rewriter - sort attribute columns by their attribute value."""

import logging
from typing import Optional

from content_columns.columns.registry import ColumnRegistry
from content_columns.columns.schemas import ColumnType
from content_columns.listing.query import ListingQuery, RequestContext

logger = logging.getLogger(__name__)


class SortRewriter:
    """Turns a requested attribute-column sort key into a store sort clause.

    sort_key=price on an attribute column with orderable_key
    'attribute_value_num' becomes sort_key='attribute_value_num',
    attribute_key='price'.
    """

    def __init__(self, registry: ColumnRegistry):
        self.registry = registry

    def rewrite(self, query: ListingQuery, context: Optional[RequestContext] = None) -> bool:
        """Rewrite query in place. Returns True if the query changed."""
        if context is None:
            context = RequestContext()

        if not context.is_list_screen(query, self.registry.content_type):
            return False

        sort_key = query.sort_key
        if not sort_key:
            return False

        column = self.registry.get_active(sort_key)
        if column is None or column.type != ColumnType.ATTRIBUTE:
            return False

        query.sort_key = column.orderable_key
        query.attribute_key = sort_key
        logger.debug(
            f"Sorting '{self.registry.content_type}' by attribute '{sort_key}' "
            f"({column.orderable_key})"
        )
        return True
