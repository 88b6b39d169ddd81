"""Search rewriter - search searchable attribute columns or the title.

When a content type declares searchable attribute columns, the store's
native full-text search is replaced by:

  1. an OR filter with one LIKE clause per searchable attribute column,
  2. a title LIKE branch spliced into the attribute WHERE fragment.

The free-text term is cleared from the query so the store does not also
apply its own search, and the request context keeps showing the original
term as the search label.

Without searchable attribute columns the query is left alone and the
store's default search applies.
"""

import logging
import re
from typing import Optional

from content_columns.columns.registry import ColumnRegistry
from content_columns.listing.query import (
    AttributeClause,
    AttributeFilter,
    ListingQuery,
    QueryFragment,
    RequestContext,
)

logger = logging.getLogger(__name__)

_LEADING_AND = re.compile(r"^\s*AND\s+", re.IGNORECASE)


def quote_sql_string(value: str) -> str:
    """Escape a value for use inside a single-quoted SQL literal."""
    return value.replace("\\", "\\\\").replace("'", "''")


def splice_title_clause(
    fragment: QueryFragment, term: str, title_column: str = "title"
) -> QueryFragment:
    """Return fragment with WHERE rewritten to AND ( title LIKE OR <where> )."""
    title_clause = f"{title_column} LIKE '%{quote_sql_string(term)}%'"
    original = _LEADING_AND.sub("", fragment.where, count=1).strip()
    if original:
        where = f" AND ( {title_clause} OR {original} ) "
    else:
        where = f" AND ( {title_clause} ) "
    return fragment.model_copy(update={"where": where})


class SearchRewriter:
    """Rewrites a list-view search into attribute-or-title matching."""

    def __init__(self, registry: ColumnRegistry, title_column: str = "title"):
        self.registry = registry
        self.title_column = title_column

    def build_filter(self, term: str) -> Optional[AttributeFilter]:
        """OR filter over searchable attribute columns, None if there are none."""
        columns = self.registry.searchable_attribute_columns()
        if not columns:
            return None
        return AttributeFilter(
            relation="OR",
            clauses=[
                AttributeClause(key=key, value=term, compare="LIKE")
                for key in columns
            ],
        )

    def rewrite(self, query: ListingQuery, context: RequestContext) -> bool:
        """Rewrite query in place and register the title splice on context.

        Returns True if the query changed.
        """
        if not context.is_list_screen(query, self.registry.content_type):
            return False

        term = query.search_term
        if not term:
            return False

        attribute_filter = self.build_filter(term)
        if attribute_filter is None:
            logger.debug(
                f"No searchable attribute columns for '{self.registry.content_type}', "
                f"using default search"
            )
            return False

        query.attribute_filters = attribute_filter
        query.search_term = ""
        context.search_label = term

        title_column = self.title_column

        def add_title_match(fragment: QueryFragment) -> QueryFragment:
            # Only the first fragment built in this request gets the title branch
            context.title_splices += 1
            if context.title_splices > 1:
                return fragment
            return splice_title_clause(fragment, term, title_column)

        context.add_fragment_filter(add_title_match)
        logger.debug(
            f"Searching '{self.registry.content_type}' attributes "
            f"{[c.key for c in attribute_filter.clauses]} or {title_column} for '{term}'"
        )
        return True
