"""Content Columns - declarative list-view columns for content collections.

Lets a host listing framework declare, per column, how a value is sourced,
rendered, sorted and searched:
- Column registry (normalized declarations per content type)
- List projection (visible and sortable column sets)
- Query rewriting (attribute sort, attribute-or-title search)
- Cell rendering (attribute, external field, image, thumbnail)
"""

__version__ = "0.1.0"
