"""
GraphQL documents used by linearis.

- common: reusable field selections
- batch: lookup sections combined into batch-resolve queries
- one module per entity for its queries and mutations
"""

from linearis.queries.common import (
    COMPLETE_ISSUE_FRAGMENT,
    COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT,
)

__all__ = [
    "COMPLETE_ISSUE_FRAGMENT",
    "COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT",
]
