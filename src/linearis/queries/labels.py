"""GraphQL queries for label operations."""

LIST_LABELS_QUERY = """
  query ListLabels($first: Int!, $filter: IssueLabelFilter) {
    issueLabels(first: $first, filter: $filter) {
      nodes {
        id
        name
        color
        description
        isGroup
        team { id key name }
        parent { id name }
      }
    }
  }
"""
