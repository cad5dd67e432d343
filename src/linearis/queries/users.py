"""GraphQL queries for user operations."""

LIST_USERS_QUERY = """
  query ListUsers($first: Int!, $filter: UserFilter) {
    users(first: $first, filter: $filter) {
      nodes {
        id
        name
        displayName
        email
        active
        admin
      }
    }
  }
"""
