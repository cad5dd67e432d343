"""GraphQL queries for team operations."""

LIST_TEAMS_QUERY = """
  query ListTeams($first: Int!) {
    teams(first: $first) {
      nodes {
        id
        key
        name
        description
        private
        timezone
      }
    }
  }
"""
