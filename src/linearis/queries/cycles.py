"""GraphQL queries for cycle operations."""

from linearis.queries.common import COMPLETE_ISSUE_FRAGMENT

CYCLE_FIELDS = """
  id
  name
  number
  startsAt
  endsAt
  isActive
  isPrevious
  isNext
  progress
  issueCountHistory
  team {
    id
    key
    name
  }
"""

LIST_CYCLES_QUERY = f"""
  query ListCycles($first: Int!, $filter: CycleFilter) {{
    cycles(first: $first, filter: $filter, orderBy: createdAt) {{
      nodes {{
        {CYCLE_FIELDS}
      }}
    }}
  }}
"""

GET_CYCLE_BY_ID_QUERY = f"""
  query GetCycle($id: String!, $issuesFirst: Int) {{
    cycle(id: $id) {{
      {CYCLE_FIELDS}
      issues(first: $issuesFirst) {{
        nodes {{
          {COMPLETE_ISSUE_FRAGMENT}
        }}
      }}
    }}
  }}
"""
