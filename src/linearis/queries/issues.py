"""GraphQL queries and mutations for issue operations."""

from linearis.queries.common import (
    COMPLETE_ISSUE_FRAGMENT,
    COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT,
)

GET_ISSUES_QUERY = f"""
  query GetIssues($first: Int!, $orderBy: PaginationOrderBy) {{
    issues(first: $first, orderBy: $orderBy) {{
      nodes {{
        {COMPLETE_ISSUE_FRAGMENT}
      }}
    }}
  }}
"""

GET_ISSUE_BY_ID_QUERY = f"""
  query GetIssue($id: String!) {{
    issue(id: $id) {{
      {COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT}
    }}
  }}
"""

GET_ISSUE_BY_IDENTIFIER_QUERY = f"""
  query GetIssueByIdentifier($teamKey: String!, $number: Float!) {{
    issues(filter: {{ team: {{ key: {{ eq: $teamKey }} }}, number: {{ eq: $number }} }}, first: 1) {{
      nodes {{
        {COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT}
      }}
    }}
  }}
"""

SEARCH_ISSUES_QUERY = f"""
  query SearchIssues($term: String!, $first: Int!) {{
    searchIssues(term: $term, first: $first) {{
      nodes {{
        {COMPLETE_ISSUE_FRAGMENT}
      }}
    }}
  }}
"""

FILTERED_SEARCH_ISSUES_QUERY = f"""
  query FilteredSearchIssues($first: Int!, $filter: IssueFilter, $orderBy: PaginationOrderBy) {{
    issues(first: $first, filter: $filter, orderBy: $orderBy) {{
      nodes {{
        {COMPLETE_ISSUE_FRAGMENT}
      }}
    }}
  }}
"""

CREATE_ISSUE_MUTATION = f"""
  mutation CreateIssue($input: IssueCreateInput!) {{
    issueCreate(input: $input) {{
      success
      issue {{
        {COMPLETE_ISSUE_FRAGMENT}
      }}
    }}
  }}
"""

UPDATE_ISSUE_MUTATION = f"""
  mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {{
    issueUpdate(id: $id, input: $input) {{
      success
      issue {{
        {COMPLETE_ISSUE_FRAGMENT}
      }}
    }}
  }}
"""

DELETE_ISSUE_MUTATION = """
  mutation DeleteIssue($id: String!) {
    issueDelete(id: $id) {
      success
    }
  }
"""
