"""GraphQL queries and mutations for project operations."""

from linearis.queries.common import COMPLETE_ISSUE_FRAGMENT

PROJECT_CORE_FIELDS = """
  id
  name
  description
  slugId
  icon
  color
  state
  progress
  priority
  sortOrder
  startDate
  targetDate
  createdAt
  updatedAt
"""

PROJECT_LEAD_FRAGMENT = """
  lead {
    id
    name
  }
"""

PROJECT_TEAMS_FRAGMENT = """
  teams {
    nodes {
      id
      key
      name
    }
  }
"""

COMPLETE_PROJECT_FRAGMENT = f"""
  {PROJECT_CORE_FIELDS}
  {PROJECT_LEAD_FRAGMENT}
  {PROJECT_TEAMS_FRAGMENT}
"""

LIST_PROJECTS_QUERY = f"""
  query ListProjects($first: Int!, $includeArchived: Boolean) {{
    projects(first: $first, includeArchived: $includeArchived, orderBy: updatedAt) {{
      nodes {{
        {COMPLETE_PROJECT_FRAGMENT}
      }}
    }}
  }}
"""

# milestones/issues use @skip so that `--*-first 0` drops the connection
GET_PROJECT_BY_ID_QUERY = f"""
  query GetProject(
    $id: String!
    $milestonesFirst: Int
    $issuesFirst: Int
    $skipMilestones: Boolean!
    $skipIssues: Boolean!
  ) {{
    project(id: $id) {{
      {COMPLETE_PROJECT_FRAGMENT}
      members {{
        nodes {{
          id
          name
        }}
      }}
      projectMilestones(first: $milestonesFirst) @skip(if: $skipMilestones) {{
        nodes {{
          id
          name
          description
          targetDate
          sortOrder
        }}
      }}
      issues(first: $issuesFirst) @skip(if: $skipIssues) {{
        nodes {{
          {COMPLETE_ISSUE_FRAGMENT}
        }}
      }}
    }}
  }}
"""

CREATE_PROJECT_MUTATION = f"""
  mutation CreateProject($input: ProjectCreateInput!) {{
    projectCreate(input: $input) {{
      success
      project {{
        {COMPLETE_PROJECT_FRAGMENT}
      }}
    }}
  }}
"""

UPDATE_PROJECT_MUTATION = f"""
  mutation UpdateProject($id: String!, $input: ProjectUpdateInput!) {{
    projectUpdate(id: $id, input: $input) {{
      success
      project {{
        {COMPLETE_PROJECT_FRAGMENT}
      }}
    }}
  }}
"""

ARCHIVE_PROJECT_MUTATION = """
  mutation ArchiveProject($id: String!) {
    projectArchive(id: $id) {
      success
    }
  }
"""
