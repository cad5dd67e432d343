"""GraphQL queries and mutations for project milestone operations."""

from linearis.queries.common import COMPLETE_ISSUE_FRAGMENT

MILESTONE_FIELDS = """
  id
  name
  description
  targetDate
  sortOrder
  createdAt
  updatedAt
  project {
    id
    name
  }
"""

LIST_PROJECT_MILESTONES_QUERY = f"""
  query ListProjectMilestones($projectId: String!, $first: Int!) {{
    project(id: $projectId) {{
      id
      name
      projectMilestones(first: $first) {{
        nodes {{
          {MILESTONE_FIELDS}
        }}
      }}
    }}
  }}
"""

GET_PROJECT_MILESTONE_BY_ID_QUERY = f"""
  query GetProjectMilestone($id: String!, $issuesFirst: Int) {{
    projectMilestone(id: $id) {{
      {MILESTONE_FIELDS}
      issues(first: $issuesFirst) {{
        nodes {{
          {COMPLETE_ISSUE_FRAGMENT}
        }}
      }}
    }}
  }}
"""

CREATE_PROJECT_MILESTONE_MUTATION = f"""
  mutation CreateProjectMilestone($input: ProjectMilestoneCreateInput!) {{
    projectMilestoneCreate(input: $input) {{
      success
      projectMilestone {{
        {MILESTONE_FIELDS}
      }}
    }}
  }}
"""

UPDATE_PROJECT_MILESTONE_MUTATION = f"""
  mutation UpdateProjectMilestone($id: String!, $input: ProjectMilestoneUpdateInput!) {{
    projectMilestoneUpdate(id: $id, input: $input) {{
      success
      projectMilestone {{
        {MILESTONE_FIELDS}
      }}
    }}
  }}
"""
