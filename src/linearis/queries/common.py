"""
Reusable GraphQL field selections.

Fetching relationships inline keeps every command to one request instead
of one request per related entity.
"""

ISSUE_CORE_FIELDS = """
  id
  identifier
  title
  description
  branchName
  priority
  estimate
  createdAt
  updatedAt
"""

ISSUE_RELATIONS_FRAGMENT = """
  state { id name }
  assignee { id name }
  team { id key name }
  project { id name }
  cycle { id name number }
  projectMilestone { id name targetDate }
  labels { nodes { id name } }
  parent { id identifier title }
  children { nodes { id identifier title } }
"""

COMPLETE_ISSUE_FRAGMENT = f"""
  {ISSUE_CORE_FIELDS}
  {ISSUE_RELATIONS_FRAGMENT}
"""

ISSUE_COMMENTS_FRAGMENT = """
  comments {
    nodes {
      id
      body
      createdAt
      updatedAt
      user { id name }
    }
  }
"""

COMPLETE_ISSUE_WITH_COMMENTS_FRAGMENT = f"""
  {COMPLETE_ISSUE_FRAGMENT}
  {ISSUE_COMMENTS_FRAGMENT}
"""

WORKFLOW_STATES_FRAGMENT = """
  states { nodes { id name type } }
"""
