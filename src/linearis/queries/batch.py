"""
Static lookup sections combined into one batch-resolve query.

Each section is a complete aliased root field plus the variables it needs.
A batch only contains the sections whose inputs were supplied, so no lookup
ever runs with null filter variables (Linear's ``or`` filters match
everything when a compared value is null).
"""

from dataclasses import dataclass, field

from linearis.queries.common import WORKFLOW_STATES_FRAGMENT


@dataclass(frozen=True)
class Section:
    """One aliased lookup inside a batch query."""

    alias: str
    body: str
    variables: dict[str, str] = field(default_factory=dict)


ISSUE_CONTEXT_FIELDS = f"""
  id
  identifier
  team {{
    id
    key
    name
    {WORKFLOW_STATES_FRAGMENT}
  }}
  project {{
    id
    name
    projectMilestones {{ nodes {{ id name }} }}
  }}
  labels {{ nodes {{ id name }} }}
"""

TEAM_BY_REF = Section(
    alias="teams",
    variables={"teamRef": "String!"},
    body=f"""
    teams: teams(
      filter: {{ or: [{{ key: {{ eqIgnoreCase: $teamRef }} }}, {{ name: {{ eqIgnoreCase: $teamRef }} }}] }}
      first: 10
    ) {{
      nodes {{
        id
        key
        name
        {WORKFLOW_STATES_FRAGMENT}
      }}
    }}
    """,
)

TEAM_BY_ID = Section(
    alias="team",
    variables={"teamId": "String!"},
    body=f"""
    team: team(id: $teamId) {{
      id
      key
      name
      {WORKFLOW_STATES_FRAGMENT}
    }}
    """,
)

PROJECT_BY_NAME = Section(
    alias="projects",
    variables={"projectName": "String!"},
    body="""
    projects: projects(filter: { name: { eqIgnoreCase: $projectName } }, first: 10) {
      nodes {
        id
        name
        state
        teams { nodes { id } }
        projectMilestones { nodes { id name } }
      }
    }
    """,
)

PROJECT_BY_ID = Section(
    alias="project",
    variables={"projectId": "String!"},
    body="""
    project: project(id: $projectId) {
      id
      name
      projectMilestones { nodes { id name } }
    }
    """,
)

LABELS_BY_NAME = Section(
    alias="labels",
    variables={"labelNames": "[String!]!"},
    body="""
    labels: issueLabels(filter: { name: { in: $labelNames } }, first: 250) {
      nodes {
        id
        name
        isGroup
        team { id key name }
      }
    }
    """,
)

USERS_BY_EMAIL = Section(
    alias="users",
    variables={"userRef": "String!"},
    body="""
    users: users(filter: { email: { eqIgnoreCase: $userRef } }, first: 10) {
      nodes { id name displayName email active }
    }
    """,
)

USERS_BY_NAME = Section(
    alias="users",
    variables={"userRef": "String!"},
    body="""
    users: users(
      filter: { or: [{ name: { eqIgnoreCase: $userRef } }, { displayName: { eqIgnoreCase: $userRef } }] }
      first: 10
    ) {
      nodes { id name displayName email active }
    }
    """,
)

ISSUE_BY_IDENTIFIER = Section(
    alias="issues",
    variables={"issueTeamKey": "String!", "issueNumber": "Float!"},
    body=f"""
    issues: issues(
      filter: {{ team: {{ key: {{ eq: $issueTeamKey }} }}, number: {{ eq: $issueNumber }} }}
      first: 1
    ) {{
      nodes {{
        {ISSUE_CONTEXT_FIELDS}
      }}
    }}
    """,
)

ISSUE_BY_ID = Section(
    alias="issue",
    variables={"issueId": "String!"},
    body=f"""
    issue: issue(id: $issueId) {{
      {ISSUE_CONTEXT_FIELDS}
    }}
    """,
)

PARENT_ISSUE_BY_IDENTIFIER = Section(
    alias="parentIssues",
    variables={"parentTeamKey": "String!", "parentNumber": "Float!"},
    body="""
    parentIssues: issues(
      filter: { team: { key: { eq: $parentTeamKey } }, number: { eq: $parentNumber } }
      first: 1
    ) {
      nodes { id identifier title }
    }
    """,
)

CYCLES_BY_NAME = Section(
    alias="cycles",
    variables={"cycleName": "String!"},
    body="""
    cycles: cycles(filter: { name: { eq: $cycleName } }, first: 25) {
      nodes {
        id
        name
        number
        startsAt
        isActive
        isNext
        isPrevious
        team { id key }
      }
    }
    """,
)

TEAM_CYCLES_BY_TEAM_ID = Section(
    alias="teamCycles",
    variables={"cycleName": "String!", "cycleTeamId": "ID!"},
    body="""
    teamCycles: cycles(
      filter: { name: { eq: $cycleName }, team: { id: { eq: $cycleTeamId } } }
      first: 25
    ) {
      nodes {
        id
        name
        number
        startsAt
        isActive
        isNext
        isPrevious
        team { id key }
      }
    }
    """,
)

TEAM_CYCLES_BY_TEAM_REF = Section(
    alias="teamCycles",
    variables={"cycleName": "String!", "cycleTeamRef": "String!"},
    body="""
    teamCycles: cycles(
      filter: {
        name: { eq: $cycleName }
        team: { or: [{ key: { eqIgnoreCase: $cycleTeamRef } }, { name: { eqIgnoreCase: $cycleTeamRef } }] }
      }
      first: 25
    ) {
      nodes {
        id
        name
        number
        startsAt
        isActive
        isNext
        isPrevious
        team { id key }
      }
    }
    """,
)

MILESTONES_BY_NAME = Section(
    alias="milestones",
    variables={"milestoneName": "String!"},
    body="""
    milestones: projectMilestones(filter: { name: { eqIgnoreCase: $milestoneName } }, first: 10) {
      nodes {
        id
        name
        project { id name }
      }
    }
    """,
)
