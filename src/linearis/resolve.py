"""
Identifier resolution: human references to Linear UUIDs.

Two pieces work together:

- BatchQuery combines every lookup one command needs into a single request.
- choose() picks exactly one candidate per reference by walking an ordered
  list of candidate sources (e.g. team-scoped cycles, then all cycles) and
  an ordered list of tie-break strategies. Zero candidates raise
  NotFoundError; an unbroken tie raises AmbiguousMatchError listing every
  remaining candidate.

Opaque (UUID) references never trigger a lookup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from linearis.errors import AmbiguousMatchError, NotFoundError
from linearis.identifiers import is_uuid, looks_like_email, parse_issue_identifier
from linearis.queries import batch as sections
from linearis.queries.batch import Section
from linearis.transform import nodes

if TYPE_CHECKING:
    from linearis.client import LinearClient

logger = logging.getLogger(__name__)

Node = dict[str, Any]


# ---------------------------------------------------------------------------
# Batch query assembly
# ---------------------------------------------------------------------------


class BatchQuery:
    """Collects lookup sections and runs them as one GraphQL request."""

    def __init__(self, name: str):
        self.name = name
        self._sections: dict[str, Section] = {}
        self._variables: dict[str, Any] = {}

    def add(self, section: Section, **values: Any) -> None:
        if section.alias in self._sections:
            raise ValueError(f"Section {section.alias!r} already added to {self.name}")
        missing = set(section.variables) - set(values)
        if missing:
            raise ValueError(f"Section {section.alias!r} missing variables: {sorted(missing)}")
        self._sections[section.alias] = section
        self._variables.update(values)

    def __contains__(self, alias: str) -> bool:
        return alias in self._sections

    def __bool__(self) -> bool:
        return bool(self._sections)

    @property
    def variables(self) -> dict[str, Any]:
        return dict(self._variables)

    def render(self) -> str:
        # sections may share a variable; declare it once
        declared: dict[str, str] = {}
        for section in self._sections.values():
            for name, gql_type in section.variables.items():
                declared.setdefault(name, gql_type)
        declarations = ", ".join(f"${name}: {gql_type}" for name, gql_type in declared.items())
        body = "\n".join(section.body for section in self._sections.values())
        return f"query {self.name}({declarations}) {{\n{body}\n}}"

    async def execute(self, client: LinearClient, operation: str) -> dict[str, Any]:
        """Run the batch; an empty batch costs no round trip."""
        if not self._sections:
            return {}
        logger.debug("batch %s: %s", self.name, ", ".join(self._sections))
        return await client.request(self.render(), self._variables, operation=operation)


# ---------------------------------------------------------------------------
# Strategy chain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Strategy:
    """A named tie-break rule: keeps the candidates it matches."""

    name: str
    matches: Callable[[Node], bool]


def _describe_default(node: Node) -> str:
    return f'"{node.get("name")}" ({node.get("id")})'


def choose(
    entity: str,
    value: str,
    sources: Iterable[Sequence[Node]],
    strategies: Sequence[Strategy] = (),
    describe: Callable[[Node], str] = _describe_default,
    ambiguous_hint: str | None = None,
    not_found_hint: str | None = None,
) -> Node:
    """Pick exactly one candidate for ``value``.

    The first non-empty source wins. Within it, strategies are applied in
    order; each one that matches something narrows the pool, and the first
    pool of size one is the answer.
    """
    for source in sources:
        pool = list(source)
        if not pool:
            continue
        if len(pool) == 1:
            return pool[0]
        for strategy in strategies:
            narrowed = [node for node in pool if strategy.matches(node)]
            if len(narrowed) == 1:
                logger.debug("%s %r resolved by %s", entity, value, strategy.name)
                return narrowed[0]
            if narrowed:
                pool = narrowed
        raise AmbiguousMatchError(entity, value, [describe(n) for n in pool], ambiguous_hint)
    raise NotFoundError(entity, value, not_found_hint)


# ---------------------------------------------------------------------------
# Per-entity pickers (pure, operate on lookup results)
# ---------------------------------------------------------------------------


def _lower(value: Any) -> str:
    return str(value or "").lower()


def _team_id_of(node: Node) -> str | None:
    return (node.get("team") or {}).get("id")


def pick_team(candidates: Sequence[Node], ref: str) -> Node:
    # the server filter is case-insensitive; keep only true matches
    matching = [
        t for t in candidates if _lower(t.get("key")) == ref.lower() or _lower(t.get("name")) == ref.lower()
    ]
    return choose(
        "Team",
        ref,
        [matching],
        [
            Strategy("exact key", lambda t: _lower(t.get("key")) == ref.lower()),
            Strategy("exact name", lambda t: t.get("name") == ref),
        ],
        describe=lambda t: f'{t.get("key")} ("{t.get("name")}")',
        ambiguous_hint="use the team key or ID",
    )


def pick_project(candidates: Sequence[Node], ref: str, team_id: str | None = None) -> Node:
    matching = [p for p in candidates if _lower(p.get("name")) == ref.lower()]
    strategies = [Strategy("exact name", lambda p: p.get("name") == ref)]
    if team_id:
        strategies.append(
            Strategy("team", lambda p: team_id in {t.get("id") for t in nodes(p.get("teams"))})
        )
    return choose(
        "Project",
        ref,
        [matching],
        strategies,
        describe=lambda p: f'"{p.get("name")}" ({p.get("state", p.get("id"))})',
        ambiguous_hint="use the project ID",
    )


def pick_label(candidates: Sequence[Node], name: str, team_id: str | None = None) -> Node:
    matching = [label for label in candidates if label.get("name") == name]
    strategies = [Strategy("not a group", lambda label: not label.get("isGroup"))]
    if team_id:
        strategies.append(Strategy("team", lambda label: _team_id_of(label) == team_id))
    strategies.append(Strategy("workspace", lambda label: not label.get("team")))

    def describe(label: Node) -> str:
        team = label.get("team")
        scope = f"team {team.get('key') or team.get('name')}" if team else "workspace"
        return f'"{label.get("name")}" ({scope})'

    return choose(
        "Label",
        name,
        [matching],
        strategies,
        describe=describe,
        ambiguous_hint="use the label ID or specify --team",
    )


def pick_user(candidates: Sequence[Node], ref: str) -> Node:
    return choose(
        "User",
        ref,
        [candidates],
        [
            Strategy("exact email", lambda u: _lower(u.get("email")) == ref.lower()),
            Strategy("exact name", lambda u: u.get("name") == ref),
            Strategy("exact display name", lambda u: u.get("displayName") == ref),
            Strategy("active", lambda u: bool(u.get("active"))),
        ],
        describe=lambda u: f'{u.get("name")} <{u.get("email")}>',
        ambiguous_hint="use the user ID or e-mail address",
    )


CYCLE_PREFERENCES = (
    Strategy("active", lambda c: bool(c.get("isActive"))),
    Strategy("next", lambda c: bool(c.get("isNext"))),
    Strategy("previous", lambda c: bool(c.get("isPrevious"))),
)


def pick_cycle(
    candidates: Sequence[Node],
    ref: str,
    team_id: str | None = None,
    team_cycles: Sequence[Node] = (),
) -> Node:
    """Team-scoped cycles first, then every team; ties prefer active > next > previous.

    ``team_cycles`` holds cycles the server already filtered to the team, so
    they are not lost when the global lookup is truncated.
    """
    matching = [c for c in candidates if c.get("name") == ref]
    scoped = {c["id"]: c for c in team_cycles if c.get("name") == ref}
    if team_id:
        for cycle in matching:
            if _team_id_of(cycle) == team_id:
                scoped.setdefault(cycle["id"], cycle)
    sources: list[Sequence[Node]] = []
    if team_id or team_cycles:
        sources.append(list(scoped.values()))
    sources.append(matching)

    def describe(cycle: Node) -> str:
        team = (cycle.get("team") or {}).get("key", "?")
        return f'"{cycle.get("name")}" #{cycle.get("number")} (team {team})'

    return choose(
        "Cycle",
        ref,
        sources,
        CYCLE_PREFERENCES,
        describe=describe,
        ambiguous_hint="use the cycle ID or scope with --team",
    )


def pick_milestone(ref: str, *sources: Sequence[Node], project_given: bool = False) -> Node:
    """Milestones from the most specific project first, global lookup last."""
    filtered = [[m for m in source if _lower(m.get("name")) == ref.lower()] for source in sources]

    def describe(milestone: Node) -> str:
        project = (milestone.get("project") or {}).get("name")
        return f'"{milestone.get("name")}" in project "{project}"' if project else _describe_default(milestone)

    return choose(
        "Milestone",
        ref,
        filtered,
        [Strategy("exact name", lambda m: m.get("name") == ref)],
        describe=describe,
        ambiguous_hint="use the milestone ID or specify --project",
        not_found_hint=None if project_given else "consider specifying --project",
    )


def pick_state(states: Sequence[Node], ref: str, team_label: str | None = None) -> Node:
    matching = [s for s in states if _lower(s.get("name")) == ref.lower()]
    return choose(
        "Status",
        ref,
        [matching],
        [Strategy("exact name", lambda s: s.get("name") == ref)],
        describe=lambda s: f'"{s.get("name")}" ({s.get("type")})',
        not_found_hint=f"in team {team_label}" if team_label else None,
    )


# ---------------------------------------------------------------------------
# Batch section helpers
# ---------------------------------------------------------------------------


def add_team_lookup(batch: BatchQuery, ref: str) -> None:
    if is_uuid(ref):
        batch.add(sections.TEAM_BY_ID, teamId=ref)
    else:
        batch.add(sections.TEAM_BY_REF, teamRef=ref)


def team_from(result: dict[str, Any], ref: str) -> Node:
    if is_uuid(ref):
        team = result.get("team")
        if not team:
            raise NotFoundError("Team", ref)
        return team
    return pick_team(nodes(result.get("teams")), ref)


def add_cycle_lookup(batch: BatchQuery, ref: str, team_ref: str | None = None) -> None:
    """Global cycle lookup, plus a server-side team-scoped one when the team is known."""
    batch.add(sections.CYCLES_BY_NAME, cycleName=ref)
    if not team_ref:
        return
    if is_uuid(team_ref):
        batch.add(sections.TEAM_CYCLES_BY_TEAM_ID, cycleName=ref, cycleTeamId=team_ref)
    else:
        batch.add(sections.TEAM_CYCLES_BY_TEAM_REF, cycleName=ref, cycleTeamRef=team_ref)


def cycle_from(result: dict[str, Any], ref: str, team_id: str | None = None) -> Node:
    return pick_cycle(
        nodes(result.get("cycles")), ref, team_id, nodes(result.get("teamCycles"))
    )


def add_user_lookup(batch: BatchQuery, ref: str) -> None:
    section = sections.USERS_BY_EMAIL if looks_like_email(ref) else sections.USERS_BY_NAME
    batch.add(section, userRef=ref)


def add_issue_lookup(batch: BatchQuery, ref: str) -> None:
    if is_uuid(ref):
        batch.add(sections.ISSUE_BY_ID, issueId=ref)
    else:
        identifier = parse_issue_identifier(ref)
        batch.add(
            sections.ISSUE_BY_IDENTIFIER,
            issueTeamKey=identifier.team_key,
            issueNumber=identifier.number,
        )


def issue_from(result: dict[str, Any], ref: str) -> Node:
    if is_uuid(ref):
        issue = result.get("issue")
    else:
        found = nodes(result.get("issues"))
        issue = found[0] if found else None
    if not issue:
        raise NotFoundError("Issue", ref)
    return issue


# ---------------------------------------------------------------------------
# Single-reference resolvers (one round trip at most)
# ---------------------------------------------------------------------------


class Resolver:
    """Resolves one human reference at a time for commands that take one."""

    def __init__(self, client: LinearClient):
        self._client = client

    async def team(self, ref: str) -> Node:
        batch = BatchQuery("ResolveTeam")
        add_team_lookup(batch, ref)
        result = await batch.execute(self._client, f'resolve team "{ref}"')
        return team_from(result, ref)

    async def team_id(self, ref: str) -> str:
        if is_uuid(ref):
            return ref
        return (await self.team(ref))["id"]

    async def project_id(self, ref: str, team_id: str | None = None) -> str:
        if is_uuid(ref):
            return ref
        batch = BatchQuery("ResolveProject")
        batch.add(sections.PROJECT_BY_NAME, projectName=ref)
        result = await batch.execute(self._client, f'resolve project "{ref}"')
        return pick_project(nodes(result.get("projects")), ref, team_id)["id"]

    async def issue_id(self, ref: str) -> str:
        if is_uuid(ref):
            return ref
        batch = BatchQuery("ResolveIssue")
        add_issue_lookup(batch, ref)
        result = await batch.execute(self._client, f'resolve issue "{ref}"')
        return issue_from(result, ref)["id"]

    async def user_id(self, ref: str) -> str:
        if is_uuid(ref):
            return ref
        batch = BatchQuery("ResolveUser")
        add_user_lookup(batch, ref)
        result = await batch.execute(self._client, f'resolve user "{ref}"')
        return pick_user(nodes(result.get("users")), ref)["id"]

    async def cycle_id(self, ref: str, team_ref: str | None = None) -> str:
        if is_uuid(ref):
            return ref
        batch = BatchQuery("ResolveCycle")
        add_cycle_lookup(batch, ref, team_ref)
        if team_ref and not is_uuid(team_ref):
            batch.add(sections.TEAM_BY_REF, teamRef=team_ref)
        result = await batch.execute(self._client, f'resolve cycle "{ref}"')
        team_id = None
        if team_ref:
            team_id = team_ref if is_uuid(team_ref) else pick_team(nodes(result.get("teams")), team_ref)["id"]
        return cycle_from(result, ref, team_id)["id"]

    async def milestone_id(self, ref: str, project_ref: str | None = None) -> str:
        if is_uuid(ref):
            return ref
        batch = BatchQuery("ResolveMilestone")
        if project_ref:
            if is_uuid(project_ref):
                batch.add(sections.PROJECT_BY_ID, projectId=project_ref)
            else:
                batch.add(sections.PROJECT_BY_NAME, projectName=project_ref)
        else:
            batch.add(sections.MILESTONES_BY_NAME, milestoneName=ref)
        result = await batch.execute(self._client, f'resolve milestone "{ref}"')

        if not project_ref:
            return pick_milestone(ref, nodes(result.get("milestones")))["id"]

        if is_uuid(project_ref):
            project = result.get("project")
            if not project:
                raise NotFoundError("Project", project_ref)
        else:
            project = pick_project(nodes(result.get("projects")), project_ref)
        project_milestones = [
            {**m, "project": {"id": project["id"], "name": project.get("name")}}
            for m in nodes(project.get("projectMilestones"))
        ]
        return pick_milestone(ref, project_milestones, project_given=True)["id"]
