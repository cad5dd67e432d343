"""Cycle list/read."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linearis.errors import NotFoundError, ValidationError
from linearis.queries.cycles import GET_CYCLE_BY_ID_QUERY, LIST_CYCLES_QUERY
from linearis.resolve import Resolver
from linearis.transform import nodes, transform_cycle

if TYPE_CHECKING:
    from linearis.client import LinearClient


class CyclesService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def list(
        self,
        team: str | None = None,
        active: bool = False,
        around_active: int | None = None,
        limit: int = 250,
    ) -> list[dict[str, Any]]:
        """List cycles.

        ``around_active`` keeps the active cycle and the N cycles on either
        side of it by number; it needs ``team`` since every team numbers its
        own cycles.
        """
        if around_active is not None and not team:
            raise ValidationError("--around-active requires --team")

        cycle_filter: dict[str, Any] = {}
        if team:
            team_id = await self._resolver.team_id(team)
            cycle_filter["team"] = {"id": {"eq": team_id}}
        if active:
            cycle_filter["isActive"] = {"eq": True}

        variables: dict[str, Any] = {"first": limit}
        if cycle_filter:
            variables["filter"] = cycle_filter
        result = await self._client.request(LIST_CYCLES_QUERY, variables, operation="list cycles")
        cycles = [transform_cycle(c) for c in nodes(result.get("cycles"))]

        if around_active is None:
            return cycles
        current = next((c for c in cycles if c.get("isActive")), None)
        if current is None:
            raise NotFoundError("Active cycle", team, "the team has no active cycle")
        low = current["number"] - around_active
        high = current["number"] + around_active
        window = [c for c in cycles if low <= c.get("number", -1) <= high]
        return sorted(window, key=lambda c: c["number"])

    async def get(self, ref: str, team: str | None = None, issues_first: int = 50) -> dict[str, Any]:
        cycle_id = await self._resolver.cycle_id(ref, team)
        result = await self._client.request(
            GET_CYCLE_BY_ID_QUERY,
            {"id": cycle_id, "issuesFirst": issues_first},
            operation=f'read cycle "{ref}"',
        )
        cycle = result.get("cycle")
        if not cycle:
            raise NotFoundError("Cycle", ref)
        return transform_cycle(cycle)
