"""Mini README: A* route planner over the sixteen-heading movement model.

Structure:
    * PlannerConfig - explicit movement and search settings for one planner.
    * SearchNode - arena slot holding a position, its costs and parent index.
    * RoutePlanner - runs the constrained A* search and rebuilds the path.
    * plan_route - functional entry point used by services and the CLI.

The search starts at the origin and repeatedly expands the cheapest
frontier node by one move along every compass heading. Moves into or onto a
no-fly zone are dropped. Once any expanded node lies in the central area,
moves that would leave it are dropped for the rest of the run. The search
stops at the first node within the proximity threshold of the destination
and appends the exact destination as the final waypoint. An exhausted
frontier yields an empty route.

Nodes live in a flat arena and refer to their parent by index. The
best-cost map keys positions by their coordinates rounded to
``position_key_digits`` decimal places (``None`` keys on the exact floats),
which merges positions reached by the same moves in a different order.
Positions themselves are never rounded.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .distance import euclidean_distance, is_close
from .geometry import LngLat, NamedRegion, PreparedRegion
from .movement import move_table

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PlannerConfig:
    """Movement and search settings threaded into every planning run."""

    step_length: float
    proximity_threshold: float
    max_expansions: Optional[int] = None
    position_key_digits: Optional[int] = 12

    def __post_init__(self) -> None:
        if self.step_length <= 0:
            raise ValueError("step_length must be positive")
        if self.proximity_threshold <= 0:
            raise ValueError("proximity_threshold must be positive")
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError("max_expansions must be at least 1 when set")


@dataclass(slots=True)
class SearchNode:
    """One arena slot; ``parent`` is an arena index or None for the origin."""

    position: LngLat
    g: float
    h: float
    parent: Optional[int] = None

    @property
    def f(self) -> float:
        return self.g + self.h


class RoutePlanner:
    """Plan compass-step routes that respect no-fly zones and the central area."""

    def __init__(self, config: PlannerConfig) -> None:
        self.config = config
        LOGGER.debug(
            "Initialised RoutePlanner with step_length=%s proximity_threshold=%s",
            config.step_length,
            config.proximity_threshold,
        )

    def plan(
        self,
        origin: LngLat,
        destination: LngLat,
        no_fly_zones: Sequence[NamedRegion],
        central_area: NamedRegion,
    ) -> List[LngLat]:
        """Return waypoints from ``origin`` to ``destination``, or ``[]`` if none exist.

        The regions must already have passed ``NamedRegion.validate``; they
        are read but never modified.
        """

        central = PreparedRegion.from_region(central_area)
        zones = [PreparedRegion.from_region(zone) for zone in no_fly_zones]
        moves = move_table(self.config.step_length)
        threshold = self.config.proximity_threshold
        max_expansions = self.config.max_expansions

        LOGGER.debug(
            "Planning route from %s to %s avoiding %s no-fly zones",
            origin,
            destination,
            len(zones),
        )

        arena: List[SearchNode] = [
            SearchNode(origin, 0.0, euclidean_distance(origin, destination))
        ]
        best_slot: Dict[Hashable, int] = {self._key(origin): 0}
        sequence = itertools.count()
        # Entries are (f, insertion order, arena index, g at push time).
        frontier: List[Tuple[float, int, int, float]] = [
            (arena[0].f, next(sequence), 0, 0.0)
        ]
        inside_central = False
        expansions = 0

        while frontier:
            _, _, index, pushed_g = heapq.heappop(frontier)
            node = arena[index]
            if pushed_g != node.g:
                # Superseded by a cheaper arrival that has its own entry.
                continue
            current = node.position

            if not inside_central and central.covers(current):
                inside_central = True
                LOGGER.debug("Route entered central area '%s' at %s", central.name, current)

            if is_close(current, destination, threshold):
                arena.append(SearchNode(destination, node.g, 0.0, index))
                path = self._reconstruct(arena, len(arena) - 1)
                LOGGER.info(
                    "Route found with %s waypoints after %s expansions",
                    len(path),
                    expansions,
                )
                return path

            if max_expansions is not None and expansions >= max_expansions:
                LOGGER.warning(
                    "Search abandoned after %s expansions without reaching %s",
                    expansions,
                    destination,
                )
                return []
            expansions += 1

            for _, delta_lng, delta_lat in moves:
                candidate = LngLat(current.lng + delta_lng, current.lat + delta_lat)
                if inside_central and not central.covers(candidate):
                    continue
                if any(zone.covers(candidate) for zone in zones):
                    continue

                tentative_g = node.g + euclidean_distance(current, candidate)
                key = self._key(candidate)
                slot = best_slot.get(key)
                if slot is not None and arena[slot].g <= tentative_g:
                    continue

                h = euclidean_distance(candidate, destination)
                if slot is None:
                    slot = len(arena)
                    arena.append(SearchNode(candidate, tentative_g, h, index))
                    best_slot[key] = slot
                else:
                    existing = arena[slot]
                    existing.position = candidate
                    existing.g = tentative_g
                    existing.h = h
                    existing.parent = index
                heapq.heappush(frontier, (tentative_g + h, next(sequence), slot, tentative_g))

        LOGGER.info("No route found after %s expansions", expansions)
        return []

    def _key(self, position: LngLat) -> Hashable:
        digits = self.config.position_key_digits
        if digits is None:
            return (position.lng, position.lat)
        return (round(position.lng, digits), round(position.lat, digits))

    @staticmethod
    def _reconstruct(arena: Sequence[SearchNode], index: Optional[int]) -> List[LngLat]:
        path: List[LngLat] = []
        while index is not None:
            node = arena[index]
            path.append(node.position)
            index = node.parent
        path.reverse()
        return path


def plan_route(
    origin: LngLat,
    destination: LngLat,
    no_fly_zones: Sequence[NamedRegion],
    central_area: NamedRegion,
    step_length: float,
    proximity_threshold: float,
    *,
    max_expansions: Optional[int] = None,
) -> List[LngLat]:
    """Plan a single route with a throwaway ``RoutePlanner``."""

    config = PlannerConfig(
        step_length=step_length,
        proximity_threshold=proximity_threshold,
        max_expansions=max_expansions,
    )
    return RoutePlanner(config).plan(origin, destination, no_fly_zones, central_area)
