"""Wall-clock measurement of the planning stages."""

import time
from dataclasses import dataclass
from typing import Optional, Tuple

from ..algorithms.graph import extract
from ..algorithms.quadtree import decompose
from ..models import Field, Point
from ..planner import PlannerParams, PlanResult, resolve_endpoints, solve


@dataclass
class StageTimings:
    decompose: float = 0.0
    extract: float = 0.0
    solve: float = 0.0

    @property
    def total(self) -> float:
        return self.decompose + self.extract + self.solve


def timed_plan(
    field: Field,
    params: Optional[PlannerParams] = None,
    start: Optional[Point] = None,
    dest: Optional[Point] = None,
) -> Tuple[PlanResult, StageTimings]:
    """Same pipeline as ``plan_path``, timing each stage call from outside."""
    params = params or PlannerParams()
    start, dest = resolve_endpoints(field, start, dest)
    timings = StageTimings()

    t0 = time.perf_counter()
    tree = decompose(field, params.min_size)
    t1 = time.perf_counter()
    graph = extract(tree, start, dest)
    t2 = time.perf_counter()
    path = solve(graph)
    t3 = time.perf_counter()

    timings.decompose = t1 - t0
    timings.extract = t2 - t1
    timings.solve = t3 - t2
    result = PlanResult(field=field, start=start, dest=dest, tree=tree, graph=graph, path=path)
    return result, timings
