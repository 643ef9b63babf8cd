from itertools import combinations
from typing import Dict, Iterable, List, Tuple

import networkx as nx

from .models import Placement


def _overlaps(a: Placement, b: Placement) -> bool:
    return a.day == b.day and a.slot < b.slot + b.duration and b.slot < a.slot + a.duration


def build_clash_graph(placements: Iterable[Placement]) -> nx.Graph:
    """One node per placement, one edge per pair double-booking a resource.

    Edges carry a `resources` list naming what is shared, e.g.
    ["instructor:F1", "room:R1"].
    """
    G = nx.Graph()
    by_day: Dict[str, List[Placement]] = {}
    for p in placements:
        G.add_node(p.id, placement=p)
        by_day.setdefault(p.day, []).append(p)
    for day_list in by_day.values():
        for a, b in combinations(day_list, 2):
            if not _overlaps(a, b):
                continue
            shared: List[str] = []
            if a.instructor.id == b.instructor.id:
                shared.append(f"instructor:{a.instructor.id}")
            if a.room.id == b.room.id:
                shared.append(f"room:{a.room.id}")
            if a.section_key == b.section_key:
                shared.append(f"section:{a.cohort_id}-{a.section_id}")
            if shared:
                G.add_edge(a.id, b.id, resources=shared)
    return G


def clash_pairs(G: nx.Graph) -> List[Tuple[str, str, List[str]]]:
    return [(u, v, d["resources"]) for u, v, d in G.edges(data=True)]
