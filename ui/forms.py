"""
forms.py — Boundary Validation
==============================
Turns raw form / JSON input into values the core can trust.  Everything
past this module assumes node ids are non-empty upper-case strings,
costs are positive integers and the algorithm is a registered one.

Failures raise FormError carrying the user-facing message; the web layer
turns that into an HTTP 400.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from algorithms import Algorithm, get_algorithm
from graph import GraphStore

EDGE_ERROR      = "Please enter valid node names and a positive cost."
NODES_ERROR     = "Please enter valid start and goal nodes."
ALGORITHM_ERROR = "Please select a valid algorithm."


class FormError(ValueError):
    """Rejected user input.  `str(err)` is safe to show to the user."""


@dataclass(frozen=True)
class EdgeForm:
    source: str
    target: str
    cost:   int


@dataclass(frozen=True)
class SearchForm:
    algorithm: Algorithm
    start:     str
    goal:      str


def normalize_node(value: Any) -> str:
    """Strip and upper-case a node name; non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return value.strip().upper()


def parse_cost(value: Any) -> int:
    """Positive integer from an int or a decimal-digit string, else FormError."""
    if isinstance(value, bool):
        raise FormError(EDGE_ERROR)
    if isinstance(value, int):
        cost = value
    elif isinstance(value, str) and value.strip().isdecimal():
        cost = int(value.strip())
    else:
        raise FormError(EDGE_ERROR)
    if cost < 1:
        raise FormError(EDGE_ERROR)
    return cost


def parse_edge_form(data: Mapping[str, Any]) -> EdgeForm:
    source = normalize_node(data.get("from"))
    target = normalize_node(data.get("to"))
    if not source or not target:
        raise FormError(EDGE_ERROR)
    return EdgeForm(source=source, target=target, cost=parse_cost(data.get("cost")))


def parse_search_form(data: Mapping[str, Any], graph: GraphStore) -> SearchForm:
    """
    The start node must already be in the graph; the goal only has to be
    a name (an unreachable goal is a valid, if unsuccessful, search).
    """
    start = normalize_node(data.get("start"))
    goal  = normalize_node(data.get("goal"))
    if not start or not goal or not graph.has_node(start):
        raise FormError(NODES_ERROR)

    raw = data.get("algorithm")
    info = get_algorithm(raw) if isinstance(raw, str) and raw else None
    if info is None:
        raise FormError(ALGORITHM_ERROR)
    return SearchForm(algorithm=info.key, start=start, goal=goal)
