"""Pure listener-rule priority allocation.

Application Load Balancer rules are evaluated in ascending priority
order and the first match wins, so more specific path patterns must get
lower numbers than broader ones.  Every function here is deterministic
and side-effect free.

Ordering (enforced by :func:`order_paths`):

1. More path segments first (``/api/v1`` before ``/api``).
2. Longer literal prefix before the first wildcard.
3. Lexical order as a stable tie-breaker.
4. The catch-all ``*`` always last.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from archer_pack.exceptions import RulePriorityError

CATCH_ALL_PATH: str = "*"

MAX_RULE_PRIORITY: int = 50_000
"""Upper bound imposed by Elastic Load Balancing on rule priorities."""


def _normalize(path: str) -> str:
    stripped = path.strip()
    if stripped in ("", "/", CATCH_ALL_PATH, "/*"):
        return CATCH_ALL_PATH
    return "/" + stripped.strip("/")


def _literal_prefix_len(path: str) -> int:
    wildcard = min(
        (i for i in (path.find("*"), path.find("?")) if i >= 0),
        default=len(path),
    )
    return wildcard


def _sort_key(path: str) -> tuple[int, int, int, str]:
    if path == CATCH_ALL_PATH:
        return (1, 0, 0, path)
    segments = len([part for part in path.split("/") if part])
    return (0, -segments, -_literal_prefix_len(path), path)


def order_paths(paths: Iterable[str]) -> list[str]:
    """Return the distinct normalized *paths* from most to least specific."""
    return sorted({_normalize(p) for p in paths}, key=_sort_key)


def allocate_rule_priority(path: str, existing_paths: Sequence[str] = ()) -> int:
    """Return the 1-based priority of *path* among *existing_paths*.

    *path* is added to the set if not already present.  A lone rule
    always receives priority ``1``.

    Raises
    ------
    RulePriorityError
        If more rules exist than the load balancer can prioritise.
    """
    ordered = order_paths([*existing_paths, path])
    if len(ordered) > MAX_RULE_PRIORITY:
        raise RulePriorityError(
            f"allocate priority for path {path}: more than "
            f"{MAX_RULE_PRIORITY} listener rules",
            hint="Merge routes so fewer paths share the load balancer listener.",
        )
    return ordered.index(_normalize(path)) + 1
