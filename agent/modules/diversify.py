"""
Category-balanced shortlist selection.

Greedy three-pass allocation so no single rhetorical style dominates the
surfaced options:

  1. the best candidate of every category, in order of first appearance
  2. the second-best of every category (cap of 2 per category)
  3. whatever scores highest among the rest, regardless of category

Pass 3 is the only place a category can exceed the cap, and only when the
other categories are exhausted before ``limit`` is reached.
"""
from agent.modules.score import ScoredCandidate

CATEGORY_CAP = 2


def select(
    scored: list[ScoredCandidate],
    limit: int,
    per_category: int = CATEGORY_CAP,
) -> list[ScoredCandidate]:
    """Return at most ``limit`` candidates, best first. Never mutates ``scored``."""
    if limit <= 0 or not scored:
        return []

    groups: dict[str, list[ScoredCandidate]] = {}
    for item in scored:
        groups.setdefault(item.category, []).append(item)
    for members in groups.values():
        members.sort(key=lambda s: s.score, reverse=True)

    selected: list[ScoredCandidate] = []
    taken: set[int] = set()

    for rank in range(per_category):
        for members in groups.values():
            if len(selected) >= limit:
                break
            if rank < len(members):
                selected.append(members[rank])
                taken.add(id(members[rank]))

    if len(selected) < limit:
        remaining = [s for s in scored if id(s) not in taken]
        remaining.sort(key=lambda s: s.score, reverse=True)
        selected.extend(remaining[: limit - len(selected)])

    selected = selected[:limit]
    selected.sort(key=lambda s: s.score, reverse=True)
    return selected
