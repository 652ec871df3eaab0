import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from agent.corpus import Candidate
from agent.modules.analyze import ContentSignals, analyze_content
from agent.modules.diversify import select
from agent.modules.score import RandomSource, ScoredCandidate, score_candidates

logger = logging.getLogger(__name__)


@dataclass
class Ranking:
    signals: ContentSignals
    templates: list[ScoredCandidate] = field(default_factory=list)
    power_hooks: list[ScoredCandidate] = field(default_factory=list)


def rank(
    content: str,
    templates: Iterable[Candidate],
    power_hooks: Iterable[Candidate],
    template_limit: int = 5,
    power_hook_limit: int = 8,
    rand: RandomSource = random.random,
) -> Ranking:
    """Analyze → score → diversify, once per corpus."""
    signals = analyze_content(content)

    scored_templates = score_candidates(templates, signals, content, rand)
    scored_hooks = score_candidates(power_hooks, signals, content, rand)

    ranking = Ranking(
        signals=signals,
        templates=select(scored_templates, template_limit),
        power_hooks=select(scored_hooks, power_hook_limit),
    )
    logger.info(
        "Ranked %d templates → %d, %d power hooks → %d (tone=%s, topics=%s)",
        len(scored_templates), len(ranking.templates),
        len(scored_hooks), len(ranking.power_hooks),
        signals.tone.value, ",".join(signals.main_topics) or "-",
    )
    return ranking
