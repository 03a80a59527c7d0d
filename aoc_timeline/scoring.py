"""Rank based scoring of star completions"""
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from aoc_timeline.models.timeline import CompletionEvent, ScoredEvent, StarKey


class StarScorer:
    """
    Awards decaying points per star as members complete it.

    Each star starts with a pool of max_score points. The first member to
    finish a star takes the whole pool, the next one point less, and so on.
    Events must be fed in chronological order, exactly once.
    """

    def __init__(self, max_score: int):
        self.max_score = max_score
        self.pools: Dict[StarKey, int] = {}
        self.totals: Dict[str, int] = defaultdict(int)

    def score(self, event: CompletionEvent) -> int:
        """Score one event and add it to the member's running total"""
        points = self.pools.get(event.star_key, self.max_score)
        self.pools[event.star_key] = points - 1
        self.totals[event.member_label] += points
        return points


def rank_totals(totals: Dict[str, int]) -> List[Tuple[str, int]]:
    """Totals ordered by score, highest first, ties by label"""
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def score_timeline(events: Iterable[CompletionEvent],
                   member_count: int) -> Tuple[List[ScoredEvent], Dict[str, int]]:
    """Score an ordered timeline, returning scored events and per-member totals"""
    scorer = StarScorer(member_count)
    scored = [ScoredEvent(event=event, score=scorer.score(event)) for event in events]
    return scored, dict(scorer.totals)
