'''Evaluators that operate sequentially on ranked ballots.

This hosts the instant-runoff evaluator (:class:`InstantRunoff`), also known
as ranked choice voting (RCV) or the alternative vote.
'''

import dataclasses
import logging
import sys
from typing import Any, ClassVar, Collection, Dict, Hashable, List, \
    Optional, Tuple

import ranktally.util
import ranktally.vote
import ranktally.evaluate.core
import ranktally.evaluate.tiebreak
from ranktally.persist import simple_serialization

LAST_PLACE = 'last-place'

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Round(ranktally.evaluate.core.CamelCaseSerialized):
    '''A snapshot of a single instant-runoff round.

    :param counts: Number of ballots whose highest-ranked remaining choice is
        the given candidate, for every remaining candidate.
    :param total_votes: Number of ballots counted in the round (the sum of
        counts). Exhausted ballots, ranking no remaining candidate, are
        not included.
    :param eliminated: The candidate eliminated in this round; None for the
        final round.
    :param elimination_reason: Why that candidate was chosen for elimination:
        ``'last-place'`` if it had the fewest votes alone, ``'head-to-head'``
        or ``'coin-flip'`` if several candidates shared the fewest votes and
        the tie had to be broken.
    '''
    omit_if_none: ClassVar[frozenset] = frozenset(['elimination_reason'])

    counts: Dict[Hashable, int]
    total_votes: int
    eliminated: Optional[Hashable] = None
    elimination_reason: Optional[str] = None


@dataclasses.dataclass
class RCVResult(ranktally.evaluate.core.Result):
    '''Result of an instant-runoff evaluation.

    :param winner: The winning candidate, or None if there was no candidate
        or no ballot (or the count was stopped before it was decided).
    :param rounds: All rounds counted, in order.
    :param total_votes: Number of ballots cast, including those exhausted
        in the course of the count.
    '''
    method: ClassVar[str] = 'rcv'

    winner: Optional[Hashable]
    rounds: List[Round]
    total_votes: int


@simple_serialization
class InstantRunoff(ranktally.evaluate.core.Evaluator):
    '''Select a candidate by eliminating the weakest ones round by round.

    In every round, each ballot counts for its highest-ranked candidate that
    has not been eliminated yet. A candidate with more than half of the
    ballots counted in the round wins. Otherwise, the candidate with the
    fewest ballots is eliminated and the next round is counted. If several
    candidates share the fewest ballots, the weakest of them head-to-head is
    eliminated (see :mod:`ranktally.evaluate.tiebreak`). The last remaining
    candidate wins regardless of majority.
    '''
    tie_breaker = ranktally.evaluate.tiebreak.HeadToHeadTieBreaker(
        ranktally.evaluate.tiebreak.FIND_WEAKEST
    )

    def evaluate(self,
                 candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> RCVResult:
        '''Count all rounds until a winner is found.

        :param candidates: Candidates standing in the poll.
        :param ballots: Ballots cast.
        '''
        return self.nth_round(candidates, ballots, sys.maxsize)

    def nth_round(self,
                  candidates: Collection[Any],
                  ballots: Collection[Any],
                  round_number: int = 1,
                  ) -> RCVResult:
        '''Get the intermediate counting state after a given round.

        :param candidates: Candidates standing in the poll.
        :param ballots: Ballots cast.
        :param round_number: 1-indexed number of the last round to count.
            Counting also stops earlier when a winner is found.
        :returns: The result with the rounds counted so far; its winner is
            None if the count has not been decided yet.
        '''
        cand_ids, rankings = ranktally.evaluate.core.tally_input(
            candidates, ballots
        )
        if not cand_ids or not rankings:
            return RCVResult(None, [], 0)
        remaining = list(cand_ids)
        rounds = []
        winner = None
        while winner is None and len(rounds) < round_number:
            logger.info('proceeding to round %d', len(rounds) + 1)
            count, winner = self.next_round(remaining, rankings)
            rounds.append(count)
            if count.eliminated is not None:
                remaining.remove(count.eliminated)
        return RCVResult(winner, rounds, len(rankings))

    def next_round(self,
                   remaining: List[Hashable],
                   rankings: Collection[ranktally.vote.RankedBallotType],
                   ) -> Tuple[Round, Optional[Hashable]]:
        '''Count a single round.

        :param remaining: Candidates not eliminated yet.
        :param rankings: Rankings of all ballots, unfiltered.
        :returns: A 2-tuple of the round counted and the winner if the round
            decided the count (None otherwise).
        '''
        counts = self.first_choices(remaining, rankings)
        total_votes = sum(counts.values())
        logger.info('current vote totals: %s',
                    dict(ranktally.util.sorted_votes(counts)))
        for cand, n_votes in counts.items():
            if 2 * n_votes > total_votes:
                logger.info('%s wins with %d of %d votes',
                            cand, n_votes, total_votes)
                return Round(counts, total_votes), cand
        if len(remaining) == 1:
            logger.info('%s wins as the last remaining candidate',
                        remaining[0])
            return Round(counts, total_votes), remaining[0]
        last = ranktally.util.extreme_keys(counts, highest=False)
        if len(last) == 1:
            eliminated, reason = last[0], LAST_PLACE
        else:
            logger.info('tie for the last place among %s', last)
            eliminated, reason = self.tie_breaker.evaluate(last, rankings)
        logger.info('eliminating %s (%s)', eliminated, reason)
        return Round(counts, total_votes, eliminated, reason), None

    @staticmethod
    def first_choices(remaining: Collection[Hashable],
                      rankings: Collection[ranktally.vote.RankedBallotType],
                      ) -> Dict[Hashable, int]:
        '''Count the ballots by their highest-ranked remaining candidate.

        :param remaining: Candidates not eliminated yet.
        :param rankings: Rankings of all ballots, unfiltered.
        :returns: Counts for all remaining candidates (including those with
            no ballots), in the order of ``remaining``.
        '''
        counts = ranktally.util.zero_counts(remaining)
        for ranking in ranktally.vote.normalize_all(rankings, set(remaining)):
            if ranking:
                counts[ranking[0]] += 1
        return counts
