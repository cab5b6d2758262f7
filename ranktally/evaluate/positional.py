'''Positional (Borda count) evaluation of ranked ballots.

Each ballot awards points to the candidates it ranks according to their
position; the candidate with the most points in total wins.
'''

import dataclasses
import logging
from typing import Any, ClassVar, Collection, Dict, Hashable, Optional

import ranktally.util
import ranktally.vote
import ranktally.evaluate.core
import ranktally.evaluate.tiebreak
import ranktally.component.rankscore
from ranktally.persist import simple_serialization

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class BordaResult(ranktally.evaluate.core.Result):
    '''Result of a Borda count.

    :param winner: The winning candidate, or None if there was no candidate
        or no ballot.
    :param scores: Points of every candidate, in candidate input order.
    :param total_votes: Number of ballots counted.
    :param max_possible_score: Points a candidate would get if it was ranked
        first on every ballot and every ballot ranked all candidates.
    :param tie_breaker_method: How a tie for the top score was broken
        (``'head-to-head'`` or ``'coin-flip'``), None if there was no tie.
    '''
    method: ClassVar[str] = 'borda'
    omit_if_none: ClassVar[frozenset] = frozenset(['tie_breaker_method'])

    winner: Optional[Hashable]
    scores: Dict[Hashable, int]
    total_votes: int
    max_possible_score: int
    tie_breaker_method: Optional[str] = None


@simple_serialization
class Borda(ranktally.evaluate.core.Evaluator):
    '''Borda count evaluator.

    Every ballot is first restricted to the candidates standing in the poll.
    A ballot then ranking k candidates gives ``k - 1`` points to its first
    choice, ``k - 2`` to the second and so on down to zero for its last
    choice; candidates it does not rank get nothing from it.

    If several candidates share the top score, the tie is broken
    head-to-head among them (see :mod:`ranktally.evaluate.tiebreak`).
    '''
    rank_scorer = ranktally.component.rankscore.TruncatedBorda()
    tie_breaker = ranktally.evaluate.tiebreak.HeadToHeadTieBreaker()

    def evaluate(self,
                 candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> BordaResult:
        '''Count the Borda scores and select the winner.

        :param candidates: Candidates standing in the poll.
        :param ballots: Ballots cast.
        '''
        cand_ids, rankings = ranktally.evaluate.core.tally_input(
            candidates, ballots
        )
        if not cand_ids or not rankings:
            return BordaResult(None, {}, 0, 0)
        scores = self.scores(cand_ids, rankings)
        logger.debug('borda scores: %s', scores)
        max_possible_score = (
            self.rank_scorer.max_score(len(cand_ids)) * len(rankings)
        )
        top = ranktally.util.extreme_keys(scores)
        tie_breaker_method = None
        if len(top) == 1:
            winner = top[0]
        else:
            logger.info('tie for the top score of %d among %s',
                        scores[top[0]], top)
            winner, tie_breaker_method = self.tie_breaker.evaluate(
                top, rankings
            )
        logger.info('borda winner: %s', winner)
        return BordaResult(
            winner=winner,
            scores=scores,
            total_votes=len(rankings),
            max_possible_score=max_possible_score,
            tie_breaker_method=tie_breaker_method,
        )

    def scores(self,
               cand_ids: Collection[Hashable],
               rankings: Collection[ranktally.vote.RankedBallotType],
               ) -> Dict[Hashable, int]:
        '''Sum the positional points of all candidates over all ballots.

        :param cand_ids: Identifiers of the candidates in the poll.
        :param rankings: Rankings of all ballots, unfiltered.
        '''
        scores = ranktally.util.zero_counts(cand_ids)
        rank_scores = {}
        for ranking in ranktally.vote.normalize_all(rankings, set(cand_ids)):
            n_ranked = len(ranking)
            if n_ranked not in rank_scores:
                rank_scores[n_ranked] = self.rank_scorer.scores(n_ranked)
            for cand, score in zip(ranking, rank_scores[n_ranked]):
                scores[cand] += score
        return scores
