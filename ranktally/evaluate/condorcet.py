'''Condorcet evaluation with Copeland fallback.

The evaluator works by examining pairwise orderings between candidates (how
many voters prefer one candidate to another). A candidate that beats every
other candidate pairwise is the Condorcet winner and wins outright. Without
one (when the pairwise majorities form a cycle), candidates are ranked by
their Copeland score, the number of pairwise wins minus the number of
pairwise losses.
'''

import collections
import dataclasses
import itertools
import logging
from typing import Any, ClassVar, Collection, Dict, Hashable, List, \
    Optional, Tuple

import ranktally.vote
import ranktally.evaluate.core
import ranktally.evaluate.tiebreak
from ranktally.persist import simple_serialization

logger = logging.getLogger(__name__)

PairwiseCounts = Dict[Tuple[Hashable, Hashable], int]


@dataclasses.dataclass
class CopelandStanding(ranktally.evaluate.core.CamelCaseSerialized):
    '''Pairwise record of a single candidate.

    :param candidate_id: The candidate.
    :param wins: Number of candidates it beats pairwise.
    :param losses: Number of candidates it loses to pairwise.
    '''
    candidate_id: Hashable
    wins: int = 0
    losses: int = 0

    @property
    def score(self) -> int:
        '''The Copeland score: pairwise wins minus pairwise losses.'''
        return self.wins - self.losses


@dataclasses.dataclass
class CondorcetResult(ranktally.evaluate.core.Result):
    '''Result of a Condorcet evaluation.

    :param winner: The winning candidate, or None if there was no candidate
        or no ballot.
    :param ranking: Pairwise records of all candidates, sorted by Copeland
        score and then by the number of pairwise wins, both descending.
    :param total_votes: Number of ballots counted.
    :param no_condorcet_winner: True if no candidate beats all the others
        pairwise.
    :param tie_breaker_method: How a tie at the top of the Copeland ranking
        was broken (``'head-to-head'`` or ``'coin-flip'``), None if there
        was no tie.
    '''
    method: ClassVar[str] = 'condorcet'
    omit_if_none: ClassVar[frozenset] = frozenset(['tie_breaker_method'])

    winner: Optional[Hashable]
    ranking: List[CopelandStanding]
    total_votes: int
    no_condorcet_winner: bool
    tie_breaker_method: Optional[str] = None


def pairwise_preferences(cand_ids: Collection[Hashable],
                         rankings: Collection[ranktally.vote.RankedBallotType],
                         ) -> PairwiseCounts:
    '''Count how many ballots prefer each candidate to each other candidate.

    On every ballot (restricted to the given candidates), a candidate is
    preferred to all candidates ranked below it and to all candidates the
    ballot does not rank at all.

    :param cand_ids: Identifiers of the candidates in the poll.
    :param rankings: Rankings of all ballots, unfiltered.
    :returns: Counts of ballots keyed by ``(preferred, other)`` pairs. Pairs
        that no ballot orders that way are absent.
    '''
    valid_ids = set(cand_ids)
    counts = collections.defaultdict(int)
    for ranking in ranktally.vote.normalize_all(rankings, valid_ids):
        ranked = set(ranking)
        unranked = [cand for cand in cand_ids if cand not in ranked]
        for i, upper_cand in enumerate(ranking):
            for lower_cand in ranking[i+1:]:
                counts[upper_cand, lower_cand] += 1
            for unranked_cand in unranked:
                counts[upper_cand, unranked_cand] += 1
    return dict(counts)


def pairwise_wins(preferences: PairwiseCounts,
                  cand_ids: Collection[Hashable],
                  ) -> List[Tuple[Hashable, Hashable]]:
    '''Select pairs of candidates where the first beats the second.

    A candidate beats another one if more ballots prefer it than the other
    way round. Pairs preferred by an equal number of ballots are not
    included in either direction.

    :param preferences: Pairwise preference counts as produced by
        :func:`pairwise_preferences`.
    :param cand_ids: Identifiers of the candidates in the poll.
    '''
    wins = []
    for cand_a, cand_b in itertools.combinations(cand_ids, 2):
        a_over_b = preferences.get((cand_a, cand_b), 0)
        b_over_a = preferences.get((cand_b, cand_a), 0)
        if a_over_b > b_over_a:
            wins.append((cand_a, cand_b))
        elif b_over_a > a_over_b:
            wins.append((cand_b, cand_a))
    return wins


def copeland_standings(wins: List[Tuple[Hashable, Hashable]],
                       cand_ids: Collection[Hashable],
                       ) -> Dict[Hashable, CopelandStanding]:
    '''Compile pairwise records of all candidates from their pairwise wins.'''
    standings = {cand: CopelandStanding(cand) for cand in cand_ids}
    for winner, loser in wins:
        standings[winner].wins += 1
        standings[loser].losses += 1
    return standings


@simple_serialization
class Copeland(ranktally.evaluate.core.Evaluator):
    '''Condorcet evaluator with a Copeland ranking fallback.

    Selects the Condorcet winner if there is one. Otherwise, selects the
    candidate with the highest Copeland score, preferring more raw pairwise
    wins among equal scores. Candidates still tied after that are separated
    head-to-head (see :mod:`ranktally.evaluate.tiebreak`).

    The pairwise tallies treat candidates left unranked on a ballot as ranked
    below every candidate the ballot does rank. The tie break does not do
    this; it only counts ballots that rank both candidates compared.
    '''
    tie_breaker = ranktally.evaluate.tiebreak.HeadToHeadTieBreaker()

    def evaluate(self,
                 candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> CondorcetResult:
        '''Select the Condorcet winner or the best Copeland candidate.

        :param candidates: Candidates standing in the poll.
        :param ballots: Ballots cast.
        '''
        cand_ids, rankings = ranktally.evaluate.core.tally_input(
            candidates, ballots
        )
        if not cand_ids or not rankings:
            return CondorcetResult(None, [], 0, True)
        preferences = pairwise_preferences(cand_ids, rankings)
        logger.debug('pairwise preferences: %s', preferences)
        standings = copeland_standings(
            pairwise_wins(preferences, cand_ids), cand_ids
        )
        ranking = sorted(
            standings.values(),
            key=lambda standing: (standing.score, standing.wins),
            reverse=True,
        )
        condorcet_winner = self.condorcet_winner(standings)
        tie_breaker_method = None
        if condorcet_winner is not None:
            logger.info('condorcet winner: %s', condorcet_winner)
            winner = condorcet_winner
        else:
            top = [
                standing.candidate_id for standing in ranking
                if (standing.score, standing.wins)
                == (ranking[0].score, ranking[0].wins)
            ]
            if len(top) == 1:
                winner = top[0]
            else:
                logger.info('tie at the top of the copeland ranking: %s', top)
                winner, tie_breaker_method = self.tie_breaker.evaluate(
                    top, rankings
                )
            logger.info('no condorcet winner, copeland winner: %s', winner)
        return CondorcetResult(
            winner=winner,
            ranking=ranking,
            total_votes=len(rankings),
            no_condorcet_winner=condorcet_winner is None,
            tie_breaker_method=tie_breaker_method,
        )

    @staticmethod
    def condorcet_winner(standings: Dict[Hashable, CopelandStanding]
                         ) -> Optional[Hashable]:
        '''Return the candidate beating all others pairwise, if there is one.

        :param standings: Pairwise records of all candidates.
        '''
        n_required_wins = len(standings) - 1
        for cand, standing in standings.items():
            if standing.wins == n_required_wins:
                return cand
        return None
