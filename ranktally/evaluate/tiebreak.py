'''Deterministic breaking of ties among candidates.

All engines resolve ties the same way, through :func:`break_tie`: first by
head-to-head comparison of the tied candidates on the ballots, then, if that
does not separate them, by a "coin flip" that is not random at all but picks
the candidate whose identifier sorts first.

Results are never stored, only recomputed from the raw ballots whenever they
are displayed. The tie break must therefore give the same answer every time
it sees the same input, and randomness cannot be used here.

The coin flip picks the smallest identifier both when looking for the
strongest candidate (to win) and the weakest one (to be eliminated). The same
candidates are thus favoured when winning and disfavoured when eliminated;
whether this asymmetry is intended is awaiting confirmation.
'''

import collections
import itertools
import logging
from typing import Collection, Dict, Hashable, List, NamedTuple

import ranktally.util
from ranktally.persist import simple_serialization
from ranktally.vote import RankedBallotType

FIND_STRONGEST = 'strongest'
FIND_WEAKEST = 'weakest'
MODES = (FIND_STRONGEST, FIND_WEAKEST)

HEAD_TO_HEAD = 'head-to-head'
COIN_FLIP = 'coin-flip'

logger = logging.getLogger(__name__)


class TieBreak(NamedTuple):
    '''The outcome of a tie break.'''
    winner: Hashable
    '''The candidate picked (the strongest or the weakest one).'''
    method: str
    '''How the pick was made: :data:`HEAD_TO_HEAD` or :data:`COIN_FLIP`.'''


def head_to_head_records(tied: Collection[Hashable],
                         rankings: Collection[RankedBallotType],
                         ) -> Dict[Hashable, List[int]]:
    '''Count pairwise wins and losses among the tied candidates.

    For each pair of tied candidates, only ballots ranking both of them are
    considered; the one ranked higher gets that ballot. Whoever gets more
    ballots wins the pair. Pairs with an equal number of ballots (including
    pairs no ballot ranks together) give neither a win nor a loss.

    :param tied: The tied candidates.
    :param rankings: Rankings of all ballots, unfiltered.
    :returns: Mapping of each tied candidate to a ``[wins, losses]`` list.
    '''
    preferred = collections.Counter()
    tied_set = frozenset(tied)
    for ranking in rankings:
        positions = {}
        for rank, cand in enumerate(ranking):
            if cand in tied_set:
                positions.setdefault(cand, rank)
        for upper, lower in itertools.permutations(positions, 2):
            if positions[upper] < positions[lower]:
                preferred[upper, lower] += 1
    records = {cand: [0, 0] for cand in tied}
    for cand_a, cand_b in itertools.combinations(records, 2):
        a_over_b = preferred[cand_a, cand_b]
        b_over_a = preferred[cand_b, cand_a]
        if a_over_b > b_over_a:
            records[cand_a][0] += 1
            records[cand_b][1] += 1
        elif b_over_a > a_over_b:
            records[cand_b][0] += 1
            records[cand_a][1] += 1
    return records


def break_tie(tied: Collection[Hashable],
              rankings: Collection[RankedBallotType],
              mode: str = FIND_STRONGEST,
              ) -> TieBreak:
    '''Pick the strongest or the weakest of the tied candidates.

    Candidates are ordered by their head-to-head records (see
    :func:`head_to_head_records`): when finding the strongest, by most wins
    and then fewest losses; when finding the weakest, by fewest wins and then
    most losses. If several candidates share the best record, the one with
    the identifier sorting first is picked (see
    :func:`ranktally.util.collation_key`) and the method is reported as
    a coin flip.

    The outcome does not depend on the order of the tied candidates.

    :param tied: Candidates to choose from. A single candidate is returned
        right away.
    :param rankings: Rankings of all ballots, unfiltered.
    :param mode: :data:`FIND_STRONGEST` or :data:`FIND_WEAKEST`.
    :raises ValueError: If no candidates are given or the mode is unknown.
    '''
    if mode not in MODES:
        raise ValueError(f'invalid tie break mode: {mode!r}')
    tied = sorted(set(tied), key=ranktally.util.collation_key)
    if not tied:
        raise ValueError('no candidates to break a tie among')
    if len(tied) == 1:
        return TieBreak(tied[0], HEAD_TO_HEAD)
    records = head_to_head_records(tied, rankings)
    logger.debug('head-to-head records of %s: %s', tied, records)
    if mode == FIND_STRONGEST:
        def order(cand):
            return (-records[cand][0], records[cand][1])
    else:
        def order(cand):
            return (records[cand][0], -records[cand][1])
    ordered = sorted(tied, key=order)
    still_tied = [
        cand for cand in ordered if records[cand] == records[ordered[0]]
    ]
    if len(still_tied) > 1:
        winner = min(still_tied, key=ranktally.util.collation_key)
        logger.info('coin flip among %s for the %s: %s',
                    still_tied, mode, winner)
        return TieBreak(winner, COIN_FLIP)
    else:
        logger.info('%s of %s by head-to-head: %s', mode, tied, ordered[0])
        return TieBreak(ordered[0], HEAD_TO_HEAD)


@simple_serialization
class HeadToHeadTieBreaker:
    '''Break ties by head-to-head comparison, then by a coin flip.

    An evaluator-like wrapper of :func:`break_tie` with the mode fixed, so
    that engines can hold it as a component and it can be serialized.

    :param mode: :data:`FIND_STRONGEST` to pick the winner of the tie,
        :data:`FIND_WEAKEST` to pick the candidate to drop.
    '''
    def __init__(self, mode: str = FIND_STRONGEST):
        if mode not in MODES:
            raise ValueError(f'invalid tie break mode: {mode!r}')
        self.mode = mode

    def evaluate(self,
                 tied: Collection[Hashable],
                 rankings: Collection[RankedBallotType],
                 ) -> TieBreak:
        '''Pick one of the tied candidates.

        :param tied: Candidates to choose from.
        :param rankings: Rankings of all ballots, unfiltered.
        '''
        return break_tie(tied, rankings, self.mode)
