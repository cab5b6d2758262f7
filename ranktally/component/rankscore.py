'''Objects to assign scores to ranks in positional systems such as Borda.

A rank scorer returns a list of numerical scores to be assigned to the ranks
given by a voter. This is the essence of the Borda count.
'''

import abc
from typing import List
from numbers import Number

from ranktally.persist import simple_serialization


class RankScorer(metaclass=abc.ABCMeta):
    '''An abstract base class for rank scorers.

    Rank scorers must provide a `scores()` method that returns a list of scores
    based on the number of ranks given on a ballot.
    '''
    @abc.abstractmethod
    def scores(self, n_ranked: int) -> List[Number]:
        raise NotImplementedError

    def max_score(self, n_candidates: int) -> Number:
        '''Return the score of a first rank on a ballot ranking everybody.'''
        top = self.scores(n_candidates)
        return top[0] if top else 0


@simple_serialization
class TruncatedBorda(RankScorer):
    '''Borda rank scorer counting only the candidates actually ranked.

    A ballot ranking k candidates gives ``k - 1`` points to its first choice,
    one point less to each lower rank and zero to its last choice.
    Candidates the ballot does not rank get nothing from it. A partial
    ranking thus carries less weight than a full one.
    '''
    def scores(self, n_ranked: int) -> List[int]:
        '''Return the scores for the first n_ranked ranks.

        This gives `n_ranked - 1 - rank` for ranks running
        from 0 (best rank) to n_ranked.

        :param n_ranked: Number of ranks to be returned. Equal to the length
            of the output list.
        '''
        return [n_ranked - 1 - rank for rank in range(n_ranked)]
