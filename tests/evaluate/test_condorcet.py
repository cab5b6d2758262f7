import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import ranktally.evaluate.condorcet
from ranktally.evaluate.condorcet import Copeland, CondorcetResult, \
    CopelandStanding

COPELAND = Copeland()


def test_cycle():
    ballots = [('A', 'B', 'C'), ('B', 'C', 'A'), ('C', 'A', 'B')]
    result = COPELAND.evaluate(list('ABC'), ballots)
    assert result.winner == 'A'
    assert result.no_condorcet_winner
    assert result.tie_breaker_method == 'coin-flip'
    assert result.ranking == [
        CopelandStanding('A', 1, 1),
        CopelandStanding('B', 1, 1),
        CopelandStanding('C', 1, 1),
    ]
    assert [standing.score for standing in result.ranking] == [0, 0, 0]


def test_condorcet_winner():
    ballots = [('A', 'B', 'C'), ('A', 'C', 'B'), ('B', 'A', 'C')]
    result = COPELAND.evaluate(list('CBA'), ballots)
    assert result.winner == 'A'
    assert not result.no_condorcet_winner
    assert result.tie_breaker_method is None
    assert result.to_dict() == {
        'method': 'condorcet',
        'winner': 'A',
        'ranking': [
            {'candidateId': 'A', 'wins': 2, 'losses': 0},
            {'candidateId': 'B', 'wins': 1, 'losses': 1},
            {'candidateId': 'C', 'wins': 0, 'losses': 2},
        ],
        'totalVotes': 3,
        'noCondorcetWinner': False,
    }


def test_unranked_below_ranked():
    # A and B are even pairwise, both beat C since C is never ranked
    ballots = [('A',), ('B', 'A')]
    result = COPELAND.evaluate(list('ABC'), ballots)
    assert result.ranking == [
        CopelandStanding('A', 1, 0),
        CopelandStanding('B', 1, 0),
        CopelandStanding('C', 0, 2),
    ]
    assert result.no_condorcet_winner
    # the tie break only looks at the ballot ranking both A and B
    assert result.winner == 'B'
    assert result.tie_breaker_method == 'head-to-head'


def test_copeland_ranking_wins_decide():
    ballots = [
        ('A', 'B', 'C', 'D'),
        ('B', 'C', 'A', 'D'),
        ('C', 'A', 'B', 'D'),
        ('D',),
    ]
    result = COPELAND.evaluate(list('DCBA'), ballots)
    # A, B and C form a cycle; each beats D three ballots to one
    assert [standing.candidate_id for standing in result.ranking][-1] == 'D'
    assert result.ranking[-1] == CopelandStanding('D', 0, 3)
    assert result.no_condorcet_winner
    assert result.winner == 'A'
    assert result.tie_breaker_method == 'coin-flip'


def test_single_candidate():
    result = COPELAND.evaluate(['A'], [('A',)])
    assert result.winner == 'A'
    assert not result.no_condorcet_winner
    assert result.ranking == [CopelandStanding('A')]


@pytest.mark.parametrize('candidates, ballots', [
    ([], [('A', 'B')]),
    (['A', 'B'], []),
])
def test_degenerate(candidates, ballots):
    result = COPELAND.evaluate(candidates, ballots)
    assert result == CondorcetResult(None, [], 0, True)
    assert result.to_dict() == {
        'method': 'condorcet',
        'winner': None,
        'ranking': [],
        'totalVotes': 0,
        'noCondorcetWinner': True,
    }


def test_pairwise_preferences():
    prefs = ranktally.evaluate.condorcet.pairwise_preferences(
        list('ABC'), [('A', 'X', 'B'), ('C',)]
    )
    assert prefs == {
        ('A', 'B'): 1,
        ('A', 'C'): 1,
        ('B', 'C'): 1,
        ('C', 'A'): 1,
        ('C', 'B'): 1,
    }


def test_pairwise_wins():
    prefs = {('A', 'B'): 2, ('B', 'A'): 1, ('B', 'C'): 1, ('C', 'B'): 1}
    wins = ranktally.evaluate.condorcet.pairwise_wins(prefs, list('ABC'))
    assert wins == [('A', 'B')]


def test_standing_serialization():
    standing = CopelandStanding('m1', 3, 1)
    assert standing.score == 2
    assert standing.to_dict() == {
        'candidateId': 'm1',
        'wins': 3,
        'losses': 1,
    }


def test_consistency():
    rng = random.Random(99)
    cands = list('ABCDE')
    for i in range(60):
        n_cands = rng.randint(1, len(cands))
        poll_cands = cands[:n_cands]
        ballots = [
            tuple(rng.sample(cands, rng.randint(0, len(cands))))
            for j in range(rng.randint(1, 15))
        ]
        result = COPELAND.evaluate(poll_cands, ballots)
        assert result.winner in poll_cands
        assert result.total_votes == len(ballots)
        assert len(result.ranking) == n_cands
        winner_standing = next(
            standing for standing in result.ranking
            if standing.candidate_id == result.winner
        )
        full_winners = [
            standing.candidate_id for standing in result.ranking
            if standing.wins == n_cands - 1
        ]
        if full_winners:
            assert full_winners == [result.winner]
            assert not result.no_condorcet_winner
            assert result.tie_breaker_method is None
        else:
            assert result.no_condorcet_winner
            scores = [standing.score for standing in result.ranking]
            assert scores == sorted(scores, reverse=True)
            assert winner_standing.score == scores[0]
        assert sum(st.wins for st in result.ranking) == sum(
            st.losses for st in result.ranking
        )
        assert COPELAND.evaluate(poll_cands, ballots) == result
