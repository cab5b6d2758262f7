import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import ranktally.persist
from ranktally.evaluate.sequential import InstantRunoff, RCVResult, Round

IRV = InstantRunoff()


def test_first_round_majority():
    result = IRV.evaluate(list('ABC'), [('A',), ('A',), ('B',), ('C',)])
    assert result == RCVResult(
        winner='A',
        rounds=[Round({'A': 2, 'B': 1, 'C': 1}, 4)],
        total_votes=4,
    )
    assert result.to_dict() == {
        'method': 'rcv',
        'winner': 'A',
        'rounds': [{
            'counts': {'A': 2, 'B': 1, 'C': 1},
            'totalVotes': 4,
            'eliminated': None,
        }],
        'totalVotes': 4,
    }


def test_last_place_elimination():
    ballots = [('A',), ('A',), ('B',), ('B', 'A'), ('C', 'B')]
    result = IRV.evaluate(list('ABC'), ballots)
    assert result.rounds == [
        Round({'A': 2, 'B': 2, 'C': 1}, 5, 'C', 'last-place'),
        Round({'A': 2, 'B': 3}, 5),
    ]
    assert result.winner == 'B'
    assert result.rounds[0].to_dict() == {
        'counts': {'A': 2, 'B': 2, 'C': 1},
        'totalVotes': 5,
        'eliminated': 'C',
        'eliminationReason': 'last-place',
    }


def test_elimination_ties():
    ballots = [
        ('A', 'C', 'B'),
        ('A',),
        ('D',),
        ('D',),
        ('B', 'C'),
        ('C', 'B'),
    ]
    result = IRV.evaluate(list('ABCD'), ballots)
    # B and C tie for the last place; C is preferred to B on two of the
    # three ballots ranking both
    assert result.rounds[0] == Round(
        {'A': 2, 'B': 1, 'C': 1, 'D': 2}, 6, 'B', 'head-to-head'
    )
    # everybody ties; only A and C are compared on a ballot, A wins
    assert result.rounds[1] == Round(
        {'A': 2, 'C': 2, 'D': 2}, 6, 'C', 'head-to-head'
    )
    # the C and B ballots are exhausted; A and D are never compared
    assert result.rounds[2] == Round({'A': 2, 'D': 2}, 4, 'A', 'coin-flip')
    assert result.rounds[3] == Round({'D': 2}, 2)
    assert result.winner == 'D'
    assert result.total_votes == 6


def test_sole_remaining_wins_without_majority():
    result = IRV.evaluate(['B', 'A'], [('X',)])
    assert result.rounds == [
        Round({'B': 0, 'A': 0}, 0, 'A', 'coin-flip'),
        Round({'B': 0}, 0),
    ]
    assert result.winner == 'B'
    assert result.total_votes == 1


def test_single_candidate():
    result = IRV.evaluate(['A'], [('A',), ('B',)])
    assert result.rounds == [Round({'A': 1}, 1)]
    assert result.winner == 'A'


def test_nth_round():
    ballots = [('A',), ('A',), ('B',), ('B', 'A'), ('C', 'B')]
    result = IRV.nth_round(list('ABC'), ballots, 1)
    assert result.winner is None
    assert result.rounds == [
        Round({'A': 2, 'B': 2, 'C': 1}, 5, 'C', 'last-place'),
    ]
    assert IRV.nth_round(list('ABC'), ballots, 2) == IRV.evaluate(
        list('ABC'), ballots
    )


def test_dict_ballots():
    candidates = [{'id': 'm1'}, {'id': 'm2'}]
    ballots = [{'rankings': ['m2', 'm1']}, {'rankings': ['m2']}]
    result = IRV.evaluate(candidates, ballots)
    assert result.winner == 'm2'
    assert result.rounds == [Round({'m1': 0, 'm2': 2}, 2)]


@pytest.mark.parametrize('candidates, ballots', [
    ([], [('A', 'B')]),
    (['A', 'B'], []),
])
def test_degenerate(candidates, ballots):
    result = IRV.evaluate(candidates, ballots)
    assert result == RCVResult(None, [], 0)
    assert result.to_dict() == {
        'method': 'rcv',
        'winner': None,
        'rounds': [],
        'totalVotes': 0,
    }


def test_majority_invariant():
    rng = random.Random(2024)
    cands = list('ABCDEF')
    for i in range(60):
        n_cands = rng.randint(1, len(cands))
        poll_cands = cands[:n_cands]
        ballots = [
            tuple(rng.sample(cands, rng.randint(0, len(cands))))
            for j in range(rng.randint(1, 25))
        ]
        result = IRV.evaluate(poll_cands, ballots)
        assert result.winner in poll_cands
        assert result.total_votes == len(ballots)
        final = result.rounds[-1]
        assert final.eliminated is None
        assert (
            2 * final.counts[result.winner] > final.total_votes
            or list(final.counts.keys()) == [result.winner]
        )
        eliminated = [count.eliminated for count in result.rounds[:-1]]
        assert None not in eliminated
        assert len(set(eliminated)) == len(eliminated)
        assert result.winner not in eliminated
        for count in result.rounds:
            assert sum(count.counts.values()) == count.total_votes
            assert count.total_votes <= len(ballots)
        assert IRV.evaluate(poll_cands, ballots) == result


def test_serialization():
    assert IRV.to_dict() == {
        'class': 'ranktally.evaluate.sequential.InstantRunoff',
    }
    assert isinstance(ranktally.persist.from_dict(IRV.to_dict()), InstantRunoff)
