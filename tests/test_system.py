import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import ranktally.system
from ranktally.evaluate.condorcet import CondorcetResult
from ranktally.evaluate.positional import BordaResult, Borda
from ranktally.evaluate.sequential import RCVResult

CANDIDATES = [
    {'id': 'A', 'title': 'Alien'},
    {'id': 'B', 'title': 'Brazil'},
    {'id': 'C', 'title': 'Casablanca'},
]
CYCLE = [
    {'rankings': ['A', 'B', 'C']},
    {'rankings': ['B', 'C', 'A']},
    {'rankings': ['C', 'A', 'B']},
]


def test_votesys_transp():
    borda = Borda()
    votesys = ranktally.system.VotingSystem('Points', borda)
    assert votesys.name == 'Points'
    assert votesys.evaluate(CANDIDATES, CYCLE) == borda.evaluate(
        CANDIDATES, CYCLE
    )


@pytest.mark.parametrize('method, result_class', [
    ('rcv', RCVResult),
    ('borda', BordaResult),
    ('condorcet', CondorcetResult),
])
def test_dispatch(method, result_class):
    result = ranktally.system.evaluate(method, CANDIDATES, CYCLE)
    assert isinstance(result, result_class)
    assert result.method == method
    assert result.to_dict()['method'] == method
    assert result.total_votes == 3


def test_methods():
    assert set(ranktally.system.METHODS) == {'rcv', 'borda', 'condorcet'}
    for method in ranktally.system.METHODS:
        system = ranktally.system.get_system(method)
        assert system.name
        assert system.description


@pytest.mark.parametrize('method', ['plurality', '', None, 'RCV', ['rcv']])
def test_unknown_method(method):
    with pytest.raises(ranktally.system.UnknownMethodError) as excinfo:
        ranktally.system.evaluate(method, CANDIDATES, CYCLE)
    assert excinfo.value.method == method
    assert 'rcv' in str(excinfo.value)
    with pytest.raises(KeyError):
        ranktally.system.get_system(method)


def test_evaluate_all():
    results = ranktally.system.evaluate_all(CANDIDATES, CYCLE)
    assert list(results.keys()) == list(ranktally.system.METHODS)
    for method, result in results.items():
        assert result.method == method
        assert result == ranktally.system.evaluate(method, CANDIDATES, CYCLE)


def test_describe_borda():
    result = ranktally.system.evaluate('borda', ['A', 'B'], [('A', 'B')])
    assert ranktally.system.describe(result) == (
        'A wins with 1 of 1 possible points.'
    )


def test_describe_rcv():
    result = ranktally.system.evaluate(
        'rcv', ['A', 'B', 'C'], [('A',), ('A',), ('B',), ('C',)]
    )
    assert ranktally.system.describe(result) == (
        'A wins after 1 round of 4 ballots.'
    )


def test_describe_condorcet():
    result = ranktally.system.evaluate('condorcet', CANDIDATES, CYCLE)
    assert ranktally.system.describe(result) == (
        'No Condorcet winner; A wins with a Copeland score of 0'
        ' after a tie broken by coin-flip.'
    )
    result = ranktally.system.evaluate('condorcet', ['A', 'B'], [('B',)])
    assert ranktally.system.describe(result) == 'B is the Condorcet winner.'


@pytest.mark.parametrize('method', ['rcv', 'borda', 'condorcet'])
def test_describe_no_winner(method):
    result = ranktally.system.evaluate(method, CANDIDATES, [])
    assert ranktally.system.describe(result) == 'No winner: nothing to count.'


def test_describe_unknown():
    with pytest.raises(TypeError):
        ranktally.system.describe({'method': 'rcv', 'winner': 'A'})
