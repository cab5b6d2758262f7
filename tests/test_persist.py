import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import ranktally.persist
import ranktally.system
import ranktally.candidate
import ranktally.vote
from ranktally.evaluate.sequential import InstantRunoff

SERIALIZABLE = [
    ranktally.candidate.CandidateListValidator(),
    ranktally.candidate.CandidateListValidator(5),
    ranktally.vote.RankedBallotValidator(),
    ranktally.system.get_system('borda'),
    ranktally.system.get_system('condorcet'),
    ranktally.system.get_system('rcv'),
]


@pytest.mark.parametrize('obj', SERIALIZABLE)
def test_json_roundtrip(obj):
    serialized = json.loads(json.dumps(ranktally.persist.to_dict(obj)))
    rebuilt = ranktally.persist.from_dict(serialized)
    assert type(rebuilt) == type(obj)
    assert ranktally.persist.to_dict(rebuilt) == serialized


def test_system_dict():
    system = ranktally.system.VotingSystem('Runoff', InstantRunoff())
    assert system.to_dict() == {
        'class': 'ranktally.system.VotingSystem',
        'name': 'Runoff',
        'evaluator': {
            'class': 'ranktally.evaluate.sequential.InstantRunoff',
        },
        'description': '',
    }


def test_result_dict():
    result = ranktally.system.evaluate('borda', ['A', 'B'], [('A', 'B')])
    assert ranktally.persist.to_dict(result) == result.to_dict()


@pytest.mark.parametrize('value', [
    ['ranktally.evaluate.sequential.InstantRunoff'],
    {'name': 'Runoff'},
    {'class': '.evaluate.InstantRunoff'},
    {'class': 'ranktally.evaluate sequential'},
    {'class': 'os.system'},
    {'class': 'builtins.eval'},
    {'class': 'ranktally.nonexistent.Evaluator'},
    {'class': 'ranktally.system.METHODS'},
    {'class': 'ranktally'},
])
def test_from_dict_invalid(value):
    with pytest.raises(ValueError):
        ranktally.persist.from_dict(value)


def test_serialize_unknown():
    with pytest.raises(ValueError):
        ranktally.persist.serialize_value(object())
