"""Loading poll snapshots from JSON and writing results as JSON.

A snapshot is a JSON object of the following form::

    {
        "title": "Friday movie night",
        "method": "rcv",
        "candidates": [{"id": "m1", "title": "Alien"}, ...],
        "ballots": [{"rankings": ["m1", "m3"]}, ...]
    }

Ballots may also be given as bare lists of candidate identifiers. Exports of
the original movie poll service are accepted as well: they list candidates
under ``movies`` (identified by ``movieId``), ballots under ``votes`` and may
name the method ``votingMethod``. Only the candidate identifier and title are
interpreted; other candidate fields are kept as opaque attributes.
"""

import json
from typing import Any, Dict, List

import ranktally.candidate
import ranktally.evaluate
import ranktally.vote
from ranktally.candidate import Candidate
from ranktally.io.core import ParseError, PollSnapshot, loaders, dumpers

KEY_ALIASES: Dict[str, List[str]] = {
    'candidates': ['candidates', 'movies'],
    'ballots': ['ballots', 'votes'],
    'method': ['method', 'votingMethod'],
}


def _get(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    for alias in KEY_ALIASES.get(key, [key]):
        if alias in data:
            return data[alias]
    return default


def parse_candidate(record: Any) -> Candidate:
    if isinstance(record, Candidate):
        return record
    try:
        cand_id = ranktally.candidate.candidate_id(record)
    except ranktally.candidate.CandidateError as e:
        raise ParseError(str(e)) from e
    if hasattr(record, 'keys'):
        attributes = {
            key: value for key, value in record.items()
            if key not in ranktally.candidate.ID_KEYS and key != 'title'
        }
        return Candidate(cand_id, record.get('title'), attributes)
    return Candidate(cand_id)


def parse_ballot(record: Any) -> ranktally.vote.RankedBallotType:
    rankings = record.get('rankings') if isinstance(record, dict) else record
    if not isinstance(rankings, list):
        raise ParseError(f'ballot rankings must be a list: {record!r}')
    for cand in rankings:
        if not ranktally.candidate.is_valid_id(cand):
            raise ParseError(
                f'invalid candidate identifier in ballot: {cand!r}'
            )
    return tuple(rankings)


def parse_snapshot(text: str) -> PollSnapshot:
    '''Parse a poll snapshot from JSON text.

    :raises ParseError: If the text is not valid JSON or does not describe
        a poll.
    '''
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ParseError(f'invalid JSON: {e}') from e
    if not isinstance(data, dict):
        raise ParseError('poll snapshot must be a JSON object')
    candidates = _get(data, 'candidates', [])
    ballots = _get(data, 'ballots', [])
    if not isinstance(candidates, list) or not isinstance(ballots, list):
        raise ParseError('candidates and ballots must be JSON arrays')
    return PollSnapshot(
        candidates=[parse_candidate(record) for record in candidates],
        ballots=[parse_ballot(record) for record in ballots],
        method=_get(data, 'method'),
        title=data.get('title'),
    )


def format_result(result: ranktally.evaluate.Result, indent: int = 2) -> str:
    '''Format a result as JSON text.'''
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)


load, loads = loaders(parse_snapshot)
dump, dumps = dumpers(format_result)
