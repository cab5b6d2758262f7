'''Candidate types and nomination validators.

The tallying engines only ever look at candidate identifiers. Everything else
a poll keeps about a nominated option (its title, who added it, a fetched
description...) is opaque to them. Candidates can therefore be passed in
several forms, all of which are resolved by :func:`candidate_id`:

-   :class:`Candidate` objects (or any object with an ``id`` attribute),
-   mappings with an ``id`` key (``candidateId`` and the legacy ``movieId``
    keys are recognized too), such as candidate records decoded from JSON,
-   bare hashable identifiers, usually strings.

The :class:`CandidateListValidator` checks a candidate list the way the poll
service does when accepting nominations.
'''

from typing import Any, Collection, Dict, Hashable, List, Optional, Tuple

from ranktally.persist import simple_serialization

ID_KEYS: Tuple[str, ...] = ('id', 'candidateId', 'movieId')
'''Mapping keys that may hold the candidate identifier, in order of priority.'''

DEFAULT_MAX_CANDIDATES = 20


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class CandidateCountError(CandidateError):
    '''There are too many candidates standing in a poll.

    :param count: Number of candidates found.
    :param max_count: Maximum number of candidates permitted.
    '''
    def __init__(self, count: int, max_count: int):
        self.count = count
        self.max_count = max_count
        Exception.__init__(
            self,
            f'poll already has the maximum of {max_count} entries'
            f' (got {count})'
        )


@simple_serialization
class Candidate:
    '''A nominated option in a poll.

    :param id: Unique identifier of the candidate within its poll.
    :param title: Display title.
    :param attributes: Any further display attributes (description, who
        nominated the candidate...). These are never read by the engines.
    '''
    def __init__(self,
                 id: str,
                 title: Optional[str] = None,
                 attributes: Optional[Dict[str, Any]] = None,
                 ):
        self.id = id
        self.title = title
        self.attributes = attributes if attributes is not None else {}

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Candidate) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.id}'
            + (f',{self.title!r}' if self.title is not None else '')
            + ')>'
        )


def candidate_id(candidate: Any) -> Hashable:
    '''Return the identifier of a candidate given in any accepted form.

    :param candidate: A candidate object, a candidate mapping or a bare id.
    :raises CandidateError: If the candidate is a mapping without an id key
        or its identifier is not hashable.
    '''
    if hasattr(candidate, 'keys'):
        for key in ID_KEYS:
            if key in candidate:
                cand_id = candidate[key]
                break
        else:
            raise CandidateError(candidate, 'a mapping with an id key')
    else:
        cand_id = getattr(candidate, 'id', candidate)
    if not is_valid_id(cand_id):
        raise CandidateError(candidate, 'a hashable identifier')
    return cand_id


def is_valid_id(value: Any) -> bool:
    '''Return True if the value can serve as a candidate identifier.'''
    return getattr(value, '__hash__', None) is not None


def candidate_ids(candidates: Collection[Any]) -> List[Hashable]:
    '''Return identifiers of all candidates, keeping their order.'''
    return [candidate_id(cand) for cand in candidates]


@simple_serialization
class CandidateListValidator:
    '''Validate the list of candidates standing in a poll.

    :param max_candidates: Maximum number of candidates a poll can hold.
        None means no limit.
    '''
    def __init__(self, max_candidates: Optional[int] = DEFAULT_MAX_CANDIDATES):
        self.max_candidates = max_candidates

    def validate(self, candidates: Collection[Any]) -> None:
        '''Check whether the candidate list is valid.

        :param candidates: Candidates in any form accepted by
            :func:`candidate_id`.
        :raises CandidateError: If a candidate has no usable identifier or an
            identifier is used more than once.
        :raises CandidateCountError: If there are more candidates than
            allowed.
        '''
        seen = set()
        for cand in candidates:
            cand_id = candidate_id(cand)
            if cand_id in seen:
                raise CandidateError(cand, 'a unique identifier')
            seen.add(cand_id)
        if self.max_candidates is not None and len(seen) > self.max_candidates:
            raise CandidateCountError(len(seen), self.max_candidates)
