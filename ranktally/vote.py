'''Ballot types, the ballot normalizer and the ballot validator.

A ranked ballot is an ordered sequence of candidate identifiers, most
preferred first. It may rank only some of the candidates and must not repeat
any of them. Identifiers of candidates that are not (or no longer) in the race
are not an error for the engines; :func:`normalize` simply drops them.

Ballots can be passed to the engines as plain sequences, as objects with
a ``rankings`` attribute, or as mappings with a ``rankings`` key (such as
vote records decoded from JSON); :func:`ballot_rankings` resolves them.

The ballot validator checks a ballot at submission time the way the poll
service does before storing it. If a ballot is invalid, it raises a subclass
of :class:`VoteError`. The engines never validate ballots themselves.
'''

import abc
from typing import Any, Collection, Hashable, List, NamedTuple, Optional, \
    Tuple

import ranktally.candidate
from ranktally.persist import simple_serialization

RankedBallotType = Tuple[Hashable, ...]


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A ballot cannot be accepted into the poll.'''
    pass


class VoteTypeError(VoteError):
    '''Ballot rankings are not a sequence of candidate identifiers.

    :param rankings: The rankings submitted.
    :param entry: An entry of the rankings that is not a candidate
        identifier, if the rankings themselves are a list.
    '''
    def __init__(self, rankings: Any, entry: Any = None):
        self.rankings = rankings
        self.entry = entry
        wrong = rankings if entry is None else entry
        super().__init__(
            'ballot rankings must be a list of candidate identifiers,'
            f' got {type(wrong).__name__}'
            + ('' if entry is None else ' entry')
        )


class VoteMagnitudeError(VoteError):
    '''A ballot ranks too few or too many candidates.

    :param count: Number of candidates the ballot ranks.
    :param bounds: The permitted range of that number.
    :param counted: Which candidates were counted (all ``'ranked'`` ones or
        only those ``'valid'`` in the poll).
    '''
    def __init__(self, count: int, bounds: 'RankCountRange',
                 counted: str = 'ranked'):
        self.count = count
        self.bounds = bounds
        message = f'ballot has {count} {counted} candidates'
        if bounds.max_count is None:
            message += f', needs at least {bounds.min_count}'
        elif bounds.min_count is None:
            message += f', allows at most {bounds.max_count}'
        else:
            message += (
                f', needs between {bounds.min_count} and {bounds.max_count}'
            )
        super().__init__(message)


class VoteValueError(VoteError):
    '''A ballot ranks a candidate more than once.

    :param candidate: The repeated candidate identifier.
    '''
    def __init__(self, candidate: Hashable):
        self.candidate = candidate
        super().__init__(f'candidate {candidate!r} ranked more than once')


class RankCountRange(NamedTuple):
    '''Inclusive bounds on the number of candidates a ballot ranks.

    None means the respective bound is not checked.
    '''
    min_count: Optional[int] = None
    max_count: Optional[int] = None

    def check(self, count: int, counted: str = 'ranked') -> None:
        '''Raise :class:`VoteMagnitudeError` if the count is out of range.'''
        if (
            (self.min_count is not None and count < self.min_count)
            or (self.max_count is not None and count > self.max_count)
        ):
            raise VoteMagnitudeError(count, self, counted)


def ballot_rankings(ballot: Any) -> RankedBallotType:
    '''Return the ranking carried by a ballot given in any accepted form.'''
    if hasattr(ballot, 'keys'):
        return tuple(ballot['rankings'])
    return tuple(getattr(ballot, 'rankings', ballot))


def normalize(ranking: Collection[Hashable],
              valid_ids: Collection[Hashable],
              ) -> RankedBallotType:
    '''Filter a ranking to the candidates currently in the race.

    The order of the ranking is preserved. Duplicates are not treated
    specially. An empty result is valid and means the ballot does not
    contribute anything.

    :param ranking: Candidate identifiers, most preferred first.
    :param valid_ids: Identifiers of the candidates in the race; pass a set,
        since it is looked up once per ranked candidate.
    '''
    return tuple(cand for cand in ranking if cand in valid_ids)


def normalize_all(ballots: Collection[Any],
                  valid_ids: Collection[Hashable],
                  ) -> List[RankedBallotType]:
    '''Normalize a whole list of ballots against the same candidates.'''
    return [normalize(ballot_rankings(ballot), valid_ids) for ballot in ballots]


@simple_serialization
class RankedBallotValidator:
    '''Validate a ranked ballot before it is accepted into a poll.

    The ranking must be a list or a tuple of candidate identifiers with no
    repetitions. When the candidates of the poll are known, the ranking must
    keep at least one of them after unknown identifiers are filtered out.

    :param rank_count_bounds: Lower and upper bounds (inclusive) for the
        number of candidates a ballot can rank, before filtering. The default
        only requires the ranking to be non-empty.
    '''
    def __init__(self,
                 rank_count_bounds: Tuple[Optional[int], Optional[int]] = (
                     1, None
                 ),
                 ):
        self.rank_count_bounds = RankCountRange(*rank_count_bounds)

    def validate(self, rankings: Any) -> None:
        '''Check if the ranking is well-formed.

        :param rankings: The ranking submitted by the voter.
        :raises VoteTypeError: If the ranking is not a list or a tuple, or
            any of its entries cannot be a candidate identifier.
        :raises VoteMagnitudeError: If the number of ranked candidates is out
            of the specified bounds.
        :raises VoteValueError: If any candidate is ranked more than once.
        '''
        if not isinstance(rankings, (list, tuple)):
            raise VoteTypeError(rankings)
        self.rank_count_bounds.check(len(rankings))
        seen = set()
        for cand in rankings:
            if not ranktally.candidate.is_valid_id(cand):
                raise VoteTypeError(rankings, cand)
            if cand in seen:
                raise VoteValueError(cand)
            seen.add(cand)

    def clean(self,
              rankings: Any,
              candidates: Collection[Any],
              ) -> RankedBallotType:
        '''Validate the ranking and filter it to the candidates of the poll.

        :param rankings: The ranking submitted by the voter.
        :param candidates: Candidates of the poll, in any form accepted by
            :func:`ranktally.candidate.candidate_id`.
        :returns: The ranking restricted to valid candidates, as stored.
        :raises VoteMagnitudeError: If no valid candidate remains.
        '''
        self.validate(rankings)
        cleaned = normalize(
            rankings, set(ranktally.candidate.candidate_ids(candidates))
        )
        RankCountRange(1, None).check(len(cleaned), 'valid')
        return cleaned
