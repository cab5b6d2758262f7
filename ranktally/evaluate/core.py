'''General tallying engine machinery.

Every engine is an :class:`Evaluator`: its ``evaluate()`` method takes the
candidates and ballots of one poll snapshot and returns a :class:`Result`.
Results form a tagged union: each voting method has its own result class,
identified by the value of its ``method`` class attribute, so consumers can
dispatch on the variant instead of probing for fields.
'''

import abc
import dataclasses
from typing import Any, ClassVar, Collection, Dict, FrozenSet, Hashable, \
    List, Tuple

import ranktally.candidate
import ranktally.vote
from ranktally.persist import serialize_value
from ranktally.vote import RankedBallotType


def camel_case(name: str) -> str:
    '''Convert a snake_case attribute name to a camelCase key.'''
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


class CamelCaseSerialized:
    '''Mixin for dataclasses serialized with camelCase keys.

    Fields listed in ``omit_if_none`` are left out when they are None.
    '''
    omit_if_none: ClassVar[FrozenSet[str]] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {}
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if value is None and field.name in self.omit_if_none:
                continue
            out_dict[camel_case(field.name)] = serialize_value(value)
        return out_dict


@dataclasses.dataclass
class Result(CamelCaseSerialized):
    '''Base class of the results of all voting methods.

    Subclasses are dataclasses that define at least ``winner`` (a candidate
    identifier or None when there is nothing to decide) and ``total_votes``
    (the number of ballots the result was computed from).
    '''
    method: ClassVar[str] = NotImplemented

    def to_dict(self) -> Dict[str, Any]:
        '''Return the result as a JSON-ready dictionary.

        The dictionary is tagged by the ``method`` key.
        '''
        return {'method': self.method, **super().to_dict()}


class Evaluator(metaclass=abc.ABCMeta):
    '''Compute the outcome of a poll from its candidates and ballots.

    A root abstract base class for all tallying engines. Engines are pure:
    they do not mutate their inputs, keep no state between calls and never
    raise for degenerate input (no candidates or no ballots), returning
    a result with no winner instead.
    '''
    @abc.abstractmethod
    def evaluate(self,
                 candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> Result:
        '''Compute the result of the poll.

        :param candidates: Candidates standing in the poll, in any form
            accepted by :func:`ranktally.candidate.candidate_id`.
        :param ballots: Ballots cast, in any form accepted by
            :func:`ranktally.vote.ballot_rankings`.
        '''
        raise NotImplementedError


def tally_input(candidates: Collection[Any],
                ballots: Collection[Any],
                ) -> Tuple[List[Hashable], List[RankedBallotType]]:
    '''Resolve engine input to candidate identifiers and raw rankings.

    :returns: A 2-tuple of the candidate identifiers in input order and the
        unfiltered rankings of all ballots.
    '''
    cand_ids = ranktally.candidate.candidate_ids(candidates)
    rankings = [ranktally.vote.ballot_rankings(ballot) for ballot in ballots]
    return cand_ids, rankings
