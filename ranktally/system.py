'''Named voting methods and dispatch of polls to their tallying engines.

A poll records the tag of the voting method it uses (``rcv``, ``borda`` or
``condorcet``). :func:`evaluate` selects the engine registered for the tag
and computes the result; :func:`evaluate_all` recomputes the same poll under
every method, so that a viewer can compare them without changing the
method the poll records.
'''

import logging
from typing import Any, Collection, Dict

import ranktally.evaluate
import ranktally.evaluate.condorcet
import ranktally.evaluate.positional
import ranktally.evaluate.sequential
from ranktally.evaluate.condorcet import CondorcetResult
from ranktally.evaluate.positional import BordaResult
from ranktally.evaluate.sequential import RCVResult
from ranktally.persist import simple_serialization

logger = logging.getLogger(__name__)


class UnknownMethodError(KeyError):
    '''A voting method tag has no registered engine.

    :param method: The tag requested.
    '''
    def __init__(self, method: Any):
        self.method = method
        super().__init__(
            f'unknown voting method: {method!r}, available: '
            + ', '.join(METHODS)
        )

    def __str__(self) -> str:
        return self.args[0]


@simple_serialization
class VotingSystem:
    """A named voting method. Wraps a tallying engine.

    :param name: Display name of the method.
    :param evaluator: The engine computing results under the method.
    :param description: Short description for poll creators choosing
        a method.
    """
    def __init__(self,
                 name: str,
                 evaluator: ranktally.evaluate.Evaluator,
                 description: str = '',
                 ):
        self.name = name
        self.evaluator = evaluator
        self.description = description

    def evaluate(self,
                 candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> ranktally.evaluate.Result:
        """Return the engine's result for the candidates and ballots given."""
        return self.evaluator.evaluate(candidates, ballots)


SYSTEMS: Dict[str, VotingSystem] = {
    'borda': VotingSystem(
        'Borda Count',
        ranktally.evaluate.positional.Borda(),
        'Points-based ranking. Best for finding consensus when you have'
        ' many options.',
    ),
    'condorcet': VotingSystem(
        'Condorcet',
        ranktally.evaluate.condorcet.Copeland(),
        'Head-to-head matchups. Finds the option most acceptable to everyone.',
    ),
    'rcv': VotingSystem(
        'Ranked Choice (IRV)',
        ranktally.evaluate.sequential.InstantRunoff(),
        'Eliminates last-place each round. Best when voters have strong'
        ' preferences.',
    ),
}

METHODS = tuple(SYSTEMS.keys())


def get_system(method: str) -> VotingSystem:
    '''Return the voting system registered for a method tag.

    :raises UnknownMethodError: If no system is registered for the tag.
    '''
    try:
        return SYSTEMS[method]
    except (KeyError, TypeError) as e:
        raise UnknownMethodError(method) from e


def evaluate(method: str,
             candidates: Collection[Any],
             ballots: Collection[Any],
             ) -> ranktally.evaluate.Result:
    '''Compute the result of a poll under the given voting method.

    :param method: Tag of the voting method (see :data:`METHODS`).
    :param candidates: Candidates standing in the poll.
    :param ballots: Ballots cast.
    :raises UnknownMethodError: If the method tag is unknown.
    '''
    system = get_system(method)
    logger.info('evaluating %d ballots for %d candidates by %s',
                len(ballots), len(candidates), system.name)
    return system.evaluate(candidates, ballots)


def evaluate_all(candidates: Collection[Any],
                 ballots: Collection[Any],
                 ) -> Dict[str, ranktally.evaluate.Result]:
    '''Compute the result of a poll under every registered voting method.'''
    return {
        method: evaluate(method, candidates, ballots)
        for method in METHODS
    }


def describe(result: ranktally.evaluate.Result) -> str:
    '''Summarize a result of any voting method in a single sentence.

    :raises TypeError: If the result is not of a known voting method.
    '''
    if isinstance(result, RCVResult):
        if result.winner is None:
            return 'No winner: nothing to count.'
        n_rounds = len(result.rounds)
        return (
            f'{result.winner} wins after {n_rounds}'
            f' round{"s" if n_rounds != 1 else ""}'
            f' of {result.total_votes} ballots.'
        )
    elif isinstance(result, BordaResult):
        if result.winner is None:
            return 'No winner: nothing to count.'
        return (
            f'{result.winner} wins with {result.scores[result.winner]}'
            f' of {result.max_possible_score} possible points'
            + _tie_note(result.tie_breaker_method)
        )
    elif isinstance(result, CondorcetResult):
        if result.winner is None:
            return 'No winner: nothing to count.'
        elif not result.no_condorcet_winner:
            return f'{result.winner} is the Condorcet winner.'
        score = next(
            standing.score for standing in result.ranking
            if standing.candidate_id == result.winner
        )
        return (
            f'No Condorcet winner; {result.winner} wins with'
            f' a Copeland score of {score}'
            + _tie_note(result.tie_breaker_method)
        )
    else:
        raise TypeError(f'unknown result type: {type(result).__name__}')


def _tie_note(tie_breaker_method) -> str:
    if tie_breaker_method is None:
        return '.'
    return f' after a tie broken by {tie_breaker_method}.'
