'''Tallying engines computing the outcome of a poll.

Every engine is an :class:`core.Evaluator` taking the candidates and ballots
of a single poll snapshot and returning a result object specific to its
voting method:

-   :class:`sequential.InstantRunoff` returns a
    :class:`sequential.RCVResult` with the rounds of the count,
-   :class:`positional.Borda` returns a :class:`positional.BordaResult`
    with the scores of all candidates,
-   :class:`condorcet.Copeland` returns a :class:`condorcet.CondorcetResult`
    with the pairwise records of all candidates.

All of them break ties through :func:`tiebreak.break_tie`, which is fully
deterministic, so the same poll snapshot always gives the same result.

None of the evaluators validate ballots; use the tools in the
:mod:`ranktally.vote` module for that before ballots are accepted.
'''

from ranktally.evaluate.core import Evaluator, Result    # noqa: F401
