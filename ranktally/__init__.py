"""Ranktally - tallying engines for ranked polls.

Ranktally computes the winner of a poll in which voters rank the nominated
candidates. Three interchangeable voting methods are provided, all sharing
a single deterministic tie-breaking routine so that a result recomputed from
the same ballots always comes out the same:

-   Instant-runoff voting (ranked choice voting, RCV) in the
    :mod:`evaluate.sequential` module,
-   Borda count in the :mod:`evaluate.positional` module,
-   Condorcet with a Copeland fallback in the :mod:`evaluate.condorcet`
    module.

Candidates and ballots can be checked on submission using the validators
from the ``candidate`` and ``vote`` modules. The :mod:`system` module names
the voting methods and dispatches polls to their engines by method tag, and
the :mod:`io` subpackage reads poll snapshots from JSON and writes results
back to it.
"""
