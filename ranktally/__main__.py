"""A commandline tool for quick evaluation of ranked polls.

Loads a poll snapshot (candidates and ballots) in JSON and computes its
result under the poll's voting method, other chosen methods, or all of them
for comparison.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import List, Optional

import ranktally.io.snapshot
import ranktally.system
from ranktally.evaluate.condorcet import CondorcetResult
from ranktally.evaluate.positional import BordaResult
from ranktally.evaluate.sequential import RCVResult
from ranktally.io.core import PollSnapshot

DEFAULT_METHOD = 'rcv'

argparser = argparse.ArgumentParser(
    prog='python -m ranktally',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the poll snapshot from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the poll snapshot from standard input',
)
argparser.add_argument(
    '-m', '--method',
    nargs='*',
    choices=ranktally.system.METHODS,
    help=(
        'voting methods to use; default (None) uses the method recorded'
        f' in the snapshot, or {DEFAULT_METHOD} if there is none'
    ),
)
argparser.add_argument(
    '-a', '--all-methods',
    action='store_true',
    help='compare the results of all voting methods',
)
argparser.add_argument(
    '-j', '--json',
    action='store_true',
    help='print the results as JSON',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='log every counting step, including intermediate tallies',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='only log warnings and errors',
)


def main(input_file: Optional[io.TextIOBase],
         use_stdin: bool = False,
         method: Optional[List[str]] = None,
         all_methods: bool = False,
         json: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    snapshot = ranktally.io.snapshot.load(input_file)
    if not snapshot.candidates:
        warnings.warn('no candidates: cannot evaluate poll, terminating')
        return
    methods = select_methods(snapshot, method, all_methods)
    try:
        systems = [ranktally.system.get_system(tag) for tag in methods]
    except ranktally.system.UnknownMethodError as e:
        argparser.error(str(e))
    for method_tag, system in zip(methods, systems):
        result = ranktally.system.evaluate(
            method_tag, snapshot.candidates, snapshot.ballots
        )
        if json:
            ranktally.io.snapshot.dump(sys.stdout, result)
        else:
            show_result(system, result, snapshot)


def select_methods(snapshot: PollSnapshot,
                   selected: Optional[List[str]] = None,
                   all_methods: bool = False,
                   ) -> List[str]:
    """Select the voting methods to evaluate the poll with."""
    if all_methods:
        return list(ranktally.system.METHODS)
    elif selected:
        return selected
    elif snapshot.method:
        return [snapshot.method]
    else:
        return [DEFAULT_METHOD]


def show_result(system: ranktally.system.VotingSystem,
                result: ranktally.evaluate.Result,
                snapshot: PollSnapshot,
                ) -> None:
    """Show full results of a poll under a single voting method."""
    titles = {
        cand.id: (cand.title or str(cand.id)) for cand in snapshot.candidates
    }
    print()
    if snapshot.title:
        print(f'{snapshot.title}: {system.name}')
    else:
        print(system.name)
    print(f'Received {result.total_votes} ballots'
          f' for {len(snapshot.candidates)} candidates')
    if isinstance(result, RCVResult):
        for i, count in enumerate(result.rounds, start=1):
            print(f'Round {i} ({count.total_votes} votes):')
            _show_table(count.counts, titles)
            if count.eliminated is not None:
                print(f'    eliminated {titles[count.eliminated]}'
                      f' ({count.elimination_reason})')
    elif isinstance(result, BordaResult):
        _show_table(result.scores, titles)
    elif isinstance(result, CondorcetResult):
        _show_table({
            standing.candidate_id:
                f'{standing.wins}W {standing.losses}L ({standing.score:+d})'
            for standing in result.ranking
        }, titles)
    else:
        raise TypeError(f'unknown result type: {type(result).__name__}')
    print(ranktally.system.describe(result))
    if result.winner is not None:
        print(f'Winner: {titles[result.winner]}')


def _show_table(rows: dict, titles: dict) -> None:
    # rows are keyed by candidate id, titles need not be unique
    if not rows:
        return
    n_just_chars = max(len(titles[cand]) for cand in rows)
    for cand, right in rows.items():
        print('   ', titles[cand].ljust(n_just_chars), ' ', right)


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
