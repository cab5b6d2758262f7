"""Shared functionality for poll snapshot I/O. Internal."""

import dataclasses
from typing import Any, Callable, List, Optional, TextIO, Tuple

from ranktally.vote import RankedBallotType


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class PollSnapshot:
    """The state of a poll the engines need to compute its result."""
    candidates: List[Any]
    ballots: List[RankedBallotType]
    method: Optional[str] = None
    title: Optional[str] = None


def loaders(text_loader: Callable[..., PollSnapshot]
            ) -> Tuple[Callable[..., PollSnapshot], Callable[..., PollSnapshot]]:
    """Create load() and loads() functions from a text parsing function."""

    def load(file: TextIO, **kwargs) -> PollSnapshot:
        return text_loader(file.read(), **kwargs)

    def loads(text: str, **kwargs) -> PollSnapshot:
        return text_loader(text, **kwargs)

    return load, loads


def dumpers(text_dumper: Callable[..., str]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a text generating function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        text = text_dumper(*args, **kwargs)
        if not text.endswith('\n'):
            text += '\n'
        file.write(text)

    def dumps(*args, **kwargs) -> str:
        return text_dumper(*args, **kwargs)

    return dump, dumps
