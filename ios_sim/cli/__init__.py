from .context import CliMode, ExecutionContext, SessionState
from .dispatcher import RouterCLI
from .trie import (
    AmbiguousCommand,
    CommandError,
    CommandMatch,
    CommandNotFound,
    CommandTrie,
    IncompleteCommand,
    Outcome,
    UnimplementedCommand,
)

__all__ = [
    "AmbiguousCommand",
    "CliMode",
    "CommandError",
    "CommandMatch",
    "CommandNotFound",
    "CommandTrie",
    "ExecutionContext",
    "IncompleteCommand",
    "Outcome",
    "RouterCLI",
    "SessionState",
    "UnimplementedCommand",
]
