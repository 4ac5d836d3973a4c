"""Keyword trie used to resolve abbreviated IOS-style command lines.

Each CLI mode owns one :class:`CommandTrie`.  Commands are registered as
keyword paths (``["show", "ip", "route"]``) and looked up with whatever the user
typed, so ``sh ip ro`` resolves to the same leaf as ``show ip route``.  Tokens
left over once no child keyword matches are passed through to the handler as
arguments (``ping 10.0.0.1``).

Lookup failures are reported as :class:`CommandError` subclasses by
:meth:`CommandTrie.match`; :meth:`CommandTrie.run` turns them into a failed
:class:`Outcome` so callers never have to catch anything for bad user input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

__all__ = [
    "AmbiguousCommand",
    "CommandError",
    "CommandMatch",
    "CommandNotFound",
    "CommandTrie",
    "Handler",
    "IncompleteCommand",
    "Outcome",
    "TrieNode",
    "UnimplementedCommand",
    "tokenize",
]

Handler = Callable[[Any, List[str]], Optional[str]]


class CommandError(Exception):
    """Base class for lookup failures; ``str(exc)`` is the user-facing message."""

    def __init__(self, message: str, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.token = token


class CommandNotFound(CommandError):
    def __init__(self, token: str) -> None:
        super().__init__(f'Unrecognized command: "{token}"', token)


class AmbiguousCommand(CommandError):
    def __init__(self, token: str, candidates: Sequence[str] = ()) -> None:
        super().__init__(f'Ambiguous command: "{token}"', token)
        self.candidates = list(candidates)


class IncompleteCommand(CommandError):
    def __init__(self, path: Sequence[str] = ()) -> None:
        super().__init__("Incomplete command.")
        self.path = list(path)


class UnimplementedCommand(CommandError):
    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(f'Command not implemented: "{" ".join(path)}"')
        self.path = list(path)


@dataclass
class TrieNode:
    keyword: str = ""
    help_text: str = ""
    is_terminal: bool = False
    handler: Optional[Handler] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def candidates(self, token: str) -> List["TrieNode"]:
        """Children whose keyword starts with ``token`` (case-sensitive)."""

        return [child for keyword, child in self.children.items() if keyword.startswith(token)]


@dataclass(frozen=True)
class CommandMatch:
    node: TrieNode
    path: List[str]
    arguments: List[str]

    @property
    def handler(self) -> Optional[Handler]:
        return self.node.handler


@dataclass(frozen=True)
class Outcome:
    ok: bool
    output: str = ""
    error: Optional[str] = None

    @classmethod
    def success(cls, output: Optional[str] = None) -> "Outcome":
        return cls(ok=True, output=output or "")

    @classmethod
    def failure(cls, message: str) -> "Outcome":
        return cls(ok=False, error=message)

    def render(self) -> str:
        if self.ok:
            return self.output
        return f"% {self.error}"


def tokenize(line: str) -> List[str]:
    """Split on runs of whitespace; no quoting or escaping."""

    return line.split()


class CommandTrie:
    def __init__(self) -> None:
        self._root = TrieNode()

    @property
    def root(self) -> TrieNode:
        return self._root

    def register(self, keywords: Sequence[str], help_text: str, handler: Optional[Handler]) -> TrieNode:
        """Add ``keywords`` as a command, replacing any earlier registration of the same path."""

        if not keywords:
            raise ValueError("command path must contain at least one keyword")
        node = self._root
        for keyword in keywords:
            if not keyword or keyword != keyword.strip() or len(keyword.split()) != 1:
                raise ValueError(f"invalid keyword: {keyword!r}")
            child = node.children.get(keyword)
            if child is None:
                child = TrieNode(keyword=keyword)
                node.children[keyword] = child
            node = child
        node.is_terminal = True
        node.help_text = help_text
        node.handler = handler
        return node

    def match(self, tokens: Sequence[str]) -> CommandMatch:
        node = self._root
        path: List[str] = []
        consumed = 0
        for token in tokens:
            found = node.candidates(token)
            if not found:
                if not path or not node.is_terminal:
                    raise CommandNotFound(token)
                # 残りのトークンは引数として扱う
                break
            if len(found) > 1:
                raise AmbiguousCommand(token, sorted(child.keyword for child in found))
            node = found[0]
            path.append(node.keyword)
            consumed += 1
        if not path:
            raise CommandNotFound(tokens[0] if tokens else "")
        if not node.is_terminal:
            raise IncompleteCommand(path)
        return CommandMatch(node=node, path=path, arguments=list(tokens[consumed:]))

    def run(self, context: Any, line: str) -> Outcome:
        tokens = tokenize(line)
        if not tokens:
            return Outcome.success()
        try:
            found = self.match(tokens)
            if found.handler is None:
                raise UnimplementedCommand(found.path)
        except CommandError as exc:
            return Outcome.failure(str(exc))
        return Outcome.success(found.handler(context, tokens))

    # ------------------------------------------------------------------
    # 補完・ヘルプ
    # ------------------------------------------------------------------
    def completions(self, tokens: Sequence[str], fragment: str = "") -> List[str]:
        """Keywords that could follow ``tokens`` and start with ``fragment``."""

        node = self._root
        for token in tokens:
            found = node.candidates(token)
            if len(found) != 1:
                return []
            node = found[0]
        return sorted(keyword for keyword in node.children if keyword.startswith(fragment))

    def help_entries(self) -> List[tuple[str, str]]:
        entries: List[tuple[str, str]] = []

        def walk(node: TrieNode, path: List[str]) -> None:
            if node.is_terminal:
                entries.append((" ".join(path), node.help_text))
            for keyword in sorted(node.children):
                walk(node.children[keyword], path + [keyword])

        walk(self._root, [])
        return entries
