"""Argument parsing helpers shared by the command handlers."""

from __future__ import annotations

from typing import Optional, Sequence

from ios_sim.router_core import RouterCore

__all__ = [
    "split_interface_token",
    "resolve_interface_name",
    "parse_banner",
    "parse_int",
]


def split_interface_token(name: str) -> tuple[str, str]:
    for index, char in enumerate(name):
        if char.isdigit():
            return name[:index], name[index:]
    return name, ""


def resolve_interface_name(router: RouterCore, alias: str) -> Optional[str]:
    """``g0/0`` や ``Se0/0/1`` のような省略形を正式名に解決します。"""

    alias = alias.replace(" ", "")
    if not alias:
        return None
    interfaces = router.interface_names()
    for name in interfaces:
        if name.lower() == alias.lower():
            return name

    alias_prefix, alias_suffix = split_interface_token(alias)
    if not alias_prefix or not alias_suffix:
        return None
    candidates: list[str] = []
    for name in interfaces:
        prefix, suffix = split_interface_token(name)
        if not prefix.lower().startswith(alias_prefix.lower()):
            continue
        if suffix != alias_suffix:
            continue
        candidates.append(name)
    if len(candidates) == 1:
        return candidates[0]
    return None


def parse_banner(args: Sequence[str]) -> Optional[str]:
    """Extract the text between the first character and its next occurrence."""

    text = " ".join(args).strip()
    if len(text) < 2:
        return None
    delimiter = text[0]
    end = text.find(delimiter, 1)
    if end == -1:
        return None
    return text[1:end]


def parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None
