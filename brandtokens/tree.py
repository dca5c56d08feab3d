"""Nested group tree assembly and ordering."""

from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from typing import List, Sequence, Tuple

from pyuca import Collator

from .models import GroupObject, TokenObject, TreeNode


def upsert_group(level: List[TreeNode], name: str) -> List[TreeNode]:
    """Return the children of the group called ``name`` in ``level``, creating it if absent.

    Only groups match; a token with the same name at this level is left alone.
    """
    for item in level:
        if isinstance(item, GroupObject) and item.name == name:
            return item.children
    group = GroupObject(name=name)
    level.append(group)
    return group.children


def insert_token_into_tree(
    root: List[TreeNode], folder_path: Sequence[str], token: TokenObject
) -> None:
    """Append ``token`` under ``folder_path``, creating intermediate groups on demand."""
    level = root
    for folder in folder_path:
        level = upsert_group(level, folder)
    level.append(token)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def collation_key(name: str) -> Tuple[Tuple[int, ...], str]:
    """Unicode collation key for a node name, lowercase ahead of uppercase on ties."""
    return tuple(_collator().sort_key(name)), name.swapcase()


def _node_key(item: TreeNode) -> Tuple[int, Tuple[Tuple[int, ...], str]]:
    tier = 0 if isinstance(item, GroupObject) else 1
    return tier, collation_key(item.name)


def sort_tokens_alphabetically(items: Sequence[TreeNode]) -> List[TreeNode]:
    """Return a sorted copy of ``items``: groups before tokens, names in collation order.

    Group children are sorted recursively; the input tree is not modified.
    """
    prepared: List[TreeNode] = []
    for item in items:
        if isinstance(item, GroupObject):
            prepared.append(replace(item, children=sort_tokens_alphabetically(item.children)))
        else:
            prepared.append(item)
    return sorted(prepared, key=_node_key)


__all__ = ["collation_key", "insert_token_into_tree", "sort_tokens_alphabetically", "upsert_group"]
