"""Relevance scoring and filtering of directory entries.

Scoring is token-based: every whitespace-separated token of the query must be
a substring of the entry name, and names starting with the first token get a
large bonus. There is no fuzzy or edit-distance matching.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..filesystem import FileNode
from .types import TreeNode

PREFIX_BONUS = 10


def filter_tokens(filter_text: str) -> list[str]:
    """Split ``filter_text`` on whitespace into lowercase tokens."""
    return [token.lower() for token in filter_text.split()]


def evaluate_relevance(name: str, tokens: Sequence[str]) -> int:
    """Score lowercase ``name`` against ``tokens``.

    Returns 0 when there are no tokens or any token is missing; otherwise the
    token count plus ``PREFIX_BONUS`` when ``name`` starts with the first token.
    """
    if not tokens:
        return 0
    for token in tokens:
        if token not in name:
            return 0
    relevance = len(tokens)
    if name.startswith(tokens[0]):
        relevance += PREFIX_BONUS
    return relevance


def _sort_key(node: TreeNode) -> tuple[int, bool, str]:
    return (-node.relevance, not node.is_directory, node.indexed_name)


def filter_tree_nodes(entries: Sequence[FileNode], filter_text: str) -> list[TreeNode]:
    """Build the displayed rows for ``entries`` under ``filter_text``.

    Without a filter the self reference comes first, then directories, then
    files, each by lowercase name. With a filter, rows scoring 0 are dropped
    (the self reference included) and the rest are ranked by relevance.
    """
    tokens = filter_tokens(filter_text)
    if not filter_text:
        nodes = sorted((TreeNode(file_node=entry) for entry in entries), key=_sort_key)
        return [TreeNode.self_reference(), *nodes]

    candidates = [TreeNode.self_reference(), *(TreeNode(file_node=entry) for entry in entries)]
    scored = [
        TreeNode(file_node=node.file_node, relevance=evaluate_relevance(node.indexed_name, tokens))
        for node in candidates
    ]
    matching = [node for node in scored if node.relevance > 0]
    matching.sort(key=_sort_key)
    return matching


__all__ = [
    "PREFIX_BONUS",
    "filter_tokens",
    "evaluate_relevance",
    "filter_tree_nodes",
]
