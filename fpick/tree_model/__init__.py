"""Tree-row model: displayable nodes and the relevance filter."""

from __future__ import annotations

from .types import SELF_REFERENCE_NAME, TreeNode
from .filtering import PREFIX_BONUS, evaluate_relevance, filter_tokens, filter_tree_nodes

__all__ = [
    "SELF_REFERENCE_NAME",
    "TreeNode",
    "PREFIX_BONUS",
    "evaluate_relevance",
    "filter_tokens",
    "filter_tree_nodes",
]
