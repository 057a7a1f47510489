"""
tree.py

Aggregates call stacks into a single tree: stacks sharing a prefix share the
nodes of that prefix, and each node accumulates the value and the percentage
of every sample that went through it.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from .types import Function, Sample

logger = logging.getLogger(__name__)


class TreeNode:
    def __init__(self, function: Optional[Function] = None, key: tuple = ()):
        self.function = function
        self.key = key
        self.children: List["TreeNode"] = []
        self.value = 0
        self.self_value = 0
        self.percent = 0.0
        self.visible = False
        self._index = {}

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def name(self) -> str:
        return self.function.name if self.function else ""

    @property
    def file(self) -> str:
        return self.function.file if self.function else ""

    @property
    def line_number(self) -> int:
        return self.function.line_number if self.function else 0

    def add_function(self, function: Function, value: int, percent: float, aggregate_by_function: bool) -> "TreeNode":
        """Merge `function` into the child with the same identity, creating it if needed."""
        key = function.key(not aggregate_by_function)
        child = self._index.get(key)
        if child is None:
            child = TreeNode(replace(function, self_value=0), key)
            self._index[key] = child
            self.children.append(child)
        child.value += value
        child.self_value += function.self_value
        child.percent += percent
        return child

    def __repr__(self):
        return f"TreeNode({self.key!r}, value={self.value}, children={len(self.children)})"


class FunctionsTree:
    def __init__(self, name: str, aggregate_by_function: bool = True):
        self.name = name
        self.aggregate_by_function = aggregate_by_function
        self.root = TreeNode()

    def insert(self, sample: Sample):
        if sample.value == 0:
            return
        node = self.root
        node.value += sample.value
        node.percent += sample.percent_total
        for function in sample.functions:
            node = node.add_function(function, sample.value, sample.percent_total, self.aggregate_by_function)

    def filter(self, search: str) -> bool:
        return filter_tree(self.root, search)

    def sort(self):
        sort_tree(self.root)

    def walk(self) -> Iterable[TreeNode]:
        """Every node, parents before children."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def filter_tree(root: TreeNode, search: str) -> bool:
    """
    Set `visible` on every node below and including `root`.

    A node is visible when its function name or file contains `search`
    (case-insensitive) or when one of its descendants is visible. An empty
    search shows everything.
    """
    needle = search.lower()
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        if not needle:
            node.visible = True
            continue
        visible = node.function is not None and (
            needle in node.function.name.lower() or needle in node.function.file.lower()
        )
        node.visible = visible or any(child.visible for child in node.children)
    return root.visible


def sort_tree(root: TreeNode):
    """Order children by descending value at every level, ties by identity."""
    stack = [root]
    while stack:
        node = stack.pop()
        node.children.sort(key=lambda n: (-n.value, n.key))
        stack.extend(node.children)


def build_tree(samples: Iterable[Sample], name: str, aggregate_by_function: bool = True, search: str = "") -> FunctionsTree:
    tree = FunctionsTree(name, aggregate_by_function)
    for sample in samples:
        tree.insert(sample)
    tree.filter(search)
    tree.sort()
    logger.debug("built tree %r with %d top-level calls", name, len(tree.root.children))
    return tree
