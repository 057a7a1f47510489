"""
render.py

Render a FunctionsTree as a collapsible Rich tree, with human-friendly
durations for CPU profiles and byte sizes for heap profiles.
"""

from rich.markup import escape
from rich.tree import Tree

from .profile import Profile
from .tree import FunctionsTree, TreeNode


def format_duration(ns: int) -> str:
    """Convert nanoseconds to a human-friendly string."""
    if ns >= 1_000_000_000:
        return f"{ns / 1_000_000_000:.2f}s"
    elif ns >= 1_000_000:
        return f"{ns / 1_000_000:.2f}ms"
    elif ns >= 1_000:
        return f"{ns / 1_000:.2f}µs"
    else:
        return f"{ns}ns"


def format_bytes(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    size = float(n)
    for unit in ("KiB", "MiB", "GiB", "TiB"):
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f} {unit}"


def format_value(value: int, profile_type: str) -> str:
    if profile_type == "cpu":
        return format_duration(value)
    return format_bytes(value)


def header(profile: Profile, tree: FunctionsTree) -> str:
    if profile.profile_type == "cpu":
        return (
            f"{tree.name} - total sampling duration: {format_duration(profile.total)}"
            f" - total capture duration: {format_duration(profile.capture_duration)}"
        )
    return f"{tree.name} - total allocated memory: {format_bytes(profile.total)}"


def label(node: TreeNode, profile_type: str, line_numbers: bool) -> str:
    text = f"[bold]{escape(node.function.label(line_numbers))}[/] • {format_value(node.value, profile_type)}"
    if node.self_value:
        text += f" (self {format_value(node.self_value, profile_type)})"
    return f"{text} ({node.percent:.1f}%)"


def render(node: TreeNode, tree: Tree, profile_type: str, line_numbers: bool):
    # children are already sorted by the builder
    for child in node.children:
        if not child.visible:
            continue
        branch = tree.add(label(child, profile_type, line_numbers))
        render(child, branch, profile_type, line_numbers)


def render_tree(profile: Profile, tree: FunctionsTree) -> Tree:
    console_tree = Tree(f"[b]{escape(header(profile, tree))}[/]")
    render(tree.root, console_tree, profile.profile_type, not tree.aggregate_by_function)
    return console_tree
