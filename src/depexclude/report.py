"""Tree-style report of the directories matched by a walk.

The matches of a walk are scattered across the home directory; rendering them as a tree
rooted at the traversal root shows at a glance which projects contributed them.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from anytree import ContStyle, Node, RenderTree

from depexclude.exclusion.disk_usage import format_size
from depexclude.types import PathType
from depexclude.walker.match_result import MatchResult


class MatchNode(Node):  # type: ignore
    """Node representing a directory on the way to, or at, a match.

    Extends anytree.Node with the match it stands for. Intermediate directories that
    only lead to matches have ``match`` set to None.

    Attributes:
        name (str): Base name of the directory.
        match (Optional[MatchResult]): The match this node represents, if any.
        size_bytes (Optional[int]): Disk usage of the match, if it was measured.

    Example:
        >>> root = MatchNode("home")
        >>> child = MatchNode("src", parent=root)
        >>> child.is_match
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["MatchNode"] = None,
        match: Optional[MatchResult] = None,
        size_bytes: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.match = match
        self.size_bytes = size_bytes

    @property
    def is_match(self) -> bool:
        return self.match is not None


def build_match_tree(
    root: PathType,
    matches: Iterable[MatchResult],
    sizes: Optional[Mapping[str, int]] = None,
) -> MatchNode:
    """Build a tree of matched directories below the traversal root.

    Args:
        root: The traversal root. Its base name becomes the name of the root node.
        matches: Matches produced by a walk of ``root``.
        sizes: Optional disk usage per match, keyed by relative path.

    Returns:
        The root node. Children are added in the order matches are given.
    """
    root_path = Path(root)
    tree = MatchNode(root_path.name or str(root_path))
    nodes: Dict[Tuple[str, ...], MatchNode] = {(): tree}

    for match in matches:
        parts = tuple(match.relative_path.split("/"))
        parent = tree
        for depth in range(1, len(parts)):
            key = parts[:depth]
            if key not in nodes:
                nodes[key] = MatchNode(parts[depth - 1], parent=parent)
            parent = nodes[key]

        size_bytes = sizes.get(match.relative_path) if sizes is not None else None
        nodes[parts] = MatchNode(parts[-1], parent=parent, match=match, size_bytes=size_bytes)

    return tree


def render_match_tree(tree: MatchNode) -> Iterator[str]:
    """Generate a tree representation of the matches one line at a time.

    Siblings are listed alphabetically. Matched directories carry the rule that matched
    them and, when known, their size.

    Yields:
        Lines of the tree representation, without trailing newlines.

    Example:
        >>> root = MatchNode("u")
        >>> app = MatchNode("app", parent=root)
        >>> _ = MatchNode(".nvm", parent=root, size_bytes=2048)
        >>> _ = MatchNode("lib", parent=app)
        >>> for line in render_match_tree(root):
        ...     print(line)
        u/
        ├── .nvm/ (2 KiB)
        └── app/
            └── lib/
    """

    def sorted_children(children: Iterable[MatchNode]) -> Iterable[MatchNode]:
        return sorted(children, key=lambda n: n.name.lower())

    for prefix, _, node in RenderTree(tree, style=ContStyle(), childiter=sorted_children):
        suffix = "/"
        if node.match is not None:
            suffix += f"  [{node.match.rule.describe()}]"
        if node.size_bytes is not None:
            suffix += f" ({format_size(node.size_bytes)})"
        yield f"{prefix}{node.name}{suffix}"
