"""
View Tree

Mirrors a skeleton 1:1 by tree position. Each view node owns at most one
drawable primitive on a drawing surface and turns world-space points from
its joint into primitive updates through the view's fixed world-to-screen
matrix.

Primitives are created lazily on the first update and mutated in place
afterwards, so a pose edit costs one coordinate write per joint instead of a
teardown and recreate.
"""

import numpy as np
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .projection import ViewProjection
from .surface import DrawingSurface
from ..errors import ShapeMismatchError, TopologyMismatchError
from ..kinematics.joint import Joint, Shape
from ..utils.logging import view_log


class ViewNode:
    """
    Drawable mirror of one joint.

    Attributes:
        joint_name: Name of the joint this node was built from
        shape: Shape tag copied from the joint at build time
        primitive: Surface handle, None until the first update
        children: Child view nodes, same order and count as the joint's
    """

    def __init__(
        self,
        joint_name: str,
        shape: Shape,
        projection: ViewProjection,
        surface: DrawingSurface,
    ):
        self.joint_name = joint_name
        self.shape = shape
        self.projection = projection
        self.surface = surface
        self.primitive: Optional[Any] = None
        self.children: List["ViewNode"] = []

    def __repr__(self) -> str:
        return (
            f"ViewNode({self.joint_name!r}, shape={self.shape.value}, "
            f"children={len(self.children)}, drawn={self.primitive is not None})"
        )

    def iter_nodes(self) -> Iterator["ViewNode"]:
        """Depth-first pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def update(self, points: np.ndarray) -> None:
        """
        Project world points and create or update this node's primitive.

        Args:
            points: (2, 3|4) segment endpoints, or (N >= 3, 3|4) polygon points
        """
        screen = self.projection.project(points)

        if self.shape == Shape.SEGMENT:
            if len(screen) != 2:
                raise ShapeMismatchError(
                    f"Segment view '{self.joint_name}' needs 2 points, got {len(screen)}"
                )
            if self.primitive is None:
                self.primitive = self.surface.create_line(screen[0], screen[1])
                view_log.debug(f"[{self.projection.name}] Created line for '{self.joint_name}'")
            else:
                self.surface.update_line(self.primitive, screen[0], screen[1])
        else:
            if len(screen) < 3:
                raise ShapeMismatchError(
                    f"Polygon view '{self.joint_name}' needs at least 3 points, got {len(screen)}"
                )
            if self.primitive is None:
                self.primitive = self.surface.create_polygon(screen)
                view_log.debug(f"[{self.projection.name}] Created polygon for '{self.joint_name}'")
            else:
                self.surface.update_polygon(self.primitive, screen)

    def check_topology(self, joint: Joint) -> None:
        """
        Verify that this subtree still mirrors the joint subtree.

        Raises:
            TopologyMismatchError: On the first child-count or shape mismatch
        """
        stack: List[Tuple["ViewNode", Joint, str]] = [(self, joint, joint.name)]
        while stack:
            node, j, path = stack.pop()
            if node.shape != j.shape:
                raise TopologyMismatchError(
                    path, len(j.children), len(node.children),
                    detail=f"joint is a {j.shape.value}, view node was built as a {node.shape.value}",
                )
            if len(node.children) != len(j.children):
                raise TopologyMismatchError(path, len(j.children), len(node.children))
            for child_node, child_joint in zip(node.children, j.children):
                stack.append((child_node, child_joint, f"{path}/{child_joint.name}"))

    def iter_paths(self, path: str = "") -> Iterator[Tuple[str, "ViewNode"]]:
        """Pre-order (path, node) pairs; a path joins joint names with '/'."""
        path = f"{path}/{self.joint_name}" if path else self.joint_name
        yield path, self
        for child in self.children:
            yield from child.iter_paths(path)

    def _pairs(self, joint: Joint) -> Iterator[Tuple["ViewNode", Joint]]:
        yield self, joint
        for child_node, child_joint in zip(self.children, joint.children):
            yield from child_node._pairs(child_joint)

    def propagate(self, joint: Joint) -> None:
        """
        Push the joint subtree's current world points into this view subtree.

        Topology is checked and every point list is computed before the
        first primitive is touched, so a failing pass draws nothing.

        Args:
            joint: The joint this node mirrors (already propagated)
        """
        try:
            self.check_topology(joint)
            updates = [(node, j.world_points()) for node, j in self._pairs(joint)]
        except Exception as e:
            view_log.error(f"[{self.projection.name}] Render pass aborted: {e}")
            raise

        for node, points in updates:
            node.update(points)


def build_view_tree(
    joint: Joint,
    projection: ViewProjection,
    surface: DrawingSurface,
) -> ViewNode:
    """
    Build a view subtree mirroring a joint subtree.

    May be called before or after the skeleton's first propagation; no
    primitive is created until the first update.
    """
    node = ViewNode(joint.name, joint.shape, projection, surface)
    node.children = [build_view_tree(child, projection, surface) for child in joint.children]
    return node


class ViewTree:
    """A complete view of one skeleton on one surface."""

    def __init__(self, skeleton: Joint, projection: ViewProjection, surface: DrawingSurface):
        self.projection = projection
        self.surface = surface
        self.root = build_view_tree(skeleton, projection, surface)
        view_log.info(
            f"Built view '{projection.name}' with {self.node_count()} nodes"
        )

    @property
    def name(self) -> str:
        return self.projection.name

    def nodes(self) -> List[ViewNode]:
        return list(self.root.iter_nodes())

    def node_count(self) -> int:
        return sum(1 for _ in self.root.iter_nodes())

    def primitive_count(self) -> int:
        """Number of nodes that have been drawn at least once."""
        return sum(1 for node in self.root.iter_nodes() if node.primitive is not None)

    def propagate(self, skeleton: Joint) -> None:
        """Render the skeleton's latest propagation into this view."""
        self.root.propagate(skeleton)

    def rebuild(self, skeleton: Joint) -> None:
        """
        Rebuild the mirror after the skeleton topology changed.

        Nodes whose joint path (names from the root) and shape survive keep
        their primitive, so they are updated in place on the next
        propagation. Each old primitive is claimed at most once; unclaimed
        primitives are removed from the surface.
        """
        kept: Dict[str, List[Tuple[Shape, Any]]] = {}
        for path, node in self.root.iter_paths():
            if node.primitive is not None:
                kept.setdefault(path, []).append((node.shape, node.primitive))
        self.root = build_view_tree(skeleton, self.projection, self.surface)

        reused = 0
        for path, node in self.root.iter_paths():
            candidates = kept.get(path, [])
            for i, (shape, primitive) in enumerate(candidates):
                if shape == node.shape:
                    node.primitive = primitive
                    del candidates[i]
                    reused += 1
                    break

        removed = 0
        for candidates in kept.values():
            for _, primitive in candidates:
                self.surface.remove(primitive)
                removed += 1
        view_log.info(
            f"Rebuilt view '{self.name}': {self.node_count()} nodes, "
            f"{reused} primitives reused, {removed} removed"
        )
