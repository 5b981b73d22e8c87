"""Placement of hit markers relative to the image shown in the scene."""

from __future__ import annotations

from dataclasses import dataclass

from archerlog.treenode import TreeNode

ZOOM_STEP = 1.15
HIT_NODE = "hit"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies inside the rectangle or on its edge."""
        left, right = sorted((self.left, self.right))
        top, bottom = sorted((self.top, self.bottom))
        return left <= x <= right and top <= y <= bottom


def _require_area(frame: Rect) -> None:
    if frame.width == 0 or frame.height == 0:
        raise ValueError("frame has no area")


def relative_position(x: float, y: float, frame: Rect) -> tuple[float, float]:
    """Position as fractions of the frame's width and height from its top-left corner."""
    _require_area(frame)
    return (x - frame.left) / frame.width, (y - frame.top) / frame.height


def absolute_position(rx: float, ry: float, frame: Rect) -> tuple[float, float]:
    """Scene position of a point given as fractions of the frame's size."""
    return frame.left + rx * frame.width, frame.top + ry * frame.height


def _number(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def existing_hit_positions(image_node: TreeNode) -> list[tuple[TreeNode, float, float]]:
    """Hits recorded under an image, with their relative ``X`` and ``Y``.

    Hits whose coordinates are missing or not numbers are left out.
    """
    positions = []
    for hit in image_node.children(HIT_NODE):
        x = _number(hit.attribute("X"))
        if x is None:
            continue
        y = _number(hit.attribute("Y"))
        if y is None:
            continue
        positions.append((hit, x, y))
    return positions


def zoom_factor(delta: int) -> float:
    """Scale step for a wheel movement: zoom in for non-negative ``delta``, out otherwise."""
    return 1 / ZOOM_STEP if delta < 0 else ZOOM_STEP