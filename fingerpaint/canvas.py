"""
Canvas Module - Stroke Store and Stroke Rendering
=================================================
Holds the committed strokes and draws point sequences as smoothed curves
on top of the video frame.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import cv2
import numpy as np

from fingerpaint.config import CURVE_SAMPLES, ERASE_RADIUS, STROKE_THICKNESS

PointXY = Tuple[float, float]
RGB = Tuple[int, int, int]


@dataclass
class Stroke:
    """
    Represents a single committed stroke.

    Attributes:
        points: Ordered (x, y) points of the stroke
        color: RGB color the stroke was drawn with
    """
    points: List[PointXY] = field(default_factory=list)
    color: RGB = (0, 0, 255)


class StrokeStore:
    """
    Ordered collection of committed strokes.

    Insertion order is render order. A stroke left without points is
    removed, so every stored stroke has at least one point.
    """

    def __init__(self):
        self._strokes: List[Stroke] = []

    def __len__(self) -> int:
        return len(self._strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self._strokes)

    def __getitem__(self, index: int) -> Stroke:
        return self._strokes[index]

    def add(self, points: Sequence[PointXY], color: RGB) -> bool:
        """
        Append a copy of `points` as a new stroke.

        Returns:
            False if there were no points to store
        """
        if not points:
            return False
        self._strokes.append(Stroke(points=list(points), color=color))
        return True

    def erase_near(self, x: float, y: float, radius: float = ERASE_RADIUS) -> int:
        """
        Remove every point closer than `radius` to (x, y).

        Strokes that lose all their points are dropped.

        Returns:
            Number of points removed
        """
        removed = 0
        kept = []
        for stroke in self._strokes:
            remaining = [
                (px, py) for px, py in stroke.points
                if math.hypot(px - x, py - y) >= radius
            ]
            removed += len(stroke.points) - len(remaining)
            if remaining:
                stroke.points = remaining
                kept.append(stroke)
        self._strokes = kept
        return removed

    def clear(self):
        """Remove all strokes."""
        self._strokes.clear()

    def point_count(self) -> int:
        """Total number of points across all strokes."""
        return sum(len(s.points) for s in self._strokes)


def midpoint_vertices(points: Sequence[PointXY]) -> List[PointXY]:
    """
    Midpoints between each interior point and its successor.

    For points p0..pn-1 this yields mid(p1, p2) .. mid(pn-2, pn-1).
    """
    return [
        ((points[i][0] + points[i + 1][0]) / 2.0,
         (points[i][1] + points[i + 1][1]) / 2.0)
        for i in range(1, len(points) - 1)
    ]


def catmull_rom(vertices: Sequence[PointXY], samples: int = CURVE_SAMPLES) -> List[PointXY]:
    """
    Sample a Catmull-Rom spline passing through every vertex.

    The end vertices are duplicated as control points so the curve
    starts and ends on them.
    """
    if len(vertices) < 2:
        return list(vertices)

    ctrl = [vertices[0]] + list(vertices) + [vertices[-1]]
    curve = [vertices[0]]
    for i in range(1, len(ctrl) - 2):
        p0, p1, p2, p3 = ctrl[i - 1], ctrl[i], ctrl[i + 1], ctrl[i + 2]
        for s in range(1, samples + 1):
            t = s / samples
            t2 = t * t
            t3 = t2 * t
            curve.append(tuple(
                0.5 * (2 * p1[k]
                       + (-p0[k] + p2[k]) * t
                       + (2 * p0[k] - 5 * p1[k] + 4 * p2[k] - p3[k]) * t2
                       + (-p0[k] + 3 * p1[k] - 3 * p2[k] + p3[k]) * t3)
                for k in (0, 1)
            ))
    return curve


def smooth_path(points: Sequence[PointXY]) -> List[PointXY]:
    """
    Polyline to draw for a point sequence.

    Fewer than 2 points draw nothing. Sequences too short to give two
    midpoint vertices (2 or 3 points) are drawn through their raw points,
    where a pure midpoint curve would draw nothing.
    """
    if len(points) < 2:
        return []
    vertices = midpoint_vertices(points)
    if len(vertices) < 2:
        return list(points)
    return catmull_rom(vertices)


def draw_stroke(
    frame: np.ndarray,
    points: Sequence[PointXY],
    color: RGB,
    thickness: int = STROKE_THICKNESS
) -> np.ndarray:
    """
    Draw a smoothed point sequence onto a BGR frame.

    Args:
        frame: Image to draw on (modified in place)
        points: Raw stroke points
        color: RGB stroke color
        thickness: Line thickness

    Returns:
        The frame
    """
    path = smooth_path(points)
    if not path:
        return frame

    pts = np.array([[int(round(x)), int(round(y))] for x, y in path], dtype=np.int32)
    r, g, b = color
    cv2.polylines(frame, [pts], False, (b, g, r), thickness, cv2.LINE_AA)
    return frame


def draw_strokes(frame: np.ndarray, store: StrokeStore,
                 thickness: int = STROKE_THICKNESS) -> np.ndarray:
    """Draw every stored stroke in insertion order."""
    for stroke in store:
        draw_stroke(frame, stroke.points, stroke.color, thickness)
    return frame
