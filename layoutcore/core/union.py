"""Rectangle union — outline of a group of axis-aligned rectangles.

Every rectangle side is cut at all grid coordinates so that sides of
neighbouring rectangles line up piece for piece. A piece covered by two
rectangles lies inside the union and cancels; a piece seen an odd number
of times is on the outer boundary. The surviving pieces are chained into
a loop and straight-through vertices are removed, which keeps L, T and U
forms instead of collapsing them to a bounding box.

Assumes the rectangles tile the region without overlapping each other.
"""

from __future__ import annotations
from collections import Counter, defaultdict
from typing import Iterable, Sequence

from loguru import logger

from layoutcore.exceptions import GeometryError
from layoutcore.models import Point2D, Rectangle, Shape


EPS = 1e-9

Vertex = tuple[float, float]
EdgeKey = tuple[str, float, float, float, float]   # (dir, x1, y1, x2, y2), x1<=x2, y1<=y2


def merge_rectangles(rects: Sequence[Rectangle]) -> list[Point2D]:
    """Merge rectangles into one outline polygon.

    The loop starts at the top-most, then left-most vertex and runs
    clockwise on screen, the same order a single rectangle's corners use.
    """
    if not rects:
        return []
    for r in rects:
        if r.min_x > r.max_x or r.min_y > r.max_y:
            raise GeometryError(
                "Rectangle extents are inverted",
                {"rectangle": f"{r.min_x},{r.min_y} - {r.max_x},{r.max_y}"},
            )
    if len(rects) == 1:
        return rects[0].corners()

    boundary = _boundary_edges(rects)
    if not boundary:
        logger.warning("Union of {} rectangles has no boundary", len(rects))
        return []

    loop, leftover = _chain_edges(boundary)
    if leftover:
        logger.warning(
            "Rectangles form more than one region; {} boundary edges were not part of the outline",
            leftover,
        )

    outline = _normalize_winding(_drop_collinear(loop))
    logger.debug("Merged {} rectangles into {} vertices", len(rects), len(outline))
    return [Point2D(x=x, y=y) for x, y in outline]


def merge_shapes(shapes: Iterable[Shape]) -> list[Point2D]:
    """Merge the bounding boxes of shapes."""
    return merge_rectangles([Rectangle.from_shape(s) for s in shapes])


def _boundary_edges(rects: Sequence[Rectangle]) -> list[EdgeKey]:
    xs = sorted({c for r in rects for c in (r.min_x, r.max_x)})
    ys = sorted({c for r in rects for c in (r.min_y, r.max_y)})

    counts: Counter[EdgeKey] = Counter()
    for r in rects:
        for x1, x2 in zip(xs, xs[1:]):
            if x1 >= r.min_x and x2 <= r.max_x:
                counts[("h", x1, r.min_y, x2, r.min_y)] += 1
                counts[("h", x1, r.max_y, x2, r.max_y)] += 1
        for y1, y2 in zip(ys, ys[1:]):
            if y1 >= r.min_y and y2 <= r.max_y:
                counts[("v", r.min_x, y1, r.min_x, y2)] += 1
                counts[("v", r.max_x, y1, r.max_x, y2)] += 1

    return [edge for edge, count in counts.items() if count % 2 == 1]


def _chain_edges(edges: list[EdgeKey]) -> tuple[list[Vertex], int]:
    """Walk edges end to end from the first one until the loop closes.

    Returns the loop (without repeating the start) and the number of
    edges that were never reached.
    """
    incident: dict[Vertex, list[int]] = defaultdict(list)
    for i, (_, x1, y1, x2, y2) in enumerate(edges):
        incident[(x1, y1)].append(i)
        incident[(x2, y2)].append(i)

    _, x1, y1, x2, y2 = edges[0]
    start: Vertex = (x1, y1)
    loop: list[Vertex] = [start, (x2, y2)]
    used = {0}

    while len(used) < len(edges):
        last = loop[-1]
        next_index = next((i for i in incident[last] if i not in used), None)
        if next_index is None:
            break
        used.add(next_index)
        _, ax, ay, bx, by = edges[next_index]
        loop.append((bx, by) if (ax, ay) == last else (ax, ay))
        if loop[-1] == start:
            break

    if len(loop) > 1 and loop[-1] == start:
        loop.pop()
    return loop, len(edges) - len(used)


def _drop_collinear(loop: list[Vertex]) -> list[Vertex]:
    n = len(loop)
    kept: list[Vertex] = []
    for i in range(n):
        px, py = loop[i - 1]
        cx, cy = loop[i]
        nx, ny = loop[(i + 1) % n]
        vertical = abs(px - cx) < EPS and abs(cx - nx) < EPS
        horizontal = abs(py - cy) < EPS and abs(cy - ny) < EPS
        if not (vertical or horizontal):
            kept.append(loop[i])
    return kept or loop


def _normalize_winding(loop: list[Vertex]) -> list[Vertex]:
    if len(loop) < 3:
        return loop
    if _signed_area(loop) < 0:
        loop = loop[::-1]
    first = min(range(len(loop)), key=lambda i: (loop[i][1], loop[i][0]))
    return loop[first:] + loop[:first]


def _signed_area(loop: list[Vertex]) -> float:
    """Shoelace area; positive for clockwise-on-screen loops (y down)."""
    total = 0.0
    n = len(loop)
    for i in range(n):
        x1, y1 = loop[i]
        x2, y2 = loop[(i + 1) % n]
        total += x1 * y2 - x2 * y1
    return total / 2
