"""Shape outline extraction — absolute vertex loops for shapes."""

from __future__ import annotations

from loguru import logger

from layoutcore.models import Point2D, PolygonOutline, RectangleOutline, Shape


def shape_vertices(shape: Shape) -> list[Point2D]:
    """Return the shape's boundary as an ordered loop of absolute points.

    Explicit polygons keep their vertex order, which fixes the edge
    numbering. Everything else is the bounding rectangle, clockwise on
    screen starting at the top-left corner. Rotation is not applied.
    """
    outline = shape.outline
    if isinstance(outline, PolygonOutline):
        if len(outline.relative_vertices) >= 3:
            return [shape.origin + p for p in outline.relative_vertices]
        logger.debug(
            "Shape {} has {} polygon vertices, using its bounding box",
            shape.id, len(outline.relative_vertices),
        )
    elif not isinstance(outline, RectangleOutline):
        raise TypeError(f"Unsupported outline {type(outline).__name__}")

    return _rectangle_vertices(shape)


def _rectangle_vertices(shape: Shape) -> list[Point2D]:
    x, y = shape.origin.x, shape.origin.y
    return [
        Point2D(x=x, y=y),
        Point2D(x=x + shape.width, y=y),
        Point2D(x=x + shape.width, y=y + shape.height),
        Point2D(x=x, y=y + shape.height),
    ]
