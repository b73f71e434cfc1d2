"""Shape models — the rooms drawn by the user, and rectangles for merging."""

from __future__ import annotations
from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, Field, model_validator

from .geometry import Point2D


class RectangleOutline(BaseModel):
    """Shape drawn as an axis-aligned box from its origin and size."""
    kind: Literal["rectangle"] = "rectangle"


class PolygonOutline(BaseModel):
    """Shape drawn as an explicit loop in shape-local coordinates.

    The last vertex implicitly connects back to the first.
    """
    kind: Literal["polygon"] = "polygon"
    relative_vertices: list[Point2D]


ShapeOutline = Annotated[
    Union[RectangleOutline, PolygonOutline],
    Field(discriminator="kind"),
]


class Shape(BaseModel):
    """A room on the layout canvas.

    `rotation_degrees` is carried for the host's visual transform only;
    wall and adjacency geometry uses the unrotated coordinates.
    """
    id: str
    origin: Point2D
    width: float
    height: float
    rotation_degrees: float = 0.0
    outline: ShapeOutline = Field(default_factory=RectangleOutline)

    @model_validator(mode="before")
    @classmethod
    def _accept_relative_vertices(cls, data: Any) -> Any:
        # Hosts may send the polygon loop directly instead of a tagged outline
        if isinstance(data, dict) and "relative_vertices" in data:
            data = dict(data)
            vertices = data.pop("relative_vertices")
            if vertices is not None and "outline" not in data:
                data["outline"] = {"kind": "polygon", "relative_vertices": vertices}
        return data

    @classmethod
    def rectangle(cls, id: str, x: float, y: float, width: float, height: float) -> Shape:
        return cls(id=id, origin=Point2D(x=x, y=y), width=width, height=height)

    @property
    def is_polygon(self) -> bool:
        return isinstance(self.outline, PolygonOutline)


class Rectangle(BaseModel):
    """Axis-aligned rectangle given by its extents, input to the union merger."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_shape(cls, shape: Shape) -> Rectangle:
        return cls(
            min_x=shape.origin.x,
            max_x=shape.origin.x + shape.width,
            min_y=shape.origin.y,
            max_y=shape.origin.y + shape.height,
        )

    def corners(self) -> list[Point2D]:
        """Top-left, top-right, bottom-right, bottom-left."""
        return [
            Point2D(x=self.min_x, y=self.min_y),
            Point2D(x=self.max_x, y=self.min_y),
            Point2D(x=self.max_x, y=self.max_y),
            Point2D(x=self.min_x, y=self.max_y),
        ]
