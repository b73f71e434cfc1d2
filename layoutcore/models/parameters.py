"""Detection and placement parameters."""

from __future__ import annotations
from pydantic import BaseModel


class DetectionParams(BaseModel):
    """Tolerances for wall detection and door interaction (canvas pixels)."""
    angle_tolerance: float = 0.1        # Radians; parallel if angles differ by less
    collinear_tolerance: float = 5.0    # Max distance between the two wall lines
    min_overlap: float = 10.0           # Shorter overlaps are corner contacts, not walls
    door_width: float = 40.0            # Default width of a newly placed door
    drag_threshold: float = 5.0         # Pointer travel before a press becomes a drag


class PolicyConfig(BaseModel):
    """Controls which connection rules are applied."""
    enabled_rules: list[str] = []        # Empty = use all registered defaults
    disabled_rules: list[str] = []       # Explicitly disable specific rules
