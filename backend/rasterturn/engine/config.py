"""Render configuration — numerical guards for the renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    """Tolerances used when mapping pixel centers through a matrix."""

    # |det| at or below this is treated as non-invertible
    determinant_epsilon: float = 1e-12

    # Added before flooring a forward-mapped coordinate so that 2.9999999
    # (float drift of an exact 3.0) lands in cell 3, not 2
    coordinate_epsilon: float = 1e-9


DEFAULT_RENDER_CONFIG = RenderConfig()
