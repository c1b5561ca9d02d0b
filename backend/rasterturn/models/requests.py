"""API request models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from rasterturn.engine.operations import (
    Operation,
    ReflectHorizontal,
    ReflectVertical,
    RotateQuarterTurns,
    Translate,
)
from rasterturn.engine.renderer import RenderStrategy


class TranslateSpec(BaseModel):
    op: Literal["translate"]
    dx: float = Field(0.0, allow_inf_nan=False)
    dy: float = Field(0.0, allow_inf_nan=False)

    def to_operation(self) -> Operation:
        return Translate(self.dx, self.dy)


class ReflectHorizontalSpec(BaseModel):
    op: Literal["reflect_horizontal"]

    def to_operation(self) -> Operation:
        return ReflectHorizontal()


class ReflectVerticalSpec(BaseModel):
    op: Literal["reflect_vertical"]

    def to_operation(self) -> Operation:
        return ReflectVertical()


class RotateSpec(BaseModel):
    op: Literal["rotate"]
    turns: int = Field(1, description="Quarter turns, counter-clockwise as displayed")
    expand_canvas: bool = Field(False, description="Swap width/height on odd turns")

    def to_operation(self) -> Operation:
        return RotateQuarterTurns(self.turns, self.expand_canvas)


OperationSpec = Annotated[
    Union[TranslateSpec, ReflectHorizontalSpec, ReflectVerticalSpec, RotateSpec],
    Field(discriminator="op"),
]


class TransformRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded source image (PNG, GIF, JPEG, ...)")
    operations: list[OperationSpec] = Field(
        default_factory=list,
        description="Operations in application order",
    )
    strategy: RenderStrategy = Field(..., description="'forward' remap or 'inverse' bilinear sampling")
    preview: bool = Field(False, description="Include an ASCII preview of the result")
