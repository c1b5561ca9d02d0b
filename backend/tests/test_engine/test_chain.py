"""Tests for TransformChain composition and the end-to-end apply."""

from __future__ import annotations

import pytest

from rasterturn.engine.chain import TransformChain
from rasterturn.engine.matrix import AffineMatrix
from rasterturn.engine.operations import ReflectHorizontal, RotateQuarterTurns, Translate
from rasterturn.engine.pixels import PixelBuffer
from rasterturn.engine.renderer import RenderStrategy
from rasterturn.utils.ascii_grid import parse_ascii, render_ascii
from tests.conftest import BASIC_ROTATED_ROWS, BASIC_ROWS

STRATEGIES = [RenderStrategy.FORWARD_REMAP, RenderStrategy.INVERSE_SAMPLED]


class TestComposition:
    def test_empty_chain_is_identity(self):
        assert TransformChain().compose(10, 5).is_identity

    def test_append_preserves_order(self):
        chain = TransformChain()
        chain.append(Translate(1, 0)).append(ReflectHorizontal())
        assert chain.operations == (Translate(1, 0), ReflectHorizontal())
        assert list(chain) == [Translate(1, 0), ReflectHorizontal()]
        assert len(chain) == 2

    def test_append_rejects_non_operations(self):
        with pytest.raises(TypeError):
            TransformChain().append(AffineMatrix.identity())  # type: ignore[arg-type]

    def test_left_to_right_fold(self):
        # (2, 0) -> translate -> (3, 0) -> reflect about x=10 -> (7, 0)
        m = TransformChain().translate(1, 0).reflect_horizontal().compose(10, 5)
        assert m.apply(2, 0) == (7.0, 0.0)
        # Reverse order is observably different
        m2 = TransformChain().reflect_horizontal().translate(1, 0).compose(10, 5)
        assert m2.apply(2, 0) == (9.0, 0.0)

    def test_composed_equals_sequential_application(self):
        ops = [Translate(1.5, -2), RotateQuarterTurns(1), ReflectHorizontal(), Translate(0, 3)]
        chain = TransformChain()
        for op in ops:
            chain.append(op)
        m = chain.compose(10, 5)

        x, y = 3.25, 1.75
        for op in ops:
            x, y = op.matrix_for(10, 5).apply(x, y)
        mx, my = m.apply(3.25, 1.75)
        assert mx == pytest.approx(x)
        assert my == pytest.approx(y)

    @pytest.mark.parametrize("reflect", ["reflect_horizontal", "reflect_vertical"])
    def test_reflection_is_involution(self, reflect):
        chain = TransformChain()
        getattr(chain, reflect)()
        getattr(chain, reflect)()
        assert chain.compose(10, 5).is_identity

    def test_half_turn_equals_both_reflections(self):
        rotated = TransformChain().rotate(2).compose(10, 5)
        reflected = TransformChain().reflect_vertical().reflect_horizontal().compose(10, 5)
        assert rotated == reflected

    def test_later_ops_see_swapped_canvas(self):
        chain = TransformChain().rotate(1, expand_canvas=True).rotate(3, expand_canvas=True)
        assert chain.output_size(10, 5) == (10, 5)
        assert chain.compose(10, 5).is_identity

    def test_output_size_swaps_once_per_expanding_odd_turn(self):
        assert TransformChain().rotate(1, expand_canvas=True).output_size(10, 5) == (5, 10)
        assert TransformChain().rotate(1).output_size(10, 5) == (10, 5)
        chain = TransformChain().rotate(1, True).translate(1, 1).rotate(1, True)
        assert chain.output_size(10, 5) == (10, 5)


class TestApply:
    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_identity(self, basic_image, strategy):
        result = TransformChain().apply(basic_image, strategy)
        assert result == basic_image
        assert result is not basic_image

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_source_is_untouched(self, basic_image, strategy):
        before = basic_image.copy()
        TransformChain().rotate(1, True).apply(basic_image, strategy)
        assert basic_image == before

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_reflect_vertical(self, basic_image, strategy):
        result = TransformChain().reflect_vertical().apply(basic_image, strategy)
        assert render_ascii(result) == [
            "..........",
            "...RGGBB..",
            "...R..B...",
            "..RRGGB...",
            "..........",
        ]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_reflect_horizontal(self, basic_image, strategy):
        result = TransformChain().reflect_horizontal().apply(basic_image, strategy)
        assert render_ascii(result) == [row[::-1] for row in BASIC_ROWS]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    @pytest.mark.parametrize("turns", [4, 8, -4])
    @pytest.mark.parametrize("expand", [False, True])
    def test_full_rotation(self, basic_image, strategy, turns, expand):
        result = TransformChain().rotate(turns, expand).apply(basic_image, strategy)
        assert result == basic_image

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_rotate_quarter_turn_expanded(self, basic_image, strategy):
        result = TransformChain().rotate(1, expand_canvas=True).apply(basic_image, strategy)
        assert result.size == (5, 10)
        assert render_ascii(result) == BASIC_ROTATED_ROWS

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_rotate_three_turns_undoes_one(self, strategy):
        rotated = parse_ascii(BASIC_ROTATED_ROWS)
        result = TransformChain().rotate(3, expand_canvas=True).apply(rotated, strategy)
        assert render_ascii(result) == BASIC_ROWS

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_half_turn_equals_both_reflections(self, gradient_image, strategy):
        rotated = TransformChain().rotate(2, True).apply(gradient_image, strategy)
        reflected = TransformChain().reflect_vertical().reflect_horizontal().apply(gradient_image, strategy)
        assert rotated == reflected

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_dimension_swap(self, gradient_image, strategy):
        result = TransformChain().rotate(1, expand_canvas=True).apply(gradient_image, strategy)
        assert result.size == (gradient_image.height, gradient_image.width)
        # Top-right source pixel moves to the top-left after a CCW turn
        assert result.get_pixel(0, 0) == gradient_image.get_pixel(gradient_image.width - 1, 0)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_translate_then_inverse_translate(self, basic_image, strategy):
        result = TransformChain().translate(2, 1).translate(-2, -1).apply(basic_image, strategy)
        # Every coloured pixel stays in bounds throughout the round trip
        assert result == basic_image

    def test_translate_drops_pixels_leaving_canvas(self, basic_image):
        result = TransformChain().translate(4, 0).apply(basic_image, RenderStrategy.FORWARD_REMAP)
        assert render_ascii(result) == [
            "..........",
            "......RRGG",
            ".......R..",
            ".......RGG",
            "..........",
        ]

    def test_strategy_is_required_and_validated(self, basic_image):
        with pytest.raises(ValueError):
            TransformChain().apply(basic_image, "nearest")

    def test_strategy_accepts_plain_strings(self, basic_image):
        assert TransformChain().apply(basic_image, "forward") == basic_image

    def test_empty_source(self):
        empty = PixelBuffer(0, 0)
        for strategy in STRATEGIES:
            assert TransformChain().rotate(1, True).apply(empty, strategy).size == (0, 0)
