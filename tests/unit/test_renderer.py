import pytest

from topo_profile.canvas import ProfileContainer, rgb
from topo_profile.models import Itinerary, Leg, Step, parse_elevation
from topo_profile.renderer import (
    GROUND_LINE_COLOR,
    SKY_COLOR,
    SKY_HIGH_COLOR,
    band_color,
    draw,
    render_png,
)


class TestBandColor:
    def test_single_band(self):
        assert band_color(0, 1) == SKY_COLOR

    def test_endpoints(self):
        assert band_color(0, 4) == SKY_COLOR
        assert band_color(3, 4) == SKY_HIGH_COLOR

    def test_interpolates(self):
        assert band_color(1, 3) == rgb(170, 226, 255)


class TestDraw:
    def test_attaches_one_surface(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        assert len(context.container.surfaces) == 1

    def test_redraw_replaces_surface(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        first = context.container.surface
        draw(hilly_itinerary, context)
        assert len(context.container.surfaces) == 1
        assert context.container.surface is not first
        assert first.closed

    def test_surface_size(self, hilly_itinerary, make_context):
        context = make_context(height=220.0)
        draw(hilly_itinerary, context)
        surface = context.container.surface
        assert surface.width == pytest.approx(45 + 850 * 3.2808399 / 5)
        assert surface.height == 220.0

    def test_drawing_calls(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        ax = context.container.surface.ax
        # gutter, 3 flags, 2 band strips, 3 dividers, ground polygon
        assert len(ax.patches) == 10
        # one header gradient per step
        assert len(ax.images) == 3
        # 3 axis labels, street name and distance per step
        assert len(ax.texts) == 9
        assert len(ax.lines) == 1

    def test_labels(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        texts = [t.get_text() for t in context.container.surface.ax.texts]
        assert texts[:3] == ["100'", "200'", "300'"]
        assert "Main St" in texts
        assert "0.3 mi" in texts
        assert "unnamed street" in texts
        assert "164 ft" in texts

    def test_ground_polygon_drops_to_baseline(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        ax = context.container.surface.ax
        polygon = ax.patches[-1]
        xy = polygon.get_xy()
        line_xs = list(ax.lines[0].get_xdata())
        assert tuple(xy[5]) == pytest.approx((line_xs[-1], 200.0))
        assert tuple(xy[6]) == pytest.approx((line_xs[0], 200.0))

    def test_ground_line_style(self, hilly_itinerary, make_context):
        context = make_context()
        draw(hilly_itinerary, context)
        line = context.container.surface.ax.lines[0]
        assert len(line.get_xdata()) == 5
        assert line.get_color() == GROUND_LINE_COLOR

    def test_flat_leg(self, flat_itinerary, make_context):
        context = make_context()
        draw(flat_itinerary, context)
        ax = context.container.surface.ax
        # gutter, 2 flags, one sky fill, 2 dividers, no ground
        assert len(ax.patches) == 6
        assert len(ax.lines) == 0
        assert tuple(ax.patches[3].get_facecolor()) == pytest.approx(SKY_COLOR)

    def test_without_text_support(self, hilly_itinerary, make_context):
        context = make_context(text=False)
        draw(hilly_itinerary, context)
        ax = context.container.surface.ax
        assert len(ax.texts) == 0
        assert len(ax.patches) == 10
        assert len(ax.lines) == 1

    def test_without_canvas_draws_nothing(self, hilly_itinerary, make_context):
        context = make_context(canvas=False)
        draw(hilly_itinerary, context)
        assert context.container.surfaces == []

    def test_without_canvas_keeps_previous_surface(self, hilly_itinerary, make_context):
        container = ProfileContainer()
        draw(hilly_itinerary, make_context(container=container))
        previous = container.surface
        draw(hilly_itinerary, make_context(canvas=False, container=container))
        assert container.surface is previous
        assert not previous.closed

    def test_empty_itinerary(self, make_context):
        context = make_context()
        draw(Itinerary(), context)
        assert context.container.surfaces == []

    def test_selects_leg(self, hilly_steps, make_context):
        itinerary = Itinerary(legs=(
            Leg(steps=(Step(distance=10.0),)),
            Leg(steps=hilly_steps),
        ))
        context = make_context(leg_index=1)
        draw(itinerary, context)
        assert len(context.container.surface.ax.lines) == 1

    def test_leg_index_out_of_range(self, hilly_itinerary, make_context):
        with pytest.raises(IndexError):
            draw(hilly_itinerary, make_context(leg_index=3))

    def test_zero_length_step_samples(self, make_context):
        itinerary = Itinerary(legs=(Leg(steps=(
            Step(distance=0.0, elevation=parse_elevation("0,10,0,10")),
        )),))
        context = make_context()
        draw(itinerary, context)
        assert len(context.container.surfaces) == 1


class TestRenderPng:
    def test_png_bytes(self, hilly_itinerary, make_context):
        png = render_png(hilly_itinerary, make_context())
        assert png.startswith(b"\x89PNG")

    def test_none_without_canvas(self, hilly_itinerary, make_context):
        assert render_png(hilly_itinerary, make_context(canvas=False)) is None

    def test_none_for_empty_itinerary(self, make_context):
        assert render_png(Itinerary(), make_context()) is None
