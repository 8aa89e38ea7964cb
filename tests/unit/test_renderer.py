"""Unit tests for SpaceRenderer."""

import pytest

from spacecore.constants import TITLE
from spacecore.data_models import Body, Viewport, World
from spacecore.renderer import SpaceRenderer


def _take(term):
    """Flush the terminal and return (and reset) what it wrote."""
    term.flush()
    out = term.stream.getvalue()
    term.stream.seek(0)
    term.stream.truncate(0)
    return out


@pytest.fixture
def earth_world():
    return World.from_bodies([
        Body("E", mass=5.972e24, position=(0.0, 0.0), colour=33, fixed=True),
        Body("m", mass=7.342e22, position=(3.0e8, 0.0), velocity=(0.0, 1022.0), colour=250),
    ], trace_life=6.0)


@pytest.fixture
def renderer(term, earth_world):
    return SpaceRenderer.for_world(term, earth_world)


class TestDrawFrame:
    """Tests for a full frame."""

    def test_viewport_from_terminal_size(self, renderer):
        assert renderer.viewport == Viewport(2, 79, 2, 23)

    def test_border_and_title(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        out = _take(term)
        assert out.startswith("\x1b[2J")
        assert "\x1b[?25l" in out
        assert "\x1b[1;1fl" in out  # top-left corner one cell outside the viewport
        assert "\x1b[24;80fj" in out  # bottom-right corner
        assert f"\x1b[1;34f\x1b[1m{TITLE}\x1b[m" in out  # bold title

    def test_bodies_drawn_in_their_colour(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        out = _take(term)
        col, row = renderer.projector.world_to_screen((0.0, 0.0))
        assert f"\x1b[{row};{col}f\x1b[38;5;33mE" in out
        col, row = renderer.projector.world_to_screen((3.0e8, 0.0))
        assert f"\x1b[{row};{col}f\x1b[38;5;250mm" in out

    def test_default_colour(self, term):
        world = World.from_bodies([Body("*", mass=1.0, position=(1.0e6, 0.0))])
        renderer = SpaceRenderer.for_world(term, world)
        renderer.draw_frame(world, now=0.0)
        assert "\x1b[38;5;226m*" in _take(term)

    def test_bodies_register_trails(self, renderer, earth_world):
        renderer.draw_frame(earth_world, now=5.0)
        cells = {(c.col, c.row): c.seen for c, _ in renderer.trails.live(5.0)}
        assert cells == {
            renderer.projector.world_to_screen((0.0, 0.0)): 5.0,
            renderer.projector.world_to_screen((3.0e8, 0.0)): 5.0,
        }

    def test_trail_drawn_before_body(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        _take(term)
        renderer.draw_frame(earth_world, now=1.0)
        out = _take(term)

        col, row = renderer.projector.world_to_screen((0.0, 0.0))
        dot = f"\x1b[{row};{col}f\x1b[38;5;251m·"
        glyph = f"\x1b[{row};{col}f\x1b[38;5;33mE"
        assert dot in out
        assert out.index(dot) < out.index(glyph)

    def test_expired_trail_not_drawn(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        earth_world.bodies[1].position = (0.0, 1.0e8)
        _take(term)

        renderer.draw_frame(earth_world, now=6.0)
        out = _take(term)

        old_col, old_row = renderer.projector.world_to_screen((3.0e8, 0.0))
        assert f"\x1b[{old_row};{old_col}f" not in out
        assert (old_col, old_row) not in renderer.trails

    def test_clipped_body_is_skipped(self, renderer, earth_world, term):
        earth_world.bodies[1].position = (1.0e12, 0.0)
        renderer.draw_frame(earth_world, now=0.0)
        out = _take(term)
        assert "\x1b[38;5;250m" not in out
        assert len(renderer.trails) == 1

    def test_non_finite_body_is_skipped(self, renderer, earth_world, term):
        earth_world.bodies[1].position = (float("inf"), float("nan"))
        renderer.draw_frame(earth_world, now=0.0)
        out = _take(term)
        assert "\x1b[38;5;250m" not in out
        assert "\x1b[38;5;33mE" in out
        assert len(renderer.trails) == 1

    def test_extent_not_recomputed(self, renderer, earth_world):
        extent = earth_world.extent
        earth_world.bodies[1].position = (9.0e8, 0.0)
        renderer.draw_frame(earth_world, now=0.0)
        assert earth_world.extent == extent
        assert renderer.projector.extent == extent


class TestIncremental:
    """Tests for erase_frame() + draw_frame(clear=False)."""

    def test_no_screen_clear(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        _take(term)
        renderer.erase_frame(now=1.0)
        renderer.draw_frame(earth_world, now=1.0, clear=False)
        assert "\x1b[2J" not in _take(term)

    def test_erase_blanks_previous_bodies(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        _take(term)
        col, row = renderer.projector.world_to_screen((3.0e8, 0.0))

        renderer.erase_frame(now=1.0)
        assert f"\x1b[{row};{col}f " in _take(term)

    def test_erase_blanks_and_evicts_expired_trails(self, renderer, earth_world, term):
        renderer.draw_frame(earth_world, now=0.0)
        earth_world.bodies[1].position = (0.0, 1.0e8)
        renderer.draw_frame(earth_world, now=3.0, clear=False)
        _take(term)
        old = renderer.projector.world_to_screen((3.0e8, 0.0))

        renderer.erase_frame(now=7.0)
        out = _take(term)

        assert f"\x1b[{old[1]};{old[0]}f " in out
        assert old not in renderer.trails
        # the cells refreshed at t=3 are still alive
        assert renderer.projector.world_to_screen((0.0, 1.0e8)) in renderer.trails


class TestSetViewport:
    """Tests for viewport changes."""

    def test_set_viewport_rederives_and_drops_trails(self, renderer, earth_world):
        renderer.draw_frame(earth_world, now=0.0)
        assert len(renderer.trails) == 2

        renderer.set_viewport(Viewport.for_terminal(120, 40))

        assert len(renderer.trails) == 0
        assert renderer.projector.width == 117

    def test_too_small_viewport_keeps_previous(self, renderer, earth_world):
        renderer.draw_frame(earth_world, now=0.0)
        before = renderer.viewport

        with pytest.raises(ValueError, match="too small"):
            renderer.set_viewport(Viewport.for_terminal(3, 3))

        assert renderer.viewport == before
        assert renderer.projector.viewport == before
        assert len(renderer.trails) == 2
