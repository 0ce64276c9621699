import random

import pytest

from gridpath.app.session import Session
from gridpath.core.grid import Grid
from gridpath.core.maps import from_rows


def drive(session, t=0.0, dt=1.0, limit=1000):
    """Tick until the session unlocks; returns the final clock."""
    for _ in range(limit):
        if not session.busy:
            return t
        t += dt
        session.tick(t)
    raise AssertionError("session never finished")


@pytest.fixture
def session():
    return Session(Grid.build(5, 5), wave_delay=0.05, path_delay=0.01)


def test_starts_in_start_mode(session):
    assert session.mode == "start"
    assert session.status == "Idle"
    assert not session.can_visualize


def test_loaded_map_with_roles_starts_in_wall_mode():
    s = Session(from_rows(["S.", ".E"]))
    assert s.mode == "wall"


def test_start_click_switches_to_end_mode(session):
    assert session.click(1, 1)
    assert session.grid.start.coord == (1, 1)
    assert session.mode == "end"
    assert session.click(3, 3)
    assert session.grid.end.coord == (3, 3)
    assert session.mode == "end"
    assert session.click(4, 4)
    assert session.grid.end.coord == (4, 4)
    assert not session.grid.cell(3, 3).is_end


def test_choosing_start_mode_clears_roles(session):
    session.click(0, 0)
    session.click(4, 4)
    session.set_mode("start")
    assert session.grid.start is None and session.grid.end is None


def test_end_on_start_cell_keeps_start(session):
    session.click(1, 1)
    assert session.click(1, 1)
    cell = session.grid.cell(1, 1)
    assert session.grid.start is cell and session.grid.end is cell
    assert session.can_visualize
    session.visualize(0.0)
    drive(session)
    assert session.status == "Done"
    assert session.metrics["path_len"] == 0
    assert session.metrics["visited"] == 1
    assert not session.grid.state.shortest_path


def test_end_mode_needs_start(session):
    session.set_mode("end")
    assert session.mode == "start"


def test_unknown_mode(session):
    with pytest.raises(ValueError):
        session.set_mode("diagonal")


def test_wall_only_removed_in_wall_mode(session):
    session.set_mode("wall")
    session.click(2, 2)
    assert session.grid.cell(2, 2).is_wall
    session.set_mode("start")
    assert not session.click(2, 2)
    assert session.grid.cell(2, 2).is_wall
    assert session.grid.start is None
    session.set_mode("wall")
    assert session.click(2, 2)
    assert not session.grid.cell(2, 2).is_wall


def test_wall_click_spares_start(session):
    session.click(0, 0)
    session.set_mode("wall")
    assert not session.click(0, 0)
    assert session.grid.cell(0, 0).is_start


def test_drag_paints_walls(session):
    session.set_mode("wall")
    session.press(0, 1)
    session.enter(1, 1)
    session.enter(1, 1)         # same cell again: no toggle back
    session.enter(2, 1)
    session.release()
    session.enter(3, 1)         # released: ignored
    assert [c.coord for c in session.grid if c.is_wall] == [(0, 1), (1, 1), (2, 1)]


def test_drag_in_start_mode_places_only_once(session):
    session.press(0, 0)
    session.enter(0, 1)
    session.release()
    assert session.grid.start.coord == (0, 0)
    assert session.grid.end is None


def test_edit_clears_visualization(session):
    session.click(0, 0)
    session.click(0, 4)
    session.visualize(0.0)
    drive(session)
    assert session.grid.state.visited
    session.set_mode("wall")
    assert session.grid.state.is_clear()
    assert session.status == "Idle"


def test_full_run_reveals_path(session):
    session.click(0, 0)
    session.click(0, 4)
    assert session.visualize(0.0)
    assert session.busy and session.status == "Running"
    drive(session)
    assert session.status == "Done"
    assert not session.busy
    assert session.grid.state.shortest_path == {(0, 1), (0, 2), (0, 3)}
    assert session.metrics["path_len"] == 4
    assert session.metrics["visited"] == 11
    assert session.metrics["wave"] == 5


def test_waves_paced_by_delay(session):
    session.click(0, 0)
    session.click(0, 4)
    session.visualize(0.0)
    session.tick(0.01)
    assert not session.grid.state.visited
    session.tick(0.06)
    assert session.grid.state.visited == {(0, 0)}
    session.tick(0.08)
    assert session.grid.state.visited == {(0, 0)}
    session.tick(0.12)
    assert session.grid.state.visited == {(0, 0), (0, 1), (1, 0)}


def test_path_revealed_one_cell_per_interval():
    s = Session(from_rows(["S...E"]), wave_delay=0.0, path_delay=1.0)
    s.visualize(0.0)
    t = 0.0
    while s.status == "Running":
        s.tick(t)
    assert s.status == "Path"
    s.tick(t + 1.0)       # start cell: not marked
    s.tick(t + 2.0)
    assert s.grid.state.shortest_path == {(0, 1)}
    s.tick(t + 4.0)
    assert s.grid.state.shortest_path == {(0, 1), (0, 2), (0, 3)}
    s.tick(t + 5.0)
    assert s.status == "Done"
    assert not s.grid.is_shortest_path(s.grid.end)


def test_input_locked_while_busy(session):
    session.click(0, 0)
    session.click(0, 4)
    session.visualize(0.0)
    assert not session.click(2, 2)
    assert not session.set_mode("wall")
    assert not session.clear_all()
    assert not session.random_maze(random.Random(1))
    assert not session.resize(3, 3)
    assert not session.visualize(0.0)
    assert not session.press(2, 2)
    assert not any(c.is_wall for c in session.grid)
    drive(session)
    assert session.click(2, 2)


def test_no_path_unlocks():
    s = Session(from_rows(["S#.", "##E"]), wave_delay=0.0, path_delay=0.0)
    s.visualize(0.0)
    drive(s, dt=0.0)
    assert s.status == "No path"
    assert not s.grid.state.shortest_path
    assert s.metrics["path_len"] == 0


def test_zero_delays_finish():
    s = Session(from_rows(["S#..", "...E"]), wave_delay=0.0, path_delay=0.0)
    s.visualize(0.0)
    drive(s, dt=0.0)
    assert s.status == "Done"
    assert s.metrics["path_len"] == 4


def test_clear_all_keeps_roles(session):
    session.click(0, 0)
    session.click(4, 4)
    session.set_mode("wall")
    session.click(2, 2)
    assert session.clear_all()
    assert not any(c.is_wall for c in session.grid)
    assert session.grid.start and session.grid.end


def test_random_maze_spares_roles(session):
    session.click(0, 0)
    session.click(4, 4)
    session.random_maze(random.Random(3), density=1.0)
    assert sum(c.is_wall for c in session.grid) == 23


def test_resize_drops_roles(session):
    session.click(0, 0)
    session.click(4, 4)
    assert session.resize(3, 7)
    assert (session.grid.rows, session.grid.cols) == (3, 7)
    assert session.grid.start is None
    assert session.mode == "start"


def test_out_of_bounds_click_ignored(session):
    assert not session.click(9, 9)
