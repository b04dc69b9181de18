import pytest

pygame = pytest.importorskip("pygame")

from conftest import REFERENCE_ROUTE
from gridastar.core.maps import load_map


@pytest.fixture
def viewer(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    from gridastar.app.viewer import Viewer
    v = Viewer(load_map("01_reference"))
    yield v
    pygame.quit()


def step_until_stopped(v, limit=500):
    for _ in range(limit):
        v._do_step()
        if v.state in ("Done", "No path", "Invalid endpoint"):
            return
    raise AssertionError("search did not stop")


def test_animates_reference_map(viewer):
    assert viewer.state == "Idle"
    assert viewer.open_set == {(0, 1)}
    step_until_stopped(viewer)
    assert viewer.state == "Done"
    assert viewer.path == REFERENCE_ROUTE
    assert viewer._last_metrics["path_len"] == 17
    viewer._draw()


def test_switch_to_walled_map(viewer):
    viewer._switch_map("03_walled")
    assert viewer.spec.name == "03_walled"
    step_until_stopped(viewer)
    assert viewer.state == "No path"
    assert viewer.path == []
    viewer._draw()


def test_reset_and_toggle_goal_stop(viewer):
    step_until_stopped(viewer)
    viewer._toggle_eager()
    assert viewer.algo.eager_goal is False
    assert viewer.state == "Idle"
    assert viewer.closed_set == set()
    step_until_stopped(viewer)
    assert viewer.path == REFERENCE_ROUTE


def test_run_toggle_ignored_when_done(viewer):
    viewer._toggle_run()
    assert viewer.running
    viewer._toggle_run()
    assert not viewer.running
    step_until_stopped(viewer)
    viewer._toggle_run()
    assert not viewer.running


def test_resolve_map_name(monkeypatch):
    from gridastar.app.viewer import resolve_map_name
    monkeypatch.delenv("GRIDASTAR_MAP", raising=False)
    assert resolve_map_name([]) == "01_reference"
    assert resolve_map_name(["--map=04_maze"]) == "04_maze"


def click(button):
    button.handle_mouse(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=button.rect.center, button=1))


def button_labelled(viewer, prefix):
    return next(b for b in viewer._buttons if b.label.startswith(prefix))


def test_buttons_follow_viewer_state(viewer):
    run = button_labelled(viewer, "Run")
    assert not run.lit
    click(run)
    assert viewer.running
    assert run.label == "Pause" and run.lit

    goal_stop = button_labelled(viewer, "Goal stop")
    assert goal_stop.label == "Goal stop: eager"
    click(goal_stop)
    assert viewer.eager_goal is False
    assert goal_stop.label == "Goal stop: on pop"
    assert goal_stop.lit

    maps = [b for b in viewer._buttons if b.label.startswith("Map ")]
    assert [b.lit for b in maps] == [True, False, False, False]
    click(maps[2])
    assert viewer.spec.name == "03_walled"
    # map switch rebuilds the panel
    maps = [b for b in viewer._buttons if b.label.startswith("Map ")]
    assert [b.lit for b in maps] == [False, False, True, False]
    viewer._draw()


def test_click_outside_button_is_ignored(viewer):
    step = button_labelled(viewer, "Step Once")
    step.handle_mouse(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(0, 0), button=1))
    assert viewer.closed_set == set()
    click(step)
    assert viewer.closed_set == {(0, 1)}
