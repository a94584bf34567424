from __future__ import annotations

import pytest

from src.C_pipeline.controls import CHANGING_MODE_TEXT, LiveControls
from src.core.types import SubjectMode
from src.D_visualization.creature_renderers import default_registry


@pytest.fixture
def controls(lifecycle) -> LiveControls:
    return LiveControls(lifecycle, default_registry(), creature="blob")


def test_debug_toggle_updates_button_text(controls) -> None:
    assert controls.debug_button_text == "Enable Debug Mode"
    assert controls.toggle_debug() is True
    assert controls.debug_button_text == "Disable Debug Mode"
    assert controls.snapshot().debug_mode is True


def test_change_creature_cycles(controls) -> None:
    assert [controls.next_creature() for _ in range(3)] == ["ghost", "bug", "blob"]


def test_unknown_initial_creature_is_rejected(lifecycle) -> None:
    with pytest.raises(KeyError):
        LiveControls(lifecycle, default_registry(), creature="dragon")


def test_mode_button_reflects_transition(controls, lifecycle, executor) -> None:
    assert controls.mode_button_text == "Multiple People Mode"

    controls.set_mode(SubjectMode.SINGLE)
    assert controls.transitioning
    assert controls.mode_button_text == CHANGING_MODE_TEXT
    assert controls.status_text == CHANGING_MODE_TEXT

    executor.run_all()
    lifecycle.poll()
    assert controls.mode_button_text == "Multiple People Mode"
    assert controls.status_text == "Single Person Mode"


def test_toggle_mode_is_ignored_while_changing(controls, lifecycle, executor, factory) -> None:
    controls.set_mode(SubjectMode.SINGLE)

    assert controls.toggle_mode() is False
    assert controls.mode is SubjectMode.SINGLE

    executor.run_all()
    lifecycle.poll()
    assert controls.toggle_mode() is True
    assert controls.mode is SubjectMode.MULTI
    assert controls.mode_button_text == CHANGING_MODE_TEXT


def test_status_shows_construction_error(controls, lifecycle, executor, factory) -> None:
    factory.fail_modes = {SubjectMode.MULTI}

    controls.set_mode("multi")
    executor.run_all()
    lifecycle.poll()

    assert "cannot build multi" in controls.status_text
    assert not controls.transitioning
    assert controls.retry() is True
