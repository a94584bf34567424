from __future__ import annotations

from src import config
from src.C_pipeline.pipeline import build_live_pipeline
from src.core.types import SubjectMode


def test_pipeline_start_requests_configured_mode(executor, factory, surface, tick_source, frame_source, make_pose) -> None:
    cfg = config.load_default()
    cfg.pose.mode = "multi"
    cfg.render.creature = "ghost"
    factory.poses = [make_pose({"left_eye": (100, 100), "right_eye": (140, 100)})]

    pipeline = build_live_pipeline(
        cfg,
        surface=surface,
        tick_source=tick_source,
        frame_source=frame_source,
        factory=factory,
        executor=executor,
    )
    pipeline.start()

    assert pipeline.scheduler.running
    assert pipeline.controls.creature == "ghost"
    executor.run_all()
    tick_source.fire()
    assert pipeline.lifecycle.handle.mode is SubjectMode.MULTI
    assert pipeline.scheduler.stats.submitted == 1

    pipeline.close()
    executor.run_all()

    assert not pipeline.scheduler.running
    assert frame_source.closed
    assert factory.built[0].closed
    assert tick_source.pending == 0
