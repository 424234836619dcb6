import logging

from vectorlab.config import HANDLE_DEPTH_BIAS
from vectorlab.core.render_queue import RenderQueue


def _recorder(log, name):
    return lambda painter: log.append((name, painter))


def test_flush_paints_back_to_front():
    queue = RenderQueue()
    log = []
    queue.submit_draw(1.0, _recorder(log, "near"))
    queue.submit_draw(5.0, _recorder(log, "far"))
    queue.submit_draw(3.0, _recorder(log, "middle"))

    painted = queue.flush("painter")

    assert painted == 3
    assert [name for name, _ in log] == ["far", "middle", "near"]
    assert all(painter == "painter" for _, painter in log)


def test_equal_depths_keep_submission_order():
    queue = RenderQueue()
    log = []
    for name in ("a", "b", "c"):
        queue.submit_draw(2.0, _recorder(log, name))
    queue.flush(None)
    assert [name for name, _ in log] == ["a", "b", "c"]


def test_overlay_paints_after_deeper_and_shallower_geometry():
    queue = RenderQueue()
    log = []
    queue.submit_overlay(10.0, _recorder(log, "handle"))
    queue.submit_draw(-5.0, _recorder(log, "grid"))
    queue.flush(None)
    assert [name for name, _ in log] == ["grid", "handle"]
    assert 10.0 - HANDLE_DEPTH_BIAS < -5.0


def test_flush_empties_the_queue():
    queue = RenderQueue()
    queue.submit_draw(0.0, lambda painter: None)
    assert len(queue) == 1
    queue.flush(None)
    assert len(queue) == 0
    assert queue.flush(None) == 0


def test_failing_command_is_skipped_and_logged(caplog):
    queue = RenderQueue()
    log = []

    def broken(painter):
        raise ValueError("boom")

    queue.submit_draw(3.0, _recorder(log, "first"))
    queue.submit_draw(2.0, broken, label="broken")
    queue.submit_draw(1.0, _recorder(log, "last"))

    with caplog.at_level(logging.ERROR, logger="vectorlab.core.render_queue"):
        painted = queue.flush(None)

    assert painted == 2
    assert [name for name, _ in log] == ["first", "last"]
    assert queue.failures == 1
    assert "broken" in caplog.text


def test_clear_discards_commands():
    queue = RenderQueue()
    queue.submit_draw(0.0, lambda painter: None)
    queue.clear()
    assert queue.sorted_commands() == []
