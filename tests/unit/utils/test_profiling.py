import time

from normal_reference.utils.profiling import track_time


def test_track_time_emits_info(caplog):
    with caplog.at_level("INFO"):
        with track_time("segment", warn_budget=10.0):
            time.sleep(0.01)
    assert any(r.levelname == "INFO" and r.segment == "segment" for r in caplog.records)


def test_track_time_warns_over_budget(caplog):
    with caplog.at_level("INFO"):
        with track_time("slow", warn_budget=0.0):
            pass
    assert any(r.levelname == "WARNING" and "budget" in r.message for r in caplog.records)


def test_track_time_errors_over_error_budget(caplog):
    with track_time("slower", warn_budget=0.0, error_budget=0.0):
        pass
    assert any(r.levelname == "ERROR" for r in caplog.records)


def test_track_time_fills_timing_on_exit():
    with track_time("filled") as timing:
        assert timing.wall_seconds == 0.0
        time.sleep(0.01)
    assert timing.segment == "filled"
    assert timing.wall_seconds > 0.0
    assert timing.as_extra()["segment"] == "filled"
