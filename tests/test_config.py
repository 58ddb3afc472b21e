import logging

import pytest

from claheq import ClaheConfig
from claheq.utils import chunk_ranges, get_logger, run_tasks, setup_logging


def test_defaults():
    cfg = ClaheConfig()
    assert cfg.clip_limit == 40.0
    assert cfg.tile_grid_size == (8, 8)
    assert cfg.residual == "spread"
    assert cfg.workers == 1 and cfg.progress is False


def test_from_dict_ignores_unknown_keys():
    cfg = ClaheConfig.from_dict({"clip_limit": "12", "tiles_vertical": 4, "colour": "rgb"})
    assert cfg.clip_limit == 12.0
    assert cfg.tile_grid_size == (8, 4)
    assert ClaheConfig.from_dict(cfg.to_dict()) == cfg


def test_validation():
    with pytest.raises(ValueError):
        ClaheConfig(residual="keep")
    with pytest.raises(ValueError):
        ClaheConfig(workers=0)


def test_chunk_ranges_cover():
    parts = chunk_ranges(10, 3)
    assert [len(r) for r in parts] == [4, 3, 3]
    assert [i for r in parts for i in r] == list(range(10))
    assert chunk_ranges(2, 8) == [range(0, 1), range(1, 2)]
    assert chunk_ranges(0, 4) == []


def test_run_tasks_propagates_errors():
    seen = []

    def fn(i):
        if i == 3:
            raise KeyError(i)
        seen.append(i)

    with pytest.raises(KeyError):
        run_tasks(fn, range(6), workers=3)


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "claheq.log"
    logger = setup_logging(debug=True, log_file=str(log_file))
    setup_logging(debug=True, log_file=str(log_file))
    streams = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert len(streams) == 1
    get_logger("tiles").debug("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in log_file.read_text()
    setup_logging(debug=False)
    assert get_logger().level == logging.INFO
    assert get_logger("claheq.interp").name == "claheq.interp"


def test_tile_counts_must_be_integral():
    with pytest.raises(ValueError):
        ClaheConfig(tiles_horizontal=2.5)
    with pytest.raises(ValueError):
        ClaheConfig.from_dict({"tiles_vertical": "7.9"})
    assert ClaheConfig(tiles_horizontal=4.0, tiles_vertical="6").tile_grid_size == (4, 6)
