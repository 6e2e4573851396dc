"""Unit tests for the shared loguru setup."""

import inspect

import pytest
from loguru import logger

from texdoc.utils.logger import setup_logger


@pytest.mark.unit
def test_level_colors_default_not_shared():
    assert inspect.signature(setup_logger).parameters["level_colors"].default is None


@pytest.mark.unit
def test_level_colors_override(tmp_path):
    setup_logger("render", level_colors={"INFO": "<cyan>"})
    assert logger.level("INFO").color == "<cyan>"

    log_file = setup_logger("render", log_dir=tmp_path)
    assert log_file == tmp_path / "render.log"
    assert logger.level("WARNING").color == "<yellow>"
    logger.level("INFO", color="<bold>")
