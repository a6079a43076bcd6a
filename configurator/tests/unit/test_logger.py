"""
Unit Tests: Logger setup
"""

import logging
import os
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.utils.logger import setup_logger


def test_setup_creates_log_files(tmp_path):
    log_file = setup_logger(logging.INFO, log_dir=tmp_path)

    logging.getLogger("taiko.test").error("boom")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file == tmp_path / "taiko_configurator.log"
    assert "boom" in log_file.read_text(encoding="utf-8")
    assert "boom" in (tmp_path / "taiko_configurator_errors.log").read_text(encoding="utf-8")


def test_old_logs_removed(tmp_path):
    old_log = tmp_path / "old.log"
    old_log.write_text("stale", encoding="utf-8")
    old_time = time.time() - 60 * 24 * 60 * 60
    os.utime(old_log, (old_time, old_time))

    setup_logger(logging.WARNING, log_dir=tmp_path)

    assert not old_log.exists()
