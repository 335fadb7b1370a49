import json
import logging
from pathlib import Path

import pytest

from keyhunt.core.hunt_logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_keyhunt_logger():
    """Drop handlers installed by setup_logging so they never outlive a test's capture streams."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(rel: str, content: str) -> Path:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p

    return _write


@pytest.fixture
def write_json(write_file):
    def _write(rel: str, data) -> Path:
        return write_file(rel, json.dumps(data, ensure_ascii=False, indent=2))

    return _write
