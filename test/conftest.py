import logging
from pathlib import Path

import pytest


@pytest.fixture
def support_files() -> Path:
    return Path(__file__).parent / "support_files"


@pytest.fixture(autouse=True)
def clear_build_flag(monkeypatch):
    monkeypatch.delenv("TESTABLEGEN_BUILD_FLAG", raising=False)


@pytest.fixture
def expansion_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="testablegen")
    return caplog
