import pathlib
import sys

import pytest

p = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.insert(0, p) if p not in sys.path else None

from paye.config import get_settings  # noqa: E402

_ENV_KEYS = (
    "REDIS_URL",
    "COUNTER_BACKEND",
    "COUNTER_KEY",
    "COUNTER_CONNECT_TIMEOUT",
    "COUNTER_COMMAND_TIMEOUT",
    "COUNTER_INCREMENT_TIMEOUT",
    "ZERO_INCOME_DEDUCTIONS",
    "DEFAULT_PERIOD",
    "BUILD_VERSION",
    "BUILD_SHA",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
