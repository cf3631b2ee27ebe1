import pytest

from minitask.config import reset_settings
from minitask.logs import setup_logging


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings and logging."""
    for name in ('MINITASK_LOG_LEVEL', 'MINITASK_DEBUG', 'MINITASK_LOG_FILE', 'MINITASK_DATE_FORMAT'):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
    setup_logging()
