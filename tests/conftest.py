import os

import pytest

# Headless Qt for CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def flush(qapp):
    """Run queued render passes (and anything they enqueue)."""
    def _flush():
        for _ in range(3):
            qapp.processEvents()
    return _flush
