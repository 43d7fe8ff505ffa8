from typing import Any, Dict

import pytest


class DummySettings:
    """Dictionary-backed stand-in for QSettings."""

    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}

    def value(self, key: str, default: Any = None):
        return self.data.get(key, default)

    def setValue(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


@pytest.fixture
def qsettings() -> DummySettings:
    return DummySettings()


@pytest.fixture(scope="session")
def qt_app():
    QtCore = pytest.importorskip("PySide6.QtCore")
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app
