# Minimal conftest providing a fallback 'qtbot' fixture if pytest-qt is not installed,
# plus isolation of the module-level i18n locale between tests.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv)  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        bot = Bot()
        bot.app = app
        return bot


@pytest.fixture(autouse=True)
def _reset_locale():
    from pagedview import i18n

    i18n.set_locale("en")
    yield
    i18n.set_locale("en")
