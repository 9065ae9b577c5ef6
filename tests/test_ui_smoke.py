"""
UI smoke tests.
Qt rendering needs a display, so these only check that the widgets import.
"""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6.QtWidgets")


def test_main_window_import():
    from ui.main_window import MainWindow
    assert MainWindow is not None


def test_dialogs_import():
    from ui.widgets.client_form import ClientForm
    from ui.widgets.client_view_dialog import ClientViewDialog
    assert ClientForm.FIELDS == ("name", "email", "phone", "company")
    assert ClientViewDialog is not None


def test_website_link_is_escaped():
    from ui.widgets.client_view_dialog import website_link
    link = website_link('evil.org"><img src=x onerror=alert(1)>')
    assert "<img" not in link
    assert link.startswith('<a href="http://evil.org&quot;&gt;&lt;img')
