from __future__ import annotations
import html
from PySide6.QtWidgets import QDialog, QVBoxLayout, QFormLayout, QLabel, QDialogButtonBox
from PySide6.QtCore import Qt
from typing import Dict

DETAIL_FIELDS = (
    ("username", "Username"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("website", "Website"),
    ("company", "Company"),
    ("address", "Address"),
)


def website_link(value: str) -> str:
    """Lien cliquable; la valeur vient du serveur, donc échappée."""
    v = html.escape(value, quote=True)
    return f'<a href="http://{v}">{v}</a>'


class ClientViewDialog(QDialog):
    def __init__(self, detail: Dict[str, str], parent=None):
        super().__init__(parent)
        self.setWindowTitle(detail.get("title", "Client"))
        self.setModal(True)

        form = QFormLayout()
        for key, label in DETAIL_FIELDS:
            value = detail.get(key, "")
            lbl = QLabel()
            if key == "website" and value:
                lbl.setTextFormat(Qt.TextFormat.RichText)
                lbl.setText(website_link(value))
                lbl.setOpenExternalLinks(True)
                lbl.setTextInteractionFlags(Qt.TextInteractionFlag.TextBrowserInteraction)
            else:
                lbl.setTextFormat(Qt.TextFormat.PlainText)
                lbl.setText(value)
                lbl.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            form.addRow(f"{label} :", lbl)

        btns = QDialogButtonBox(QDialogButtonBox.Close)
        btns.rejected.connect(self.reject)

        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(btns)
