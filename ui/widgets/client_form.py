from __future__ import annotations
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QLabel, QDialogButtonBox, QApplication
)
from PySide6.QtCore import Qt
from typing import Dict

from core.models.client import ClientDraft
from ui.directory_controller import ClientDirectoryController, FormSession

ERROR_STYLE = "color: #dc2626; font-size: 11px;"


class ClientForm(QDialog):
    """Modale d'ajout/édition. Reste ouverte tant que l'enregistrement échoue."""

    FIELDS = ("name", "email", "phone", "company")

    def __init__(self, controller: ClientDirectoryController, session: FormSession, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.session = session
        self.setWindowTitle(session.title)
        self.setModal(True)

        self.ed_name = QLineEdit()
        self.ed_email = QLineEdit()
        self.ed_phone = QLineEdit()
        self.ed_company = QLineEdit()
        self._editors: Dict[str, QLineEdit] = {
            "name": self.ed_name,
            "email": self.ed_email,
            "phone": self.ed_phone,
            "company": self.ed_company,
        }
        self._error_labels: Dict[str, QLabel] = {}

        form = QFormLayout()
        for key, label in (("name", "Name"), ("email", "Email"), ("phone", "Phone"), ("company", "Company Name")):
            err = QLabel()
            err.setStyleSheet(ERROR_STYLE)
            err.hide()
            self._error_labels[key] = err
            form.addRow(label, self._editors[key])
            form.addRow("", err)

        self.lbl_form_error = QLabel()
        self.lbl_form_error.setStyleSheet(ERROR_STYLE)
        self.lbl_form_error.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_form_error.hide()

        self.btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self.btn_save = self.btns.button(QDialogButtonBox.Save)
        self.btn_save.setText(session.submit_label)
        self.btns.accepted.connect(self._submit)
        self.btns.rejected.connect(self.reject)

        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(self.lbl_form_error)
        lay.addWidget(self.btns)

        self._fill_from_draft(session.draft)

    def _fill_from_draft(self, d: ClientDraft):
        self.ed_name.setText(d.name)
        self.ed_email.setText(d.email)
        self.ed_phone.setText(d.phone)
        self.ed_company.setText(d.company)

    def _read_draft(self) -> ClientDraft:
        return ClientDraft(
            name=self.ed_name.text(),
            email=self.ed_email.text(),
            phone=self.ed_phone.text(),
            company=self.ed_company.text(),
        )

    def _set_saving(self, saving: bool):
        self.session.is_saving = saving
        self.btns.setEnabled(not saving)
        self.btn_save.setText(self.session.submit_label)

    def _show_errors(self):
        for key, lbl in self._error_labels.items():
            msg = self.session.errors.get(key)
            lbl.setText(msg or "")
            lbl.setVisible(bool(msg))
        if self.session.form_error:
            self.lbl_form_error.setText(self.session.form_error)
            self.lbl_form_error.show()
        else:
            self.lbl_form_error.hide()
        for key in self.FIELDS:
            if key in self.session.errors:
                self._editors[key].setFocus(Qt.FocusReason.OtherFocusReason)
                break

    def _submit(self):
        self.session.draft = self._read_draft()
        self._set_saving(True)
        # la requête est synchrone: on laisse Qt repeindre le bouton avant
        QApplication.processEvents()
        ok = self.controller.submit_form(self.session)
        self._set_saving(False)
        if ok:
            self.accept()
            return
        self._show_errors()
