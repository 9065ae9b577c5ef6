from __future__ import annotations
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QMessageBox, QTableWidget, QTableWidgetItem, QHeaderView,
    QStackedWidget, QDialog, QApplication
)
from PySide6.QtCore import Qt
from typing import List, Optional

from core.services.client_service import ClientService
from ui.directory_controller import ClientDirectoryController, ClientRow, EMPTY_TABLE_TEXT
from ui.widgets.client_form import ClientForm
from ui.widgets.client_view_dialog import ClientViewDialog

PAGE_LOADING, PAGE_ERROR, PAGE_TABLE = 0, 1, 2
ID_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    def __init__(self, service: Optional[ClientService] = None):
        super().__init__()
        self.setWindowTitle("Client Directory")
        self.resize(1100, 700)

        self.client_service = service or ClientService()
        self.controller = ClientDirectoryController(self.client_service)

        central = QWidget()
        root = QVBoxLayout(central)

        title = QLabel("Client Directory")
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        subtitle = QLabel("Manage client records, view details, and add new contacts.")
        subtitle.setStyleSheet("color: #6b7280;")
        root.addWidget(title)
        root.addWidget(subtitle)

        bar = QHBoxLayout()
        self.ed_search = QLineEdit()
        self.ed_search.setPlaceholderText("Search by name, email or company...")
        self.ed_search.setClearButtonEnabled(True)
        btn_new = QPushButton("Add New Client")
        self.btn_view = QPushButton("View")
        self.btn_edit = QPushButton("Edit")
        self.btn_del = QPushButton("Delete")
        bar.addWidget(self.ed_search, 1)
        bar.addWidget(self.btn_view); bar.addWidget(self.btn_edit); bar.addWidget(self.btn_del)
        bar.addStretch(0); bar.addWidget(btn_new)
        root.addLayout(bar)

        self.stack = QStackedWidget()
        lbl_loading = QLabel("Loading clients...")
        lbl_loading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_error = QLabel()
        self.lbl_error.setTextFormat(Qt.TextFormat.PlainText)
        self.lbl_error.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        self.lbl_error.setWordWrap(True)

        self.tbl_clients = QTableWidget(0, 4)
        self.tbl_clients.setHorizontalHeaderLabels(["Name", "Email", "Phone", "Company"])
        self.tbl_clients.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.tbl_clients.setSelectionBehavior(self.tbl_clients.SelectionBehavior.SelectRows)
        self.tbl_clients.setSelectionMode(self.tbl_clients.SelectionMode.SingleSelection)
        self.tbl_clients.setEditTriggers(self.tbl_clients.EditTrigger.NoEditTriggers)

        self.stack.insertWidget(PAGE_LOADING, lbl_loading)
        self.stack.insertWidget(PAGE_ERROR, self.lbl_error)
        self.stack.insertWidget(PAGE_TABLE, self.tbl_clients)
        root.addWidget(self.stack, 1)

        self.setCentralWidget(central)

        self.ed_search.textChanged.connect(self._on_search)
        btn_new.clicked.connect(self._client_new)
        self.btn_view.clicked.connect(self._client_view)
        self.btn_edit.clicked.connect(self._client_edit)
        self.btn_del.clicked.connect(self._client_delete)
        self.tbl_clients.doubleClicked.connect(lambda _idx: self._client_view())

    # ==================== CHARGEMENT ====================
    def load(self):
        """Chargement initial, une seule fois."""
        self.stack.setCurrentIndex(PAGE_LOADING)
        QApplication.processEvents()
        self.controller.start()
        self._render()

    def _render(self):
        state = self.controller.view_state()
        if state.is_loading:
            self.stack.setCurrentIndex(PAGE_LOADING)
            return
        if state.error:
            self.lbl_error.setText(state.error_text)
            self.stack.setCurrentIndex(PAGE_ERROR)
            return
        self._fill_table(state.rows)
        self.stack.setCurrentIndex(PAGE_TABLE)

    def _fill_table(self, rows: List[ClientRow]):
        self.tbl_clients.clearSpans()
        self.tbl_clients.setRowCount(0)
        if not rows:
            self.tbl_clients.insertRow(0)
            empty = QTableWidgetItem(EMPTY_TABLE_TEXT)
            empty.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
            empty.setFlags(Qt.ItemFlag.NoItemFlags)
            self.tbl_clients.setItem(0, 0, empty)
            self.tbl_clients.setSpan(0, 0, 1, 4)
            return
        for row in rows:
            r = self.tbl_clients.rowCount(); self.tbl_clients.insertRow(r)
            name = row.name + (f"\n@{row.username}" if row.username else "")
            it_name = QTableWidgetItem(name)
            it_name.setData(ID_ROLE, row.id)
            if row.pending_delete:
                it_name.setFlags(it_name.flags() & ~Qt.ItemFlag.ItemIsEnabled)
            self.tbl_clients.setItem(r, 0, it_name)
            self.tbl_clients.setItem(r, 1, QTableWidgetItem(row.email))
            self.tbl_clients.setItem(r, 2, QTableWidgetItem(row.phone))
            self.tbl_clients.setItem(r, 3, QTableWidgetItem(row.company))
        self.tbl_clients.resizeRowsToContents()

    def _on_search(self, text: str):
        self.controller.set_query(text)
        self._render()

    def _selected_client_id(self) -> Optional[int]:
        row = self.tbl_clients.currentRow()
        if row < 0: return None
        item = self.tbl_clients.item(row, 0)
        if item is None: return None
        cid = item.data(ID_ROLE)
        return int(cid) if cid is not None else None

    # ==================== ACTIONS ====================
    def _client_new(self):
        session = self.controller.open_create_form()
        dlg = ClientForm(self.controller, session, self)
        if dlg.exec() == QDialog.Accepted:
            self._render()

    def _client_view(self):
        cid = self._selected_client_id()
        if cid is None:
            QMessageBox.information(self, "Clients", "Select a row first.")
            return
        detail = self.controller.detail(cid)
        if detail is None:
            return
        ClientViewDialog(detail, self).exec()

    def _client_edit(self):
        cid = self._selected_client_id()
        if cid is None:
            QMessageBox.information(self, "Clients", "Select a row first.")
            return
        session = self.controller.open_edit_form(cid)
        if session is None:
            QMessageBox.warning(self, "Clients", "Unable to load this client.")
            return
        dlg = ClientForm(self.controller, session, self)
        if dlg.exec() == QDialog.Accepted:
            self._render()

    def _confirm(self, text: str) -> bool:
        return QMessageBox.question(self, "Delete", text) == QMessageBox.Yes

    def _client_delete(self):
        cid = self._selected_client_id()
        if cid is None:
            QMessageBox.information(self, "Clients", "Select a row first.")
            return

        def show_pending():
            self._render()
            QApplication.processEvents()

        self.controller.request_delete(cid, self._confirm, show_pending)
        self._render()
        if self.controller.last_delete_error:
            QMessageBox.warning(self, "Delete", self.controller.last_delete_error)

    def closeEvent(self, event):
        self.client_service.close()
        super().closeEvent(event)
