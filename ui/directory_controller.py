from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from core.errors import RemoteFailure, ValidationFailure
from core.logger import get_logger
from core.models.client import Client, ClientDraft
from core.services.client_service import ClientService

logger = get_logger(__name__)

EMPTY_TABLE_TEXT = "No clients found."
DELETE_CONFIRM_TEXT = "Are you sure you want to delete this client?"
LOAD_ERROR_TITLE = "Failed to load data"


@dataclass
class ClientRow:
    id: int
    name: str
    username: str
    email: str
    phone: str
    company: str
    pending_delete: bool = False


@dataclass
class ViewState:
    is_loading: bool
    error: Optional[str]
    rows: List[ClientRow]

    @property
    def is_empty(self) -> bool:
        return not self.is_loading and self.error is None and not self.rows

    @property
    def error_text(self) -> str:
        return f"{LOAD_ERROR_TITLE}\n{self.error}" if self.error else ""


@dataclass
class FormSession:
    """Etat d'une modale d'ajout/édition; jetée à la fermeture."""
    client_id: Optional[int] = None
    draft: ClientDraft = field(default_factory=ClientDraft)
    errors: Dict[str, str] = field(default_factory=dict)
    form_error: Optional[str] = None
    is_saving: bool = False

    @property
    def is_edit(self) -> bool:
        return self.client_id is not None

    @property
    def title(self) -> str:
        return "Edit Client" if self.is_edit else "Add New Client"

    @property
    def submit_label(self) -> str:
        if self.is_saving:
            return "Updating..." if self.is_edit else "Saving..."
        return "Update Client" if self.is_edit else "Save Client"


def _row_of(c: Client, pending: bool) -> ClientRow:
    phone = c.phone or ""
    return ClientRow(
        id=c.id,
        name=c.name or "",
        username=c.username or "",
        email=c.email or "",
        # le tableau n'affiche pas les extensions ("x123")
        phone=phone.split(" ")[0] if phone else "",
        company=c.company_name,
        pending_delete=pending,
    )


class ClientDirectoryController:
    """Etat de présentation de l'annuaire, indépendant de Qt."""

    def __init__(self, service: ClientService):
        self.service = service
        self.query = ""
        self.pending_deletes: Set[int] = set()
        self.last_delete_error: Optional[str] = None
        self._started = False

    # ---------------- Chargement / vue ---------------- #

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self.service.load_clients()

    def set_query(self, text: str) -> List[ClientRow]:
        self.query = text or ""
        return self.rows()

    def rows(self) -> List[ClientRow]:
        return [_row_of(c, c.id in self.pending_deletes) for c in self.service.list_clients(self.query)]

    def view_state(self) -> ViewState:
        store = self.service.store
        if store.is_loading:
            return ViewState(True, None, [])
        if store.last_error:
            return ViewState(False, store.last_error, [])
        return ViewState(False, None, self.rows())

    def detail(self, client_id: int) -> Optional[Dict[str, str]]:
        c = self.service.get_by_id(client_id)
        if c is None:
            return None
        return {
            "title": f"Details for {c.name}",
            "username": c.username or "",
            "email": c.email or "",
            "phone": c.phone or "",
            "website": c.website or "",
            "company": c.company_name,
            "address": c.address.one_line() if c.address else "",
        }

    # ---------------- Formulaire ---------------- #

    def open_create_form(self) -> FormSession:
        return FormSession()

    def open_edit_form(self, client_id: int) -> Optional[FormSession]:
        c = self.service.get_by_id(client_id)
        if c is None:
            return None
        return FormSession(client_id=c.id, draft=ClientDraft.from_client(c))

    def submit_form(self, session: FormSession) -> bool:
        """True si la modale peut se fermer; sinon la session porte les erreurs."""
        session.errors = {}
        session.form_error = None
        session.is_saving = True
        try:
            if session.is_edit:
                self.service.update_client(session.client_id, session.draft)
            else:
                self.service.create_client(session.draft)
            return True
        except ValidationFailure as exc:
            session.errors = exc.field_errors
            return False
        except (RemoteFailure, KeyError) as exc:
            action = "update" if session.is_edit else "save"
            logger.error("Failed to %s client: %s", action, exc)
            session.form_error = f"Failed to {action} client. Please try again."
            return False
        finally:
            session.is_saving = False

    # ---------------- Suppression ---------------- #

    def request_delete(
        self,
        client_id: int,
        confirm: Callable[[str], bool],
        on_pending: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Demande confirmation puis supprime. True si le client a été retiré."""
        self.last_delete_error = None
        if client_id in self.pending_deletes:
            return False
        if not confirm(DELETE_CONFIRM_TEXT):
            return False
        self.pending_deletes.add(client_id)
        if on_pending is not None:
            on_pending()
        try:
            self.service.delete_client(client_id)
            return True
        except RemoteFailure as exc:
            logger.error("Failed to delete client %s: %s", client_id, exc)
            self.last_delete_error = "Failed to delete client. Please try again."
            return False
        finally:
            self.pending_deletes.discard(client_id)
