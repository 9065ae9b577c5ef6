from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol

from core.config import Settings, get_settings
from core.errors import NetworkFailure, ValidationFailure
from core.logger import get_logger
from core.models.client import Client, ClientDraft, Company
from core.models.common import Origin
from core.services.search import filter_clients
from core.storage.client_store import ClientStore
from core.storage.rest_repo import RestRepository
from core.validation import validate

logger = get_logger(__name__)


class ClientRepository(Protocol):
    def list_all(self) -> List[Dict[str, Any]]: ...
    def add(self, item: Dict[str, Any]) -> Dict[str, Any]: ...
    def update(self, obj_id: int, item: Dict[str, Any]) -> Dict[str, Any]: ...
    def delete(self, obj_id: int) -> None: ...


class ClientService:
    """
    Orchestrateur clients: validation -> appel distant -> mutation du store.
    Le store n'est jamais rechargé après le chargement initial.
    """

    def __init__(
        self,
        repo: Optional[ClientRepository] = None,
        store: Optional[ClientStore] = None,
        *,
        persist_writes: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        if repo is None or persist_writes is None:
            settings = settings or get_settings()
        if repo is None:
            repo = RestRepository(settings.api_url, "client", timeout=settings.request_timeout)
        self.repo = repo
        self.store = store if store is not None else ClientStore()
        self.persist_writes = settings.persist_writes if persist_writes is None else persist_writes

    # ---------------- Lecture ---------------- #

    def load_clients(self) -> bool:
        return self.store.load(self.repo)

    def list_clients(self, query: str = "") -> List[Client]:
        return filter_clients(self.store.clients, query)

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self.store.get(client_id)

    # ---------------- Ecritures ---------------- #

    @staticmethod
    def _check(draft: ClientDraft) -> None:
        errors = validate(draft)
        if errors:
            raise ValidationFailure(errors)

    def create_client(self, draft: ClientDraft) -> Client:
        self._check(draft)
        payload = draft.to_payload()
        created = self.repo.add(payload)

        try:
            client_id = int(created["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkFailure(f"Created client has an invalid id: {created.get('id')!r}", cause=exc) from exc
        origin = Origin.REMOTE if self.persist_writes else Origin.LOCAL_ONLY
        if client_id in self.store:
            # la collection a renvoyé un id déjà présent localement
            new_id = self.store.next_local_id()
            logger.info("Remote echoed existing id %s, using local id %s", client_id, new_id)
            client_id, origin = new_id, Origin.LOCAL_ONLY

        client = Client(
            id=client_id,
            name=payload["name"],
            email=payload["email"],
            phone=payload["phone"],
            company=Company(name=draft.company),
            username=payload["username"],
            origin=origin,
        )
        self.store.insert(client)
        logger.info("Created client %s (%s)", client.id, origin.value)
        return client

    def update_client(self, client_id: int, draft: ClientDraft) -> Client:
        self._check(draft)
        current = self.store.get(client_id)
        if current is None:
            raise KeyError(client_id)

        payload = draft.to_payload()
        if current.origin is Origin.LOCAL_ONLY:
            logger.debug("Client %s is local-only, skipping remote update", client_id)
        else:
            self.repo.update(client_id, payload)

        updated = current.model_copy(update={
            "name": payload["name"],
            "email": payload["email"],
            "phone": payload["phone"],
            "company": Company(name=draft.company),
            "username": payload["username"],
        })
        self.store.replace(updated)
        logger.info("Updated client %s", client_id)
        return updated

    def delete_client(self, client_id: int) -> None:
        current = self.store.get(client_id)
        if current is not None and current.origin is Origin.LOCAL_ONLY:
            logger.debug("Client %s is local-only, skipping remote delete", client_id)
        else:
            self.repo.delete(client_id)
        self.store.remove(client_id)
        logger.info("Deleted client %s", client_id)

    def close(self) -> None:
        close = getattr(self.repo, "close", None)
        if callable(close):
            close()
