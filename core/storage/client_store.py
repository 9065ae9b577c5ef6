from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple

from pydantic import ValidationError

from core.errors import ClientDirectoryError
from core.logger import get_logger
from core.models.client import Client
from core.models.common import Origin

logger = get_logger(__name__)


class ClientSource(Protocol):
    def list_all(self) -> List[Dict[str, Any]]: ...


class ClientStore:
    """
    Collection locale ordonnée, unique par id.
    Chargée une fois depuis la collection distante puis mutée localement après
    chaque écriture réussie. Jamais re-synchronisée avec le distant.
    """

    def __init__(self) -> None:
        self._items: List[Client] = []
        self.is_loading = False
        self.last_error: Optional[str] = None

    # ---------------- Lecture ---------------- #

    @property
    def clients(self) -> Tuple[Client, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, client_id: object) -> bool:
        return self._index_of(client_id) >= 0

    def get(self, client_id: int) -> Optional[Client]:
        idx = self._index_of(client_id)
        return self._items[idx] if idx >= 0 else None

    def next_local_id(self) -> int:
        return max((c.id for c in self._items), default=0) + 1

    def _index_of(self, client_id: object) -> int:
        for i, c in enumerate(self._items):
            if c.id == client_id:
                return i
        return -1

    # ---------------- Chargement ---------------- #

    def load(self, source: ClientSource) -> bool:
        """Remplace toute la collection. Retourne False si le chargement a échoué."""
        self.is_loading = True
        self.last_error = None
        try:
            rows = source.list_all()
        except ClientDirectoryError as exc:
            logger.error("Failed to load clients: %s", exc)
            self.last_error = str(exc) or "Unknown error"
            return False
        finally:
            self.is_loading = False

        items: List[Client] = []
        seen = set()
        for d in rows:
            try:
                c = Client.model_validate(d)
            except ValidationError as exc:
                # on ignore les entrées invalides pour ne pas casser l'UI
                logger.warning("Skipping invalid client record %r: %s", d, exc.errors())
                continue
            if c.id in seen:
                logger.warning("Skipping duplicate client id %s", c.id)
                continue
            seen.add(c.id)
            items.append(c.model_copy(update={"origin": Origin.REMOTE}))
        self._items = items
        logger.info("Loaded %d clients", len(items))
        return True

    # ---------------- Mutations ---------------- #

    def insert(self, client: Client) -> None:
        if client.id in self:
            raise ValueError(f"client with id={client.id} already exists")
        self._items.insert(0, client)

    def replace(self, client: Client) -> None:
        idx = self._index_of(client.id)
        if idx < 0:
            raise KeyError(client.id)
        self._items[idx] = client

    def remove(self, client_id: int) -> bool:
        idx = self._index_of(client_id)
        if idx < 0:
            return False
        self._items.pop(idx)
        return True
