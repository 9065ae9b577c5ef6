from __future__ import annotations
from typing import List, Sequence

from core.models.client import Client


def filter_clients(clients: Sequence[Client], query: str) -> List[Client]:
    """Sous-séquence des clients dont le nom, l'email ou la société contient la requête (casse ignorée)."""
    q = (query or "").lower()
    if not q:
        return list(clients)
    return [
        c for c in clients
        if q in (c.name or "").lower()
        or q in (c.email or "").lower()
        or q in c.company_name.lower()
    ]
