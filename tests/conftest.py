import os
import sys
from typing import Any, Dict, List, Optional

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


SEED: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "address": {
            "street": "Kulas Light",
            "suite": "Apt. 556",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
        "company": {"name": "Romaguera-Crona", "catchPhrase": "Multi-layered"},
    },
    {
        "id": 2,
        "name": "Ervin Howell",
        "username": "Antonette",
        "email": "Shanna@melissa.tv",
        "phone": "010-692-6593 x09125",
        "company": {"name": "Deckow-Crist"},
    },
    {
        "id": 3,
        "name": "Clementine Bauch",
        "username": "Samantha",
        "email": "Nathan@yesenia.net",
        "phone": "1-463-123-4447",
        "company": {"name": "Acme Corp"},
    },
]


class FakeRepo:
    """Collection distante en mémoire qui enregistre les appels."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, next_id: int = 11):
        self.rows = [dict(r) for r in (rows if rows is not None else SEED)]
        self.next_id = next_id
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def list_all(self):
        self.calls.append(("list_all",))
        self._maybe_fail()
        return [dict(r) for r in self.rows]

    def add(self, item):
        self.calls.append(("add", dict(item)))
        self._maybe_fail()
        return {**item, "id": self.next_id}

    def update(self, obj_id, item):
        self.calls.append(("update", obj_id, dict(item)))
        self._maybe_fail()
        return {**item, "id": obj_id}

    def delete(self, obj_id):
        self.calls.append(("delete", obj_id))
        self._maybe_fail()


@pytest.fixture
def seed():
    return [dict(r) for r in SEED]


@pytest.fixture
def fake_repo():
    return FakeRepo()


@pytest.fixture
def service(fake_repo):
    from core.services.client_service import ClientService

    svc = ClientService(fake_repo, persist_writes=False)
    svc.load_clients()
    return svc
