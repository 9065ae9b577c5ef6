from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from core.errors import HttpFailure, NetworkFailure
from core.logger import get_logger

logger = get_logger(__name__)

JSON_HEADERS = {
    "Content-type": "application/json; charset=UTF-8",
    "Accept": "application/json",
}


class RestRepository:
    """
    Repo générique adossé à une collection REST/JSON.
    - list_all -> GET {base}
    - add      -> POST {base}
    - update   -> PUT {base}/{id}
    - delete   -> DELETE {base}/{id}
    Une seule tentative par appel, pas de retry.
    Erreurs transport -> NetworkFailure, statut non 2xx -> HttpFailure(status).
    """

    def __init__(
        self,
        base_url: str,
        entity_name: str = "entity",
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.entity_name = entity_name
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, obj_id: Union[int, str, None] = None) -> str:
        if obj_id is None:
            return self.base_url
        return f"{self.base_url}/{obj_id}"

    def _request(self, method: str, url: str, *, expect_json: bool = True, **kwargs) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method, url, headers=JSON_HEADERS, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkFailure(f"Network error while contacting {url}", cause=exc) from exc

        if not response.ok:
            logger.warning("%s %s -> HTTP %s", method, url, response.status_code)
            raise HttpFailure(response.status_code)

        if not expect_json:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", method, url)
            raise NetworkFailure(f"Invalid JSON in response from {url}", cause=exc) from exc

    def _coerce_id(self, raw: Any) -> int:
        # json-server & co renvoient parfois des ids texte
        if isinstance(raw, bool):
            raise NetworkFailure(f"Created {self.entity_name} has a non-integer id: {raw!r}")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
            return int(raw.strip())
        raise NetworkFailure(f"Created {self.entity_name} has a non-integer id: {raw!r}")

    # ---------------- CRUD ---------------- #

    def list_all(self) -> List[Dict[str, Any]]:
        data = self._request("GET", self._url())
        if not isinstance(data, list):
            raise NetworkFailure(f"Expected a list of {self.entity_name} records")
        return data

    def add(self, item: Mapping[str, Any]) -> Dict[str, Any]:
        created = self._request("POST", self._url(), json=dict(item))
        if not isinstance(created, dict) or created.get("id") is None:
            raise NetworkFailure(f"Created {self.entity_name} has no id")
        created["id"] = self._coerce_id(created["id"])
        return created

    def update(self, obj_id: Union[int, str], item: Mapping[str, Any]) -> Dict[str, Any]:
        updated = self._request("PUT", self._url(obj_id), json=dict(item))
        return updated if isinstance(updated, dict) else {}

    def delete(self, obj_id: Union[int, str]) -> None:
        self._request("DELETE", self._url(obj_id), expect_json=False)

    def close(self) -> None:
        self.session.close()
