from __future__ import annotations

from typing import Dict, Optional


class ClientDirectoryError(Exception):
    """Base des erreurs de l'annuaire clients."""


class RemoteFailure(ClientDirectoryError):
    """Echec d'un appel à la collection distante (transport ou HTTP)."""


class NetworkFailure(RemoteFailure):
    def __init__(self, message: str = "Network error", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class HttpFailure(RemoteFailure):
    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message or f"Request failed with status {status}")
        self.status = status


class ValidationFailure(ClientDirectoryError):
    """Brouillon refusé avant tout appel réseau."""

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in field_errors.items()))
        self.field_errors = dict(field_errors)
