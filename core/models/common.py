from enum import Enum


class Origin(str, Enum):
    """Provenance d'un enregistrement, fixée une fois à l'entrée dans le store."""
    REMOTE = "remote"
    LOCAL_ONLY = "local_only"
