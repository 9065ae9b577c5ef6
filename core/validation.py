from __future__ import annotations
import re
from typing import Dict

from core.models.client import ClientDraft

# contrôle syntaxique minimal, pas du RFC 5322
EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

NAME_REQUIRED = "Name is required."
EMAIL_INVALID = "Please enter a valid email address."
PHONE_REQUIRED = "Phone number is required."
COMPANY_REQUIRED = "Company name is required."


def validate(draft: ClientDraft) -> Dict[str, str]:
    """Retourne {champ: message}; un dict vide signifie brouillon valide."""
    errors: Dict[str, str] = {}
    if not draft.name.strip():
        errors["name"] = NAME_REQUIRED
    if not EMAIL_RE.fullmatch(draft.email):
        errors["email"] = EMAIL_INVALID
    if not draft.phone.strip():
        errors["phone"] = PHONE_REQUIRED
    if not draft.company.strip():
        errors["company"] = COMPANY_REQUIRED
    return errors
