from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .common import Origin


class Company(BaseModel):
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, v: Any) -> Any:
        return "" if v is None else v


class Address(BaseModel):
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None

    def one_line(self) -> str:
        parts = [self.street, self.suite, self.city, self.zipcode]
        return ", ".join(p for p in parts if p)


class Client(BaseModel):
    id: int
    name: str
    email: str = ""
    phone: str = ""
    company: Company = Field(default_factory=Company)
    username: Optional[str] = None
    website: Optional[str] = None
    address: Optional[Address] = None
    # jamais envoyé sur le fil
    origin: Origin = Field(default=Origin.REMOTE, exclude=True)

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("company", mode="before")
    @classmethod
    def _null_company(cls, v: Any) -> Any:
        return Company() if v is None else v

    @property
    def company_name(self) -> str:
        return self.company.name if self.company else ""


def username_from_email(email: str) -> str:
    return email.strip().split("@")[0]


class ClientDraft(BaseModel):
    """Brouillon de formulaire: même forme qu'un Client, sans id."""
    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""

    @field_validator("company", mode="before")
    @classmethod
    def _company_name(cls, v: Any) -> Any:
        # accepte aussi la forme filaire {"name": ...}
        if isinstance(v, dict):
            return v.get("name") or ""
        return "" if v is None else v

    @classmethod
    def from_client(cls, c: Client) -> "ClientDraft":
        return cls(
            name=c.name or "",
            email=c.email or "",
            phone=c.phone or "",
            company=c.company_name or "",
        )

    @property
    def username(self) -> str:
        return username_from_email(self.email)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": {"name": self.company},
            "username": self.username,
        }
