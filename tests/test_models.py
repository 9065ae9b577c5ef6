from core.models.client import Client, ClientDraft
from core.models.common import Origin


def test_client_ignores_unknown_remote_fields(seed):
    c = Client.model_validate(seed[0])
    assert c.company.name == "Romaguera-Crona"
    assert c.address.city == "Gwenborough"
    assert c.origin is Origin.REMOTE


def test_origin_is_not_serialized(seed):
    c = Client.model_validate(seed[1]).model_copy(update={"origin": Origin.LOCAL_ONLY})
    assert "origin" not in c.model_dump()


def test_address_one_line(seed):
    c = Client.model_validate(seed[0])
    assert c.address.one_line() == "Kulas Light, Apt. 556, Gwenborough, 92998-3874"


def test_draft_payload_derives_username():
    d = ClientDraft(name="Ada", email="ada.l@x.com", phone="555", company="Co")
    assert d.to_payload() == {
        "name": "Ada",
        "email": "ada.l@x.com",
        "phone": "555",
        "company": {"name": "Co"},
        "username": "ada.l",
    }


def test_draft_accepts_wire_company_shape():
    assert ClientDraft(company={"name": "Acme"}).company == "Acme"
    assert ClientDraft(company=None).company == ""


def test_draft_from_client(seed):
    d = ClientDraft.from_client(Client.model_validate(seed[2]))
    assert (d.name, d.email, d.company) == ("Clementine Bauch", "Nathan@yesenia.net", "Acme Corp")


def test_null_remote_fields_read_as_empty():
    c = Client.model_validate({"id": 7, "name": "Null Co", "email": None, "phone": None, "company": None})
    assert (c.email, c.phone, c.company_name) == ("", "", "")
    c = Client.model_validate({"id": 8, "name": "X", "company": {"name": None}})
    assert c.company_name == ""
