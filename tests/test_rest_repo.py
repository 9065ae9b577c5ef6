from unittest.mock import MagicMock

import pytest
import requests

from core.errors import HttpFailure, NetworkFailure
from core.storage.rest_repo import RestRepository

BASE = "https://api.example.test/users"


def _response(status=200, body=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if json_error:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def repo(session):
    return RestRepository(BASE + "/", "client", timeout=3, session=session)


class TestRequests:

    def test_list_all(self, repo, session):
        session.request.return_value = _response(body=[{"id": 1}])
        assert repo.list_all() == [{"id": 1}]
        method, url = session.request.call_args.args
        assert (method, url) == ("GET", BASE)
        assert session.request.call_args.kwargs["timeout"] == 3

    def test_add_posts_json(self, repo, session):
        session.request.return_value = _response(201, {"id": 11, "name": "Ada"})
        assert repo.add({"name": "Ada"})["id"] == 11
        call = session.request.call_args
        assert call.args == ("POST", BASE)
        assert call.kwargs["json"] == {"name": "Ada"}
        assert call.kwargs["headers"]["Content-type"].startswith("application/json")

    def test_update_puts_to_item_url(self, repo, session):
        session.request.return_value = _response(body={"id": 3})
        repo.update(3, {"name": "B"})
        assert session.request.call_args.args == ("PUT", f"{BASE}/3")

    def test_delete_ignores_body(self, repo, session):
        session.request.return_value = _response(200, json_error=True)
        assert repo.delete(5) is None
        assert session.request.call_args.args == ("DELETE", f"{BASE}/5")


class TestFailures:

    def test_connection_error_is_network_failure(self, repo, session):
        session.request.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(NetworkFailure) as exc:
            repo.list_all()
        assert isinstance(exc.value.cause, requests.ConnectionError)

    def test_timeout_is_network_failure(self, repo, session):
        session.request.side_effect = requests.Timeout()
        with pytest.raises(NetworkFailure):
            repo.delete(1)

    def test_non_2xx_is_http_failure(self, repo, session):
        session.request.return_value = _response(404)
        with pytest.raises(HttpFailure) as exc:
            repo.update(99, {})
        assert exc.value.status == 404
        assert str(exc.value) == "Request failed with status 404"

    def test_invalid_json(self, repo, session):
        session.request.return_value = _response(200, json_error=True)
        with pytest.raises(NetworkFailure):
            repo.list_all()

    @pytest.mark.parametrize("bad_id", ["k3Xa", "", "1.5", True, 2.5, {"v": 1}])
    def test_create_with_non_integer_id(self, repo, session, bad_id):
        session.request.return_value = _response(201, {"id": bad_id})
        with pytest.raises(NetworkFailure):
            repo.add({"name": "Ada"})

    def test_create_with_numeric_string_id(self, repo, session):
        session.request.return_value = _response(201, {"id": "12"})
        assert repo.add({"name": "Ada"})["id"] == 12

    def test_create_without_id(self, repo, session):
        session.request.return_value = _response(201, {"name": "Ada"})
        with pytest.raises(NetworkFailure):
            repo.add({"name": "Ada"})

    def test_list_must_be_a_list(self, repo, session):
        session.request.return_value = _response(body={"id": 1})
        with pytest.raises(NetworkFailure):
            repo.list_all()


def test_close_closes_session(repo, session):
    repo.close()
    session.close.assert_called_once()
