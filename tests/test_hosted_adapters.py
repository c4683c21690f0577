"""Hosted platform client, record store and identity adapter against a mocked HTTP session."""

from unittest.mock import MagicMock

import pytest
import requests

from src.catalyst_client import CatalystClient
from src.daybook.errors import NotFoundError, PlatformError, UnauthenticatedError
from src.identity import HostedIdentityProvider
from src.records import HostedRecordStore


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    return response


def _client(*responses):
    session = MagicMock()
    session.request.side_effect = list(responses)
    client = CatalystClient(
        "https://api.example.com/baas/v1/",
        project_id="42",
        access_token="server-token",
        session=session,
    )
    return client, session


def test_requests_are_project_scoped_and_authorized():
    client, session = _client(_response({"status": "success", "data": []}))

    client.list_rows("Todos", page_size=50)

    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://api.example.com/baas/v1/project/42/table/Todos/row"
    assert kwargs["headers"]["Authorization"] == "Zoho-oauthtoken server-token"
    assert kwargs["params"] == {"max_rows": 50}
    assert kwargs["timeout"] == 10.0


def test_list_rows_follows_pagination():
    client, session = _client(
        _response(
            {"status": "success", "data": [{"ROWID": 1}], "more_records": True, "next_token": "abc"}
        ),
        _response({"status": "success", "data": [{"ROWID": 2}], "more_records": False}),
    )

    rows = client.list_rows("Todos")

    assert [row["ROWID"] for row in rows] == [1, 2]
    assert session.request.call_args_list[1].kwargs["params"]["next_token"] == "abc"


def test_error_envelope_raises_platform_error():
    client, _ = _client(
        _response({"status": "failure", "data": {"message": "Table not found"}}, status_code=404)
    )

    with pytest.raises(PlatformError) as exc_info:
        client.insert_row("Missing", {"title": "x"})
    assert exc_info.value.details == "Table not found"


def test_transport_error_raises_platform_error():
    session = MagicMock()
    session.request.side_effect = requests.exceptions.ConnectionError("refused")
    client = CatalystClient("https://api.example.com", "42", session=session)

    with pytest.raises(PlatformError) as exc_info:
        client.current_user("user-token")
    assert exc_info.value.message == "Hosted platform unreachable"


def test_non_json_response_raises_platform_error():
    response = _response(None, status_code=502)
    response.json.side_effect = ValueError("not json")
    client, _ = _client(response)

    with pytest.raises(PlatformError):
        client.delete_row("Todos", "1")


def test_current_user_uses_caller_token():
    client, session = _client(
        _response({"status": "success", "data": {"user_id": 7, "email_id": "a@b.c"}})
    )

    data = client.current_user("user-token")

    assert data["user_id"] == 7
    headers = session.request.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Zoho-oauthtoken user-token"


@pytest.fixture
def fake_client():
    return MagicMock(spec=CatalystClient)


@pytest.fixture
def hosted_store(fake_client):
    return HostedRecordStore(fake_client, {"todos": "Todos", "expenses": "Expenses"})


ROWS = [
    {
        "ROWID": 101,
        "CREATEDTIME": "2025-10-01 10:00:00",
        "MODIFIEDTIME": "2025-10-01 10:00:00",
        "user_id": "user_a",
        "title": "mine",
    },
    {"ROWID": 102, "user_id": "user_b", "title": "theirs"},
]


def test_hosted_list_filters_by_owner(hosted_store, fake_client):
    fake_client.list_rows.return_value = ROWS

    records = hosted_store.list("todos", "user_a")

    assert len(records) == 1
    assert records[0]["id"] == "101"
    assert records[0]["title"] == "mine"
    assert records[0]["created_at"] == "2025-10-01 10:00:00"
    assert "ROWID" not in records[0]
    fake_client.list_rows.assert_called_once_with("Todos", page_size=100)


def test_hosted_insert_stamps_owner(hosted_store, fake_client):
    fake_client.insert_row.side_effect = lambda table, row: {**row, "ROWID": 555}

    record = hosted_store.insert("expenses", "user_a", {"title": "bus", "amount": 2.5})

    table, row = fake_client.insert_row.call_args.args
    assert table == "Expenses"
    assert row["user_id"] == "user_a"
    assert record["id"] == "555"
    assert record["amount"] == 2.5


def test_hosted_update_and_delete_check_ownership(hosted_store, fake_client):
    fake_client.list_rows.return_value = ROWS

    with pytest.raises(NotFoundError):
        hosted_store.update("todos", "user_a", "102", {"title": "stolen"})
    with pytest.raises(NotFoundError):
        hosted_store.delete("todos", "user_a", "102")

    fake_client.update_row.assert_not_called()
    fake_client.delete_row.assert_not_called()


def test_hosted_update_merges_changes(hosted_store, fake_client):
    fake_client.list_rows.return_value = ROWS
    fake_client.update_row.return_value = {"ROWID": 101, "title": "renamed"}

    record = hosted_store.update("todos", "user_a", "101", {"title": "renamed"})

    assert record["title"] == "renamed"
    assert record["user_id"] == "user_a"
    assert fake_client.update_row.call_args.args[1]["ROWID"] == "101"


def test_hosted_delete(hosted_store, fake_client):
    fake_client.list_rows.return_value = ROWS

    hosted_store.delete("todos", "user_a", "101")

    fake_client.delete_row.assert_called_once_with("Todos", "101")


def test_hosted_identity_register_issues_no_token(fake_client):
    fake_client.signup.return_value = {
        "user_details": {"user_id": 9, "first_name": "Ada", "last_name": "L", "email_id": "ada@x.io"}
    }
    provider = HostedIdentityProvider(fake_client, redirect_url="https://app.example.com")

    result = provider.register("Ada", "L", "ada@x.io")

    assert result.token is None
    assert result.user.id == "9"
    assert result.message.startswith("Registration initiated")
    assert fake_client.signup.call_args.kwargs["redirect_url"] == "https://app.example.com"


def test_hosted_identity_resolve(fake_client):
    fake_client.current_user.return_value = {
        "user_id": 9,
        "first_name": "Ada",
        "last_name": "L",
        "email_id": "ada@x.io",
    }
    provider = HostedIdentityProvider(fake_client, redirect_url="")

    user = provider.resolve("user-token")

    assert user.email_id == "ada@x.io"
    fake_client.current_user.assert_called_once_with("user-token")


def test_hosted_identity_rejects_bad_token(fake_client):
    fake_client.current_user.side_effect = PlatformError("Hosted platform request failed")
    provider = HostedIdentityProvider(fake_client, redirect_url="")

    with pytest.raises(UnauthenticatedError):
        provider.resolve("expired")


def test_hosted_login_requires_platform_token(fake_client):
    provider = HostedIdentityProvider(fake_client, redirect_url="")
    with pytest.raises(UnauthenticatedError):
        provider.login("ada@x.io", "pw")
