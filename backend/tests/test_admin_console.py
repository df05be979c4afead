"""Tests for the entries console settings page."""

from __future__ import annotations

import re

import pytest

from backend.hookpress.entries import EntryService, SqlAlchemyEntryStore

PAGE_URL = "/admin/options?page=entries-crud"
_NONCE_RE = re.compile(r'name="entries_crud_nonce" value="([^"]+)"')


@pytest.fixture()
def service(app):
    return EntryService(SqlAlchemyEntryStore())


def _fetch_nonce(client, query: str = "&action=add") -> str:
    response = client.get(PAGE_URL + query)
    assert response.status_code == 200
    match = _NONCE_RE.search(response.get_data(as_text=True))
    assert match, "expected an anti-forgery token in the form"
    return match.group(1)


def _submit(client, nonce: str, fk: str, fv: str, entry_id: str = ""):
    return client.post(
        PAGE_URL,
        data={
            "entries_crud_nonce": nonce,
            "id": entry_id,
            "fk": fk,
            "fv": fv,
            "submit_add_edit": "Save Changes",
        },
    )


def test_empty_list_and_stylesheet(client):
    response = client.get(PAGE_URL)

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "No entries found." in body
    assert "entries-admin.css?ver=1.0" in body
    assert "action=add" in body


def test_add_entry_redirects_with_flash_message(client, service):
    nonce = _fetch_nonce(client)

    response = _submit(client, nonce, "greeting", "hello")
    assert response.status_code == 302
    assert "message=Entry" in response.headers["Location"]

    listing = client.get(response.headers["Location"])
    body = listing.get_data(as_text=True)
    assert "Entry added successfully." in body
    assert "notice-success" in body
    assert "greeting" in body

    entries = service.list_entries()
    assert [(entry.fk, entry.fv) for entry in entries] == [("greeting", "hello")]


def test_invalid_token_skips_save(client, service):
    _fetch_nonce(client)

    response = _submit(client, "forged-token", "sneaky", "value")

    assert response.status_code == 200
    assert "No entries found." in response.get_data(as_text=True)
    assert service.list_entries() == []


def test_token_is_single_use(client, service):
    nonce = _fetch_nonce(client)
    assert _submit(client, nonce, "first", "value").status_code == 302

    replay = _submit(client, nonce, "second", "value")

    assert replay.status_code == 200
    assert [entry.fk for entry in service.list_entries()] == ["first"]


def test_empty_field_is_terminal_error(client, service):
    nonce = _fetch_nonce(client)

    response = _submit(client, nonce, "key", "   ")

    assert response.status_code == 400
    assert "FK and FV fields cannot be empty." in response.get_data(as_text=True)
    assert service.list_entries() == []


def test_edit_form_and_update(client, service):
    entry_id = service.create_entry("colour", "red")

    form = client.get(f"{PAGE_URL}&action=edit&id={entry_id}")
    body = form.get_data(as_text=True)
    assert f"Edit Entry (ID: {entry_id})" in body
    assert 'value="red"' in body
    nonce = _NONCE_RE.search(body).group(1)

    response = _submit(client, nonce, "colour", "green", entry_id=str(entry_id))
    assert response.status_code == 302

    listing = client.get(response.headers["Location"])
    assert "Entry updated successfully." in listing.get_data(as_text=True)
    assert service.get_entry(entry_id).fv == "green"


def test_edit_missing_entry_shows_error_notice(client):
    response = client.get(f"{PAGE_URL}&action=edit&id=424242")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Entry not found." in body
    assert "notice-error" in body
    assert "<form" not in body


def test_delete_entry(client, service):
    entry_id = service.create_entry("doomed", "value")

    response = client.get(f"{PAGE_URL}&action=delete&id={entry_id}")
    assert response.status_code == 302

    listing = client.get(response.headers["Location"])
    assert "Entry deleted successfully." in listing.get_data(as_text=True)
    assert service.get_entry(entry_id) is None


def test_list_is_newest_first(client, service):
    older = service.create_entry("older", "first")
    newer = service.create_entry("newer", "second")

    body = client.get(PAGE_URL).get_data(as_text=True)

    assert body.index(f"<td>{newer}</td>") < body.index(f"<td>{older}</td>")


def test_flash_message_is_escaped(client):
    response = client.get(PAGE_URL, query_string={"message": "<script>x</script>"})

    body = response.get_data(as_text=True)
    assert "&lt;script&gt;x&lt;/script&gt;" in body
    assert "<script>x</script>" not in body


def test_entry_values_are_escaped(client, service):
    entry_id = service.create_entry("quote", 'say "hi" & bye')

    body = client.get(PAGE_URL).get_data(as_text=True)
    assert "say &#34;hi&#34; &amp; bye" in body
    form = client.get(f"{PAGE_URL}&action=edit&id={entry_id}").get_data(as_text=True)
    assert 'value="say &#34;hi&#34; &amp; bye"' in form


def test_unknown_page_is_not_found(client):
    assert client.get("/admin/options?page=missing").status_code == 404


def test_admin_index_lists_console(client):
    response = client.get("/admin/")

    assert response.status_code == 200
    assert "page=entries-crud" in response.get_data(as_text=True)


@pytest.mark.usefixtures("protection")
def test_readonly_token_cannot_delete(client, service, readonly_headers):
    entry_id = service.create_entry("protected", "value")

    response = client.get(
        f"{PAGE_URL}&action=delete&id={entry_id}", headers=readonly_headers
    )

    assert response.status_code == 403
    assert "not allowed" in response.get_data(as_text=True)
    assert service.get_entry(entry_id) is not None


@pytest.mark.usefixtures("protection")
def test_admin_token_can_delete(client, service, admin_headers):
    entry_id = service.create_entry("removable", "value")

    response = client.get(f"{PAGE_URL}&action=delete&id={entry_id}", headers=admin_headers)

    assert response.status_code == 302
    assert service.get_entry(entry_id) is None


def test_rejected_token_does_not_burn_the_real_one(client, service):
    nonce = _fetch_nonce(client)

    assert _submit(client, "forged-token", "sneaky", "value").status_code == 200
    response = _submit(client, nonce, "genuine", "value")

    assert response.status_code == 302
    assert [entry.fk for entry in service.list_entries()] == ["genuine"]


def test_forms_open_in_two_tabs_both_save(client, service):
    existing = service.create_entry("colour", "red")
    add_nonce = _fetch_nonce(client)
    edit_nonce = _fetch_nonce(client, f"&action=edit&id={existing}")

    assert _submit(client, add_nonce, "size", "large").status_code == 302
    assert _submit(client, edit_nonce, "colour", "blue", entry_id=str(existing)).status_code == 302

    assert service.get_entry(existing).fv == "blue"
    assert sorted(entry.fk for entry in service.list_entries()) == ["colour", "size"]


def test_fractional_id_updates_leading_integer(client, service):
    entry_id = service.create_entry("colour", "red")
    nonce = _fetch_nonce(client, f"&action=edit&id={entry_id}")

    response = _submit(client, nonce, "colour", "green", entry_id=f"{entry_id}.5")

    assert response.status_code == 302
    assert [(entry.id, entry.fv) for entry in service.list_entries()] == [(entry_id, "green")]
