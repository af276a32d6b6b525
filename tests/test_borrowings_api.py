from datetime import date, timedelta

from library_app.extensions import db
from library_app.models import Book


def _create(client, seed, **body):
    payload = {"borrower_id": seed["borrower"].id, "librarian_id": seed["librarian"].id}
    payload.update(body)
    return client.post("/borrowings/", json=payload)


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_create_then_return_over_http(client, seed):
    today = date.today()
    resp = _create(client, seed, book_id=42, borrow_date=today.isoformat())
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["status"] == "borrowed"
    assert data["book_id"] == 42
    assert data["research_id"] is None
    assert data["due_date"] == (today + timedelta(days=7)).isoformat()
    assert data["item_name"] == "The Desert Fathers"
    assert data["fine"] == "0.00"

    resp = client.post(f"/borrowings/{data['id']}/return", json={"rating": 8, "review": "Moving"})
    assert resp.status_code == 200
    returned = resp.get_json()["data"]
    assert returned["status"] == "returned"
    assert returned["rating"] == 8
    assert returned["review"] == "Moving"
    assert returned["return_date"] == today.isoformat()
    assert db.session.get(Book, 42).available_copies == 2

    again = client.post(f"/borrowings/{data['id']}/return", json={})
    assert again.status_code == 404
    assert again.get_json()["success"] is False


def test_overdue_shows_in_listing_with_fine(client, seed):
    borrowed_on = date.today() - timedelta(days=10)
    _create(client, seed, book_id=42, borrow_date=borrowed_on.isoformat())

    rows = client.get("/borrowings/?status=overdue").get_json()["data"]
    assert len(rows) == 1
    assert rows[0]["status"] == "overdue"
    assert rows[0]["days_overdue"] == 3
    assert rows[0]["fine"] == "1.50"

    assert client.get("/borrowings/?status=borrowed").get_json()["data"] == []


def test_both_item_refs_is_bad_request(client, seed):
    resp = _create(client, seed, book_id=42, research_id=seed["paper"].id)
    assert resp.status_code == 400
    assert "Exactly one" in resp.get_json()["message"]


def test_missing_borrower_id_is_bad_request(client, seed):
    resp = client.post("/borrowings/", json={"librarian_id": seed["librarian"].id, "book_id": 42})
    assert resp.status_code == 400


def test_unavailable_item_is_conflict(client, seed):
    assert _create(client, seed, research_id=seed["paper"].id).status_code == 201
    resp = _create(client, seed, research_id=seed["paper"].id)
    assert resp.status_code == 409


def test_rating_out_of_range_is_bad_request(client, seed):
    bid = _create(client, seed, book_id=42).get_json()["data"]["id"]
    resp = client.post(f"/borrowings/{bid}/return", json={"rating": 11})
    assert resp.status_code == 400
    assert client.get(f"/borrowings/{bid}").get_json()["data"]["status"] == "borrowed"


def test_list_filter_by_borrower_and_bad_status(client, seed):
    _create(client, seed, book_id=42)
    rows = client.get(f"/borrowings/?borrower_id={seed['borrower'].id}").get_json()["data"]
    assert len(rows) == 1
    assert client.get("/borrowings/?borrower_id=999").get_json()["data"] == []
    assert client.get("/borrowings/?status=lost").status_code == 400


def test_delete_borrowing(client, seed):
    bid = _create(client, seed, book_id=42).get_json()["data"]["id"]
    assert client.delete(f"/borrowings/{bid}").status_code == 200
    assert client.get(f"/borrowings/{bid}").status_code == 404
    assert db.session.get(Book, 42).available_copies == 2


def test_run_overdue_check_endpoint(client, seed):
    _create(client, seed, book_id=42, borrow_date="2024-01-01")
    resp = client.post("/notifications/run-overdue-check", json={"today": "2024-02-01"})
    assert resp.status_code == 200
    result = resp.get_json()["data"]
    assert result["frozen"] == 1

    borrower = client.get(f"/borrowers/{seed['borrower'].id}").get_json()["data"]
    assert borrower["membership_status"] == "frozen"
    assert _create(client, seed, book_id=42).status_code == 409

    client.post(f"/borrowers/{seed['borrower'].id}/unfreeze")
    assert _create(client, seed, book_id=42).status_code == 201
