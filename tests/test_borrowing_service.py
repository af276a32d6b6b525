from datetime import date, timedelta

import pytest

from library_app.errors import ConflictError, NotFoundError, ValidationError
from library_app.extensions import db
from library_app.models import Book, Borrowing
from library_app.services import lifecycle


def test_borrow_and_return_scenario(service, clock, seed):
    b = service.create_borrowing(
        seed["borrower"].id, seed["librarian"].id, book_id=42, borrow_date=date(2024, 1, 1)
    )
    assert b.due_date == date(2024, 1, 8)
    assert b.status == "borrowed"

    clock.today = date(2024, 1, 10)
    assert service.status_of(b) == "overdue"

    returned = service.return_borrowing(b.id, rating=8)
    assert returned.status == "returned"
    assert returned.return_date == date(2024, 1, 10)
    assert returned.rating == 8
    assert service.status_of(returned) == "returned"
    # fine is computed for display only
    assert not hasattr(Borrowing, "fine")
    assert str(service.fine_for(returned)) == "1.00"


def test_borrow_date_defaults_to_today(service, clock, seed):
    clock.today = date(2024, 3, 5)
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, research_id=seed["paper"].id)
    assert b.borrow_date == date(2024, 3, 5)
    assert b.due_date == date(2024, 3, 12)
    assert b.book_id is None
    assert b.research_id == seed["paper"].id


@pytest.mark.parametrize("refs", [{}, {"book_id": 42, "research_id": 1}])
def test_exactly_one_item_reference_required(service, seed, refs):
    with pytest.raises(ValidationError):
        service.create_borrowing(seed["borrower"].id, seed["librarian"].id, **refs)
    assert Borrowing.query.count() == 0


def test_unknown_references_raise_not_found(service, seed):
    with pytest.raises(NotFoundError):
        service.create_borrowing(999, seed["librarian"].id, book_id=42)
    with pytest.raises(NotFoundError):
        service.create_borrowing(seed["borrower"].id, 999, book_id=42)
    with pytest.raises(NotFoundError):
        service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=7)
    with pytest.raises(NotFoundError):
        service.create_borrowing(seed["borrower"].id, seed["librarian"].id, research_id=7)


def test_copy_count_round_trip(service, seed):
    book = db.session.get(Book, 42)
    assert book.available_copies == 2

    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    assert db.session.get(Book, 42).available_copies == 1

    service.return_borrowing(b.id)
    assert db.session.get(Book, 42).available_copies == 2


def test_no_copies_left_is_a_conflict_and_writes_nothing(service, seed):
    paper_id = seed["paper"].id
    service.create_borrowing(seed["borrower"].id, seed["librarian"].id, research_id=paper_id)

    with pytest.raises(ConflictError):
        service.create_borrowing(seed["borrower"].id, seed["librarian"].id, research_id=paper_id)

    assert Borrowing.query.filter_by(research_id=paper_id).count() == 1
    assert seed["paper"].available_copies == 0


def test_second_return_is_rejected(service, clock, seed):
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    clock.today = date(2024, 1, 3)
    service.return_borrowing(b.id, rating=5, review="Lovely")

    clock.today = date(2024, 1, 9)
    with pytest.raises(NotFoundError):
        service.return_borrowing(b.id, rating=9)

    again = service.get_borrowing(b.id)
    assert again.return_date == date(2024, 1, 3)
    assert again.rating == 5
    assert db.session.get(Book, 42).available_copies == 2


def test_return_unknown_borrowing(service, seed):
    with pytest.raises(NotFoundError):
        service.return_borrowing(12345)


@pytest.mark.parametrize("rating", [0, 11, True, "7"])
def test_rating_must_be_integer_in_range(service, seed, rating):
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    with pytest.raises(ValidationError):
        service.return_borrowing(b.id, rating=rating)

    still_out = service.get_borrowing(b.id)
    assert still_out.return_date is None
    assert db.session.get(Book, 42).available_copies == 1


def test_blank_review_is_stored_as_none(service, seed):
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    returned = service.return_borrowing(b.id, rating=10, review="   ")
    assert returned.review is None


def test_frozen_borrower_cannot_borrow(service, seed):
    seed["borrower"].membership_status = "frozen"
    db.session.commit()

    with pytest.raises(ConflictError):
        service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    assert db.session.get(Book, 42).available_copies == 2


def test_list_borrowings_filters_on_derived_status(service, clock, seed):
    borrower_id, librarian_id = seed["borrower"].id, seed["librarian"].id
    old = service.create_borrowing(borrower_id, librarian_id, book_id=42, borrow_date=date(2024, 1, 1))
    done = service.create_borrowing(
        borrower_id, librarian_id, research_id=seed["paper"].id, borrow_date=date(2024, 1, 2)
    )
    clock.today = date(2024, 1, 4)
    service.return_borrowing(done.id)
    fresh = service.create_borrowing(borrower_id, librarian_id, book_id=42, borrow_date=date(2024, 1, 9))

    clock.today = date(2024, 1, 10)
    assert [b.id for b in service.list_borrowings(status="overdue")] == [old.id]
    assert [b.id for b in service.list_borrowings(status="borrowed")] == [fresh.id]
    assert [b.id for b in service.list_borrowings(status="returned")] == [done.id]
    assert {b.id for b in service.list_borrowings(status="active")} == {old.id, fresh.id}
    # newest borrow date first
    assert [b.id for b in service.list_borrowings()] == [fresh.id, done.id, old.id]
    assert [b.id for b in service.list_borrowings(research_id=seed["paper"].id)] == [done.id]


def test_list_borrowings_rejects_unknown_status(service, seed):
    with pytest.raises(ValidationError):
        service.list_borrowings(status="lost")


def test_list_borrowings_paginates(service, seed):
    for day in range(1, 3):
        service.create_borrowing(
            seed["borrower"].id, seed["librarian"].id, book_id=42, borrow_date=date(2024, 1, day)
        )
    page = service.list_borrowings(page=2, per_page=1)
    assert [b.borrow_date for b in page] == [date(2024, 1, 1)]


def test_due_date_follows_configured_loan_period(app, seed):
    from library_app.services.borrowing_service import BorrowingService
    from library_app.services.policy import LoanPolicy

    service = BorrowingService(LoanPolicy(loan_period_days=14), clock=lambda: date(2024, 2, 1))
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    assert b.due_date - b.borrow_date == timedelta(days=14)


def test_delete_unreturned_borrowing_restores_copy(service, seed):
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    service.delete_borrowing(b.id)

    assert Borrowing.query.count() == 0
    assert db.session.get(Book, 42).available_copies == 2
    with pytest.raises(NotFoundError):
        service.get_borrowing(b.id)


def test_status_filters_agree_with_derived_status(service, clock, seed):
    clock.today = date(2024, 2, 10)
    rows = [
        # (borrow_date, due_date, return_date)
        (date(2024, 2, 1), date(2024, 2, 8), None),               # overdue
        (date(2024, 2, 3), date(2024, 2, 10), None),              # due today
        (date(2024, 2, 4), date(2024, 2, 11), None),              # due tomorrow
        (date(2024, 2, 9), date(2024, 2, 16), None),              # fresh
        (date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 20)),  # returned late
        (date(2024, 2, 5), date(2024, 2, 12), date(2024, 2, 6)),  # returned early
    ]
    for borrow_date, due_date, return_date in rows:
        db.session.add(Borrowing(
            borrower_id=seed["borrower"].id,
            librarian_id=seed["librarian"].id,
            book_id=42,
            borrow_date=borrow_date,
            due_date=due_date,
            return_date=return_date,
            # stale stored status
            status="borrowed",
        ))
    db.session.commit()

    everything = Borrowing.query.all()
    derived = {
        b.id: lifecycle.derive_status(b.borrow_date, b.due_date, b.return_date, clock.today)
        for b in everything
    }
    expected = {
        "borrowed": {i for i, s in derived.items() if s == "borrowed"},
        "overdue": {i for i, s in derived.items() if s == "overdue"},
        "returned": {i for i, s in derived.items() if s == "returned"},
        "active": {i for i, s in derived.items() if s != "returned"},
    }
    for status, ids in expected.items():
        assert {b.id for b in service.list_borrowings(status=status)} == ids, status

    assert len(expected["overdue"]) == 1
    assert len(expected["borrowed"]) == 3
    assert {b.id for b in service.list_borrowings()} == set(derived)
