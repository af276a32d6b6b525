from datetime import date

from library_app.extensions import db, mail
from library_app.models import Borrower, NotificationLog
from library_app.services.escalation_service import EscalationService
from library_app.services.policy import LoanPolicy

POLICY = LoanPolicy()


def _borrow(service, seed, **item):
    return service.create_borrowing(
        seed["borrower"].id, seed["librarian"].id, borrow_date=date(2024, 1, 1), **item
    )


def test_overdue_check_writes_derived_status(service, seed):
    b = _borrow(service, seed, book_id=42)

    result = EscalationService.run_overdue_check(POLICY, today=date(2024, 1, 9))

    assert result["checked"] == 1
    assert result["overdue"] == 1
    assert result["status_changed"] == 1
    assert result["frozen"] == 0
    assert service.get_borrowing(b.id).status == "overdue"


def test_overdue_check_leaves_returned_rows_alone(service, clock, seed):
    b = _borrow(service, seed, book_id=42)
    clock.today = date(2024, 1, 5)
    service.return_borrowing(b.id)

    result = EscalationService.run_overdue_check(POLICY, today=date(2024, 3, 1))
    assert result["checked"] == 0
    assert service.get_borrowing(b.id).status == "returned"


def test_three_weeks_overdue_is_not_escalated_yet(service, seed):
    _borrow(service, seed, book_id=42)  # due 2024-01-08

    result = EscalationService.run_overdue_check(POLICY, today=date(2024, 1, 29))

    assert result["frozen"] == 0
    assert db.session.get(Borrower, seed["borrower"].id).membership_status == "active"


def test_beyond_third_week_freezes_and_mails_once(service, seed):
    b = _borrow(service, seed, book_id=42)

    with mail.record_messages() as outbox:
        first = EscalationService.run_overdue_check(POLICY, today=date(2024, 1, 30))
        second = EscalationService.run_overdue_check(POLICY, today=date(2024, 2, 5))

    assert first["frozen"] == 1
    assert first["mails_sent"] == 1
    assert second["frozen"] == 0
    assert second["mails_sent"] == 0

    assert len(outbox) == 1
    assert outbox[0].recipients == ["mina@example.com"]
    assert "22 days overdue" in outbox[0].body

    assert db.session.get(Borrower, seed["borrower"].id).membership_status == "frozen"
    logs = NotificationLog.query.filter_by(borrowing_id=b.id).all()
    assert len(logs) == 1
    assert logs[0].success is True


def test_missing_email_is_logged_as_failure(service, seed):
    seed["borrower"].email = None
    db.session.commit()
    b = _borrow(service, seed, research_id=seed["paper"].id)

    result = EscalationService.run_overdue_check(POLICY, today=date(2024, 2, 1))

    assert result["frozen"] == 1
    assert result["mails_sent"] == 0
    log = NotificationLog.query.filter_by(borrowing_id=b.id).one()
    assert log.success is False
    assert log.error_message == "missing_email"


def test_unfreeze_allows_borrowing_again(app, service, seed):
    from library_app.services.member_service import BorrowerService

    _borrow(service, seed, book_id=42)
    EscalationService.run_overdue_check(POLICY, today=date(2024, 2, 1))

    BorrowerService.unfreeze(seed["borrower"].id)
    b = service.create_borrowing(seed["borrower"].id, seed["librarian"].id, book_id=42)
    assert b.status == "borrowed"
