from datetime import date

import pytest

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.models import Book, Borrower, Librarian, ResearchPaper
from library_app.services.borrowing_service import BorrowingService
from library_app.services.policy import LoanPolicy


class FakeClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FakeClock(date(2024, 1, 1))


@pytest.fixture
def service(app, clock):
    return BorrowingService(LoanPolicy.from_config(app.config), clock=clock)


@pytest.fixture
def seed(app):
    borrower = Borrower(
        member_id="M-001",
        name="Mina Aziz",
        phone="0100000001",
        category="youth",
        joined_date=date(2023, 1, 1),
        expiry_date=date(2025, 1, 1),
        email="mina@example.com",
    )
    librarian = Librarian(
        librarian_id="L-001",
        name="Samir Fawzy",
        phone="0100000002",
        appointment_date=date(2022, 6, 1),
        membership_status="active",
    )
    book = Book(
        id=42,
        name="The Desert Fathers",
        author="Helen Waddell",
        book_code="BK-042",
        total_copies=2,
        available_copies=2,
    )
    paper = ResearchPaper(
        name="Early Monastic Libraries",
        author="R. Boulos",
        research_code="RS-001",
        total_copies=1,
        available_copies=1,
    )
    db.session.add_all([borrower, librarian, book, paper])
    db.session.commit()
    return {"borrower": borrower, "librarian": librarian, "book": book, "paper": paper}
