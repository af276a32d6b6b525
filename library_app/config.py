import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///library.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Loan policy
    LOAN_PERIOD_DAYS = int(os.getenv("LOAN_PERIOD_DAYS", "7"))
    FINE_RATE_WEEK1 = os.getenv("FINE_RATE_WEEK1", "0.50")
    FINE_RATE_WEEK2 = os.getenv("FINE_RATE_WEEK2", "1.00")
    FINE_RATE_WEEK3 = os.getenv("FINE_RATE_WEEK3", "2.00")
    ESCALATION_AFTER_DAYS = int(os.getenv("ESCALATION_AFTER_DAYS", "21"))
    RATING_MIN = int(os.getenv("RATING_MIN", "1"))
    RATING_MAX = int(os.getenv("RATING_MAX", "10"))
    REFUSE_FROZEN_BORROWERS = _flag("REFUSE_FROZEN_BORROWERS", "1")

    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

    # Overdue check job (off unless asked for)
    ENABLE_SCHEDULER = _flag("ENABLE_SCHEDULER", "0")
    OVERDUE_CHECK_MINUTES = int(os.getenv("OVERDUE_CHECK_MINUTES", "60"))

    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
    MAIL_USE_TLS = _flag("MAIL_USE_TLS", "0")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@library.local")
    MAIL_SUPPRESS_SEND = _flag("MAIL_SUPPRESS_SEND", "0")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ENABLE_SCHEDULER = False
    MAIL_SUPPRESS_SEND = True
