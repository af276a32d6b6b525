from flask import Flask, jsonify
from sqlalchemy.exc import IntegrityError
from library_app.config import Config
from library_app.errors import LibraryError
from library_app.extensions import db, migrate, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)

    # models must be imported before create_all sees their tables
    from library_app import models  # noqa: F401

    with app.app_context():
        db.create_all()

    from library_app.controllers.book_controller import book_bp
    from library_app.controllers.research_controller import research_bp
    from library_app.controllers.borrower_controller import borrower_bp
    from library_app.controllers.librarian_controller import librarian_bp
    from library_app.controllers.borrowing_controller import borrowing_bp
    from library_app.controllers.membership_controller import membership_bp
    from library_app.controllers.notification_controller import notif_bp
    from library_app.controllers.feedback_controller import feedback_bp
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(research_bp, url_prefix="/research")
    app.register_blueprint(borrower_bp, url_prefix="/borrowers")
    app.register_blueprint(librarian_bp, url_prefix="/librarians")
    app.register_blueprint(borrowing_bp, url_prefix="/borrowings")
    app.register_blueprint(membership_bp, url_prefix="/membership-applications")
    app.register_blueprint(notif_bp, url_prefix="/notifications")
    app.register_blueprint(feedback_bp, url_prefix="/feedback")

    @app.errorhandler(LibraryError)
    def handle_library_error(e: LibraryError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e: IntegrityError):
        db.session.rollback()
        app.logger.warning(f"[db] integrity error: {e.orig}")
        return jsonify({"success": False, "message": "Conflicting data"}), 409

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from library_app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
