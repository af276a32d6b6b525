from library_app.models.membership_application import MembershipApplication
from library_app.extensions import db


class MembershipRepo:
    @staticmethod
    def list_all():
        return MembershipApplication.query.order_by(MembershipApplication.id.desc()).all()

    @staticmethod
    def create(application: MembershipApplication):
        db.session.add(application)
        db.session.commit()
        return application
