from library_app.models.membership_application import MembershipApplication
from library_app.repositories.membership_repo import MembershipRepo
from library_app.utils.validators import clean_str, parse_date, require

REQUIRED = ["member_id", "name", "stage", "birthdate", "phone", "email", "address"]
OPTIONAL = [
    "additional_phone", "studies", "job", "hobbies", "favorite_books",
    "organization_name", "emergency_contact",
]


class MembershipService:
    @staticmethod
    def list_applications():
        return MembershipRepo.list_all()

    @staticmethod
    def submit_application(data: dict):
        fields = {k: clean_str(data.get(k)) for k in REQUIRED + OPTIONAL if k != "birthdate"}
        require({**fields, "birthdate": data.get("birthdate")}, REQUIRED)
        application = MembershipApplication(
            birthdate=parse_date(data["birthdate"], "birthdate"),
            **fields,
        )
        return MembershipRepo.create(application)
