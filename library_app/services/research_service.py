from library_app.errors import ConflictError, NotFoundError, ValidationError
from library_app.models.research_paper import ResearchPaper
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.research_repo import ResearchRepo
from library_app.services.book_service import apply_copy_changes, clamp_copies
from library_app.utils.validators import clean_str, parse_date, parse_int, require

TEXT_FIELDS = ["name", "author", "publisher", "cover_image", "description", "keywords", "abstract"]
REQUIRED = ["name", "author", "research_code"]


def _paper_fields(data: dict) -> dict:
    out = {}
    for k in TEXT_FIELDS + ["research_code"]:
        if k in data:
            out[k] = clean_str(data[k])
    for k in REQUIRED:
        if k in out and out[k] is None:
            raise ValidationError(f"{k} cannot be empty")
    if "total_pages" in data:
        out["total_pages"] = parse_int(data["total_pages"], "total_pages", optional=True, minimum=1)
    if "published_date" in data:
        out["published_date"] = parse_date(data["published_date"], "published_date", optional=True)
    if "total_copies" in data:
        out["total_copies"] = parse_int(data["total_copies"], "total_copies")
    if "available_copies" in data:
        out["available_copies"] = parse_int(data["available_copies"], "available_copies")
    return out


class ResearchService:
    @staticmethod
    def list_papers():
        return ResearchRepo.list_all()

    @staticmethod
    def get_paper(research_id: int):
        paper = ResearchRepo.get(research_id)
        if not paper:
            raise NotFoundError(f"Research paper {research_id} not found")
        return paper

    @staticmethod
    def create_paper(data: dict):
        require(data, REQUIRED)
        fields = _paper_fields(data)
        if ResearchRepo.get_by_code(fields["research_code"]):
            raise ConflictError(f"Research code {fields['research_code']} already exists")

        fields.setdefault("total_copies", 1)
        fields.setdefault("available_copies", fields["total_copies"])
        paper = ResearchPaper(**fields)
        clamp_copies(paper)
        return ResearchRepo.create(paper)

    @staticmethod
    def update_paper(research_id: int, data: dict):
        paper = ResearchService.get_paper(research_id)
        fields = _paper_fields(data)

        code = fields.get("research_code")
        if code:
            other = ResearchRepo.get_by_code(code)
            if other and other.id != paper.id:
                raise ConflictError(f"Research code {code} already exists")

        apply_copy_changes(paper, fields, BorrowingRepo.count_on_loan(research_id=paper.id))
        for k, v in fields.items():
            setattr(paper, k, v)
        ResearchRepo.update()
        return paper

    @staticmethod
    def delete_paper(research_id: int):
        paper = ResearchService.get_paper(research_id)
        if BorrowingRepo.count_for(research_id=paper.id):
            raise ConflictError("Research paper has borrowing records and cannot be deleted")
        ResearchRepo.delete(paper)
