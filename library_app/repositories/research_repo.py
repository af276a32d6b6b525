from library_app.models.research_paper import ResearchPaper
from library_app.extensions import db


class ResearchRepo:
    @staticmethod
    def list_all():
        return ResearchPaper.query.order_by(ResearchPaper.id.desc()).all()

    @staticmethod
    def get(research_id: int):
        return db.session.get(ResearchPaper, research_id)

    @staticmethod
    def get_by_code(research_code: str):
        return ResearchPaper.query.filter_by(research_code=research_code).first()

    @staticmethod
    def create(paper: ResearchPaper):
        db.session.add(paper)
        db.session.commit()
        return paper

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(paper: ResearchPaper):
        db.session.delete(paper)
        db.session.commit()

    @staticmethod
    def take_copy(research_id: int) -> bool:
        changed = (
            ResearchPaper.query
            .filter(ResearchPaper.id == research_id, ResearchPaper.available_copies > 0)
            .update(
                {ResearchPaper.available_copies: ResearchPaper.available_copies - 1},
                synchronize_session="fetch",
            )
        )
        return changed == 1

    @staticmethod
    def give_back_copy(research_id: int) -> bool:
        changed = (
            ResearchPaper.query
            .filter(
                ResearchPaper.id == research_id,
                ResearchPaper.available_copies < ResearchPaper.total_copies,
            )
            .update(
                {ResearchPaper.available_copies: ResearchPaper.available_copies + 1},
                synchronize_session="fetch",
            )
        )
        return changed == 1
