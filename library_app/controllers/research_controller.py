from flask import Blueprint, request, jsonify
from library_app.services.research_service import ResearchService
from library_app.utils.validators import iso

research_bp = Blueprint("research", __name__)


def paper_json(p) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "author": p.author,
        "publisher": p.publisher,
        "research_code": p.research_code,
        "cover_image": p.cover_image,
        "description": p.description,
        "total_pages": p.total_pages,
        "published_date": iso(p.published_date),
        "keywords": p.keywords,
        "abstract": p.abstract,
        "total_copies": p.total_copies,
        "available_copies": p.available_copies,
        "created_at": iso(p.created_at),
    }


@research_bp.get("/")
def list_papers():
    return jsonify({"success": True, "data": [paper_json(p) for p in ResearchService.list_papers()]})


@research_bp.get("/<int:research_id>")
def get_paper(research_id: int):
    return jsonify({"success": True, "data": paper_json(ResearchService.get_paper(research_id))})


@research_bp.post("/")
def create_paper():
    data = request.get_json(silent=True) or {}
    p = ResearchService.create_paper(data)
    return jsonify({"success": True, "data": paper_json(p)}), 201


@research_bp.put("/<int:research_id>")
def update_paper(research_id: int):
    data = request.get_json(silent=True) or {}
    p = ResearchService.update_paper(research_id, data)
    return jsonify({"success": True, "data": paper_json(p)})


@research_bp.delete("/<int:research_id>")
def delete_paper(research_id: int):
    ResearchService.delete_paper(research_id)
    return jsonify({"success": True})
