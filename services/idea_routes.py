"""Idea route handlers. Dependencies are passed in by app.py."""

from services.ingest_service import source_from_url
from services.validation_service import (
    IDEA_CATEGORIES,
    IDEA_SOURCES,
    IDEA_STATUSES,
    ValidationError,
    clean_text,
    json_object,
    normalize_choice,
    parse_bool,
    parse_request_coordinate,
    parse_url,
)

TEXT_FIELDS = ("description", "place_name", "place_address", "raw_text")


def _apply_idea_payload(idea, data, *, partial):
    """Copy validated fields from a request body onto an Idea; PATCH only touches supplied keys."""
    if not partial or "title" in data:
        title = clean_text(data.get("title"))
        if not title:
            raise ValidationError("Title is required")
        idea.title = title

    if not partial or "url" in data:
        idea.url = parse_url(data.get("url"))

    if not partial or "image_url" in data:
        idea.image_url = parse_url(data.get("image_url"), field="image_url")

    for field in TEXT_FIELDS:
        if not partial or field in data:
            setattr(idea, field, clean_text(data.get(field)))

    if "source" in data or not partial:
        default_source = source_from_url(idea.url) if idea.url else "TEXT"
        idea.source = normalize_choice(data.get("source"), IDEA_SOURCES, "source", default=idea.source or default_source)
    if "category" in data or not partial:
        idea.category = normalize_choice(data.get("category"), IDEA_CATEGORIES, "category", default=idea.category or "DATE")
    if "status" in data or not partial:
        idea.status = normalize_choice(data.get("status"), IDEA_STATUSES, "status", default=idea.status or "SAVED")

    for field in ("lat", "lng"):
        if not partial or field in data:
            setattr(idea, field, parse_request_coordinate(data.get(field), field))


def handle_ideas(*, request, jsonify, Idea, db):
    """List or create ideas."""
    if request.method == "GET":
        try:
            category = normalize_choice(request.args.get("category"), IDEA_CATEGORIES, "category")
            status = normalize_choice(request.args.get("status"), IDEA_STATUSES, "status")
        except ValidationError as exc:
            return jsonify({"error": str(exc)}), 400

        query = Idea.query
        if category:
            query = query.filter(Idea.category == category)
        if status:
            query = query.filter(Idea.status == status)
        search = (request.args.get("search") or "").strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(db.or_(
                Idea.title.ilike(pattern),
                Idea.description.ilike(pattern),
                Idea.place_name.ilike(pattern),
            ))
        if parse_bool(request.args.get("located")):
            query = query.filter(Idea.lat.isnot(None), Idea.lng.isnot(None))
        ideas = query.order_by(Idea.created_at.desc(), Idea.id.desc()).all()
        return jsonify([idea.to_dict() for idea in ideas])

    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    idea = Idea()
    try:
        _apply_idea_payload(idea, data, partial=False)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    db.session.add(idea)
    db.session.commit()
    return jsonify(idea.to_dict()), 201


def idea_detail(*, idea_id, request, jsonify, Idea, db):
    """Get, update, or delete a single idea."""
    idea = Idea.query.filter_by(id=idea_id).first_or_404()

    if request.method == "GET":
        return jsonify(idea.to_dict())

    if request.method == "DELETE":
        db.session.delete(idea)
        db.session.commit()
        return "", 204

    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    try:
        _apply_idea_payload(idea, data, partial=True)
    except ValidationError as exc:
        db.session.rollback()
        return jsonify({"error": str(exc)}), 400
    db.session.commit()
    return jsonify(idea.to_dict())
