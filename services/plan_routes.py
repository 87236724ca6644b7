"""Plan route handlers: CRUD, plan items, ordering, and itinerary generation."""

from itinerary import route_length, sequence
from services.validation_service import clean_text, json_object, parse_datetime_iso, parse_id_list, parse_int


def _parse_plan_fields(data, *, partial):
    """Return (fields, error) for plan create/update payloads."""
    fields = {}
    if not partial or "title" in data:
        title = clean_text(data.get("title"))
        if not title:
            return None, "Title is required"
        fields["title"] = title
    if not partial or "scheduled_for" in data:
        scheduled_for = parse_datetime_iso(data.get("scheduled_for"))
        if scheduled_for is None:
            return None, "Valid scheduled_for required"
        fields["scheduled_for"] = scheduled_for
    if not partial or "notes" in data:
        fields["notes"] = clean_text(data.get("notes"))
    return fields, None


def _renumber(items):
    for idx, item in enumerate(items):
        item.sort_order = idx


def handle_plans(*, request, jsonify, Plan, db):
    """List plans by date or create one."""
    if request.method == "GET":
        plans = Plan.query.order_by(Plan.scheduled_for.asc(), Plan.id.asc()).all()
        return jsonify([plan.to_dict() for plan in plans])

    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    fields, error = _parse_plan_fields(data, partial=False)
    if error:
        return jsonify({"error": error}), 400
    plan = Plan(**fields)
    db.session.add(plan)
    db.session.commit()
    return jsonify(plan.to_dict()), 201


def plan_detail(*, plan_id, request, jsonify, Plan, db):
    plan = Plan.query.filter_by(id=plan_id).first_or_404()

    if request.method == "GET":
        return jsonify(plan.to_dict())

    if request.method == "DELETE":
        db.session.delete(plan)
        db.session.commit()
        return "", 204

    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    fields, error = _parse_plan_fields(data, partial=True)
    if error:
        return jsonify({"error": error}), 400
    for key, value in fields.items():
        setattr(plan, key, value)
    db.session.commit()
    return jsonify(plan.to_dict())


def add_plan_item(*, plan_id, request, jsonify, Plan, PlanItem, Idea, db):
    """Attach an idea to a plan; appends at the end unless sort_order is given."""
    plan = Plan.query.filter_by(id=plan_id).first_or_404()
    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    idea_id = parse_int(data.get("idea_id"))
    if idea_id is None:
        return jsonify({"error": "idea_id required"}), 400

    idea = db.session.get(Idea, idea_id)
    if not idea:
        return jsonify({"error": "Idea not found"}), 404

    if PlanItem.query.filter_by(plan_id=plan.id, idea_id=idea.id).first():
        return jsonify({"error": "Idea already in plan"}), 400

    sort_order = data.get("sort_order")
    if sort_order is None:
        current_max = db.session.query(db.func.max(PlanItem.sort_order)).filter_by(plan_id=plan.id).scalar()
        sort_order = 0 if current_max is None else current_max + 1
    else:
        sort_order = parse_int(sort_order)
        if sort_order is None:
            return jsonify({"error": "Invalid sort_order"}), 400

    item = PlanItem(plan=plan, idea=idea, sort_order=sort_order)
    db.session.add(item)
    db.session.commit()
    return jsonify(item.to_dict()), 201


def remove_plan_item(*, plan_id, item_id, jsonify, Plan, PlanItem, db):
    plan = Plan.query.filter_by(id=plan_id).first_or_404()
    item = PlanItem.query.filter_by(id=item_id, plan_id=plan.id).first_or_404()
    db.session.delete(item)
    db.session.commit()
    return "", 204


def reorder_plan_items(*, plan_id, request, jsonify, Plan, db):
    """Apply a manual order given as plan-item ids; unknown ids are skipped."""
    plan = Plan.query.filter_by(id=plan_id).first_or_404()
    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    ordered_ids = parse_id_list(data.get("ids"))
    if not ordered_ids:
        return jsonify({"error": "ids array required"}), 400

    items = {item.id: item for item in plan.items}
    ordered = [items[item_id] for item_id in ordered_ids if item_id in items]
    listed = {item.id for item in ordered}
    # Items left out of the request keep their relative order after the listed ones
    ordered.extend(item for item in plan.items if item.id not in listed)
    _renumber(ordered)
    db.session.commit()
    db.session.refresh(plan)
    return jsonify(plan.to_dict())


def create_itinerary(*, request, jsonify, Plan, PlanItem, Idea, db, logger=None):
    """Create a plan from selected ideas, ordered by nearest-neighbour hops."""
    data = json_object(request)
    if data is None:
        return jsonify({"error": "JSON object required"}), 400
    idea_ids = parse_id_list(data.get("idea_ids"))
    if not idea_ids:
        return jsonify({"error": "idea_ids array required"}), 400
    fields, error = _parse_plan_fields(data, partial=False)
    if error:
        return jsonify({"error": error}), 400

    ideas = {idea.id: idea for idea in Idea.query.filter(Idea.id.in_(idea_ids)).all()}
    missing = [idea_id for idea_id in idea_ids if idea_id not in ideas]
    if missing:
        return jsonify({"error": "Idea not found", "missing": missing}), 404

    selected = [ideas[idea_id] for idea_id in idea_ids]
    order = sequence(selected)

    plan = Plan(**fields)
    db.session.add(plan)
    db.session.flush()
    for position, idea_id in enumerate(order):
        db.session.add(PlanItem(plan=plan, idea=ideas[idea_id], sort_order=position))
    db.session.commit()
    db.session.refresh(plan)

    if logger:
        logger.info(
            "Itinerary plan %s created with %s ideas (route length %.4f)",
            plan.id, len(order), route_length(ideas[idea_id] for idea_id in order)
        )
    return jsonify(plan.to_dict()), 201


def optimize_plan(*, plan_id, jsonify, Plan, db, logger=None):
    """Re-sequence an existing plan's items by nearest-neighbour hops."""
    plan = Plan.query.filter_by(id=plan_id).first_or_404()
    items = list(plan.items)
    by_id = {item.id: item for item in items}
    order = sequence(
        {"id": item.id, "lat": item.idea.lat, "lng": item.idea.lng}
        for item in items
    )
    _renumber([by_id[item_id] for item_id in order])
    db.session.commit()
    db.session.refresh(plan)

    if logger:
        logger.info(
            "Plan %s re-sequenced (route length %.4f)",
            plan.id, route_length(item.idea for item in plan.items)
        )
    return jsonify(plan.to_dict())
