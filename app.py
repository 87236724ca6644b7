import os

from dotenv import load_dotenv
from flask import Flask, request, jsonify

load_dotenv()

from models import db, Idea, Plan, PlanItem
from services import idea_routes, plan_routes
from services.geocode_service import GeocodeConfigError, GeocodeError, geocode_place
from services.ingest_service import build_drafts
from services.validation_service import clean_text, json_object

app = Flask(__name__)
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///wish2plan.db')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
app.config['MAPBOX_TOKEN'] = os.environ.get('MAPBOX_TOKEN')
app.config['GEOCODE_RESULT_LIMIT'] = int(os.environ.get('GEOCODE_RESULT_LIMIT', 5))
app.config['GEOCODE_TIMEOUT'] = float(os.environ.get('GEOCODE_TIMEOUT', 10))

db.init_app(app)

with app.app_context():
    db.create_all()


@app.errorhandler(404)
def _not_found(exc):
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Not found'}), 404
    return exc


@app.errorhandler(405)
def _method_not_allowed(exc):
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Method not allowed'}), 405
    return exc


@app.route('/api/health')
def health():
    return jsonify({'status': 'ok'})


# Ideas
@app.route('/api/ideas', methods=['GET', 'POST'])
def handle_ideas():
    return idea_routes.handle_ideas(request=request, jsonify=jsonify, Idea=Idea, db=db)


@app.route('/api/ideas/<int:idea_id>', methods=['GET', 'PATCH', 'DELETE'])
def handle_idea(idea_id):
    return idea_routes.idea_detail(idea_id=idea_id, request=request, jsonify=jsonify, Idea=Idea, db=db)


@app.route('/api/ingest', methods=['POST'])
def ingest():
    """Build idea drafts from pasted text or links; the client saves the ones it keeps."""
    data = json_object(request)
    if data is None:
        return jsonify({'error': 'JSON object required'}), 400
    text = data.get('text')
    if not isinstance(text, str) or not text.strip():
        return jsonify({'error': 'Text is required'}), 400
    return jsonify(build_drafts(text))


@app.route('/api/geocode', methods=['POST'])
def geocode():
    data = json_object(request)
    if data is None:
        return jsonify({'error': 'JSON object required'}), 400
    query = clean_text(data.get('query'))
    if not query:
        return jsonify({'error': 'Query is required'}), 400
    try:
        results = geocode_place(
            query,
            token=app.config.get('MAPBOX_TOKEN'),
            limit=app.config.get('GEOCODE_RESULT_LIMIT', 5),
            timeout=app.config.get('GEOCODE_TIMEOUT', 10),
            logger=app.logger,
        )
    except GeocodeConfigError as e:
        app.logger.error("Geocoding unavailable: %s", e)
        return jsonify({'error': 'Geocoding not configured'}), 500
    except GeocodeError as e:
        return jsonify({'error': 'Failed to geocode place', 'details': str(e)}), 502
    return jsonify(results)


# Plans
@app.route('/api/plans', methods=['GET', 'POST'])
def handle_plans():
    return plan_routes.handle_plans(request=request, jsonify=jsonify, Plan=Plan, db=db)


@app.route('/api/plans/itinerary', methods=['POST'])
def create_itinerary():
    return plan_routes.create_itinerary(
        request=request, jsonify=jsonify, Plan=Plan, PlanItem=PlanItem, Idea=Idea, db=db, logger=app.logger
    )


@app.route('/api/plans/<int:plan_id>', methods=['GET', 'PATCH', 'DELETE'])
def handle_plan(plan_id):
    return plan_routes.plan_detail(plan_id=plan_id, request=request, jsonify=jsonify, Plan=Plan, db=db)


@app.route('/api/plans/<int:plan_id>/items', methods=['POST'])
def add_plan_item(plan_id):
    return plan_routes.add_plan_item(
        plan_id=plan_id, request=request, jsonify=jsonify, Plan=Plan, PlanItem=PlanItem, Idea=Idea, db=db
    )


@app.route('/api/plans/<int:plan_id>/items/<int:item_id>', methods=['DELETE'])
def remove_plan_item(plan_id, item_id):
    return plan_routes.remove_plan_item(
        plan_id=plan_id, item_id=item_id, jsonify=jsonify, Plan=Plan, PlanItem=PlanItem, db=db
    )


@app.route('/api/plans/<int:plan_id>/reorder', methods=['POST'])
def reorder_plan_items(plan_id):
    return plan_routes.reorder_plan_items(plan_id=plan_id, request=request, jsonify=jsonify, Plan=Plan, db=db)


@app.route('/api/plans/<int:plan_id>/optimize', methods=['POST'])
def optimize_plan(plan_id):
    return plan_routes.optimize_plan(plan_id=plan_id, jsonify=jsonify, Plan=Plan, db=db, logger=app.logger)


if __name__ == '__main__':
    app.run(host='0.0.0.0', debug=True)
