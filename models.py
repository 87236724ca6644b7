from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

db = SQLAlchemy()


class Idea(db.Model):
    """A saved idea (date, gift or meal). Coordinates are optional and independent."""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    url = db.Column(db.String(2048), nullable=True)
    source = db.Column(db.String(20), nullable=False, default='TEXT')  # TIKTOK | INSTAGRAM | OTHER | TEXT
    category = db.Column(db.String(20), nullable=False, default='DATE')  # DATE | GIFT | MEAL
    status = db.Column(db.String(20), nullable=False, default='SAVED')  # SAVED | PLANNED | DONE
    image_url = db.Column(db.String(2048), nullable=True)
    place_name = db.Column(db.String(200), nullable=True)
    place_address = db.Column(db.String(500), nullable=True)
    lat = db.Column(db.Float, nullable=True)
    lng = db.Column(db.Float, nullable=True)
    raw_text = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    plan_items = db.relationship('PlanItem', backref='idea', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'url': self.url,
            'source': self.source,
            'category': self.category,
            'status': self.status,
            'image_url': self.image_url,
            'place_name': self.place_name,
            'place_address': self.place_address,
            'lat': self.lat,
            'lng': self.lng,
            'raw_text': self.raw_text,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class Plan(db.Model):
    """
    A scheduled outing grouping several ideas.
    scheduled_for is stored as a naive UTC datetime.
    """
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    scheduled_for = db.Column(db.DateTime, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship(
        'PlanItem',
        backref='plan',
        lazy=True,
        cascade="all, delete-orphan",
        order_by="PlanItem.sort_order"
    )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'scheduled_for': self.scheduled_for.isoformat() if self.scheduled_for else None,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'items': [item.to_dict() for item in self.items],
        }


class PlanItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    plan_id = db.Column(db.Integer, db.ForeignKey('plan.id'), nullable=False)
    idea_id = db.Column(db.Integer, db.ForeignKey('idea.id'), nullable=False)
    sort_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('plan_id', 'idea_id', name='uq_plan_item_idea'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'plan_id': self.plan_id,
            'idea_id': self.idea_id,
            'sort_order': self.sort_order,
            'idea': self.idea.to_dict() if self.idea else None,
        }
