from rugqc.extensions import db
from datetime import datetime, timezone


class Customer(db.Model):
    """Buyer shared by every inspection station."""
    __tablename__ = 'customers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False)
    code = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    created_by = db.Column(db.String(100))

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'code': self.code}


class CustomOption(db.Model):
    """User-added value for a normally fixed option list."""
    __tablename__ = 'custom_options'
    __table_args__ = (db.UniqueConstraint('option_type', 'value', name='uq_custom_option'),)

    id = db.Column(db.Integer, primary_key=True)
    option_type = db.Column(db.String(50), nullable=False, index=True)
    value = db.Column(db.String(200), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    created_by = db.Column(db.String(100))
