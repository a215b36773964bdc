from rugqc.extensions import db
from datetime import datetime, timezone
from flask import g, has_request_context, request


class AuditLog(db.Model):
    __tablename__ = 'qc_audit_log'

    id = db.Column(db.Integer, primary_key=True)
    table_name = db.Column(db.String(100), nullable=False)
    record_id = db.Column(db.Integer, nullable=False)
    action = db.Column(db.String(20), nullable=False)
    old_data = db.Column(db.JSON)
    new_data = db.Column(db.JSON)
    user_id = db.Column(db.String(100))
    user_name = db.Column(db.String(200))
    user_role = db.Column(db.String(50))
    user_ip = db.Column(db.String(50))
    action_timestamp = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @staticmethod
    def log(table_name, record_id, action, old_data=None, new_data=None):
        """Log an audit entry. Outside a request the user fields stay empty."""
        user = getattr(g, 'current_user', {}) if has_request_context() else {}
        entry = AuditLog(
            table_name=table_name,
            record_id=record_id,
            action=action,
            old_data=old_data,
            new_data=new_data,
            user_id=user.get('user_id'),
            user_name=user.get('user_name'),
            user_role=user.get('role'),
            user_ip=request.remote_addr if has_request_context() else None,
        )
        db.session.add(entry)
