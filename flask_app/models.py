"""
Database models for Flask application.
"""
from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

from tzdiff.models import UserRecord

db = SQLAlchemy()


class User(db.Model):
    """Registered user and the timezone chosen at signup."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True, index=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    timezone = db.Column(db.String(64), nullable=False)  # IANA name
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_record(self) -> UserRecord:
        """Convert to tzdiff.models.UserRecord (no password hash)."""
        return UserRecord(
            id=self.id,
            username=self.username,
            email=self.email,
            timezone=self.timezone,
            created_at=self.created_at,
        )


class IPGeolocation(db.Model):
    """Cache for IP timezone lookups."""
    __tablename__ = 'ip_geolocation'

    id = db.Column(db.Integer, primary_key=True)
    ip_address = db.Column(db.String(50), nullable=False, unique=True, index=True)
    timezone = db.Column(db.String(64), nullable=True)  # None = lookup failed
    lookup_date = db.Column(db.DateTime, default=datetime.utcnow)
