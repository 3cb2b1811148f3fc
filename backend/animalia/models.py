from animalia import db
from flask import current_app
from flask_login import UserMixin
from werkzeug.security import check_password_hash
from animalia.services.leaderboard.ranking import ScoreEntry


class AdminUser(UserMixin):
    """The single operator identity behind /admin."""
    id = 'admin'

    def get_id(self):
        return self.id

    @staticmethod
    def check_password(password):
        if not isinstance(password, str):
            return False
        return check_password_hash(current_app.config['ADMIN_PASSWORD_HASH'], password)


class Room(db.Model):
    __tablename__ = 'room'
    room_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(128), nullable=True)
    # Ordered list of {"label", "code", "image_ref"}
    items = db.Column(db.JSON, nullable=False, default=list)

    def to_dict(self):
        return {
            'room_id': self.room_id,
            'name': self.name,
            'items': list(self.items or []),
        }


class Leaderboard(db.Model):
    __tablename__ = 'leaderboard'
    # Paired with room.room_id by value only
    room_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    # List of {"player_name", "score", "recorded_at"}
    entries = db.Column(db.JSON, nullable=False, default=list)

    @property
    def score_entries(self):
        return [ScoreEntry.from_dict(e) for e in (self.entries or [])]

    @score_entries.setter
    def score_entries(self, values):
        # Reassign so the JSON column is flagged dirty
        self.entries = [e.to_dict() for e in values]

    def to_dict(self):
        return {
            'room_id': self.room_id,
            'entries': list(self.entries or []),
        }
