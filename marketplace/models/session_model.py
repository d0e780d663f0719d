from marketplace import db
from marketplace.utils.util import generate_token, utcnow


class UserSession(db.Model):
    """Server-held login session. The browser cookie carries only its id."""
    __tablename__ = 'user_sessions'
    id = db.Column(db.String(64), primary_key=True, default=generate_token)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<UserSession user={self.user_id} expires={self.expires_at}>'

    def is_expired(self, now=None):
        return self.expires_at <= (now or utcnow())
