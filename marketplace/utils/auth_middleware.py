import logging
from dataclasses import dataclass
from functools import wraps
from flask import current_app, session
from marketplace import db
from marketplace.errors import AuthenticationRequired, PermissionDenied
from marketplace.models.user_model import User, Role
from marketplace.models.session_model import UserSession
from marketplace.utils.util import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller for a single request."""
    user_id: str
    role: str

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value


def start_session(user):
    """Replace any current session with a new server-side one for ``user``."""
    end_session()
    record = UserSession(user_id=user.id, expires_at=utcnow() + current_app.permanent_session_lifetime)
    db.session.add(record)
    db.session.commit()
    session.permanent = True
    session['sid'] = record.id


def end_session():
    sid = session.get('sid')
    session.clear()
    if sid:
        UserSession.query.filter_by(id=sid).delete()
        db.session.commit()


def load_auth_context():
    sid = session.get('sid')
    if not sid:
        return None

    record = db.session.get(UserSession, sid)
    if record is None:
        return None
    if record.is_expired():
        logger.info(f"Session for user {record.user_id} expired")
        end_session()
        return None

    # Role is read from the user row so role changes apply to live sessions
    user = db.session.get(User, record.user_id)
    if user is None:
        return None
    return AuthContext(user_id=user.id, role=user.role)


def auth_required(f):
    """Pass the caller's AuthContext to the handler as ``auth``."""
    @wraps(f)
    def decorated(*args, **kwargs):
        auth = load_auth_context()
        if auth is None:
            raise AuthenticationRequired()
        return f(*args, auth=auth, **kwargs)
    return decorated


def admin_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        auth = load_auth_context()
        if auth is None:
            raise AuthenticationRequired()
        if not auth.is_admin:
            raise PermissionDenied('Admin access required')
        return f(*args, auth=auth, **kwargs)
    return decorated
