# User service module for business logic
import logging
from marketplace import db, bcrypt
from marketplace.errors import NotFoundError, ValidationError, PermissionDenied
from marketplace.models.user_model import User, Role

logger = logging.getLogger(__name__)

ADMIN_UPDATABLE_FIELDS = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'university': 'university',
    'campusLocation': 'campus_location',
    'isVerified': 'is_verified',
    'role': 'role'
}


def get_user(user_id):
    return db.session.get(User, user_id)


def get_user_or_404(user_id):
    user = get_user(user_id)
    if not user:
        raise NotFoundError('User not found')
    return user


def get_user_by_email(email):
    return User.query.filter_by(email=email.strip().lower()).first()


def create_user(data):
    email = data['email'].strip().lower()
    if get_user_by_email(email):
        raise ValidationError('Email already registered')

    user = User(
        email=email,
        password=bcrypt.generate_password_hash(data['password']).decode('utf-8'),
        first_name=data['firstName'],
        last_name=data['lastName'],
        university=data.get('university'),
        campus_location=data.get('campusLocation'),
        role=Role.STUDENT.value
    )
    db.session.add(user)
    db.session.commit()
    logger.info(f"Registered user {user.id} ({user.email})")
    return user


def authenticate(email, password):
    """Return the user for valid credentials, otherwise None."""
    user = get_user_by_email(email)
    if not user or not bcrypt.check_password_hash(user.password, password):
        logger.warning(f"Failed login attempt for {email}")
        return None
    return user


def list_users():
    return User.query.order_by(User.created_at.desc()).all()


def update_user(user_id, data, acting_user_id):
    user = get_user_or_404(user_id)

    if 'role' in data and data['role'] != user.role:
        try:
            Role(data['role'])
        except ValueError:
            raise ValidationError(f"Invalid role. Valid roles: {[r.value for r in Role]}")
        if user.id == acting_user_id:
            raise PermissionDenied('Admins cannot change their own role.')

    for key, attribute in ADMIN_UPDATABLE_FIELDS.items():
        if key in data:
            setattr(user, attribute, data[key])

    db.session.commit()
    logger.info(f"User {user.id} updated by admin {acting_user_id}: {sorted(k for k in data if k in ADMIN_UPDATABLE_FIELDS)}")
    return user
