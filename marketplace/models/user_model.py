import enum
from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat


class Role(enum.Enum):
    STUDENT = 'student'
    ADMIN = 'admin'


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    university = db.Column(db.String(150))
    role = db.Column(db.String(20), nullable=False, default=Role.STUDENT.value)
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    campus_location = db.Column(db.String(150))
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    products = db.relationship('Product', backref='owner', lazy=True)
    payment_methods = db.relationship('PaymentMethod', backref='user', lazy=True)

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'university': self.university,
            'role': self.role,
            'isVerified': self.is_verified,
            'campusLocation': self.campus_location,
            'createdAt': isoformat(self.created_at)
        }

    def to_public_dict(self):
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'university': self.university,
            'isVerified': self.is_verified,
            'campusLocation': self.campus_location,
            'createdAt': isoformat(self.created_at)
        }
