from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat


class PaymentMethod(db.Model):
    """Stored card metadata. Full card numbers and CVVs are never persisted."""
    __tablename__ = 'payment_methods'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    last4 = db.Column(db.String(4), nullable=False)
    brand = db.Column(db.String(30), nullable=False)
    expiry_month = db.Column(db.Integer, nullable=False)
    expiry_year = db.Column(db.Integer, nullable=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<PaymentMethod {self.brand} ****{self.last4}>'

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'last4': self.last4,
            'brand': self.brand,
            'expiryMonth': self.expiry_month,
            'expiryYear': self.expiry_year,
            'isDefault': self.is_default,
            'createdAt': isoformat(self.created_at)
        }
