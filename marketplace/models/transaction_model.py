import enum
from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat, format_money


class TransactionStatus(enum.Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'


class Transaction(db.Model):
    __tablename__ = 'transactions'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    buyer_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    seller_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    product_id = db.Column(db.String(36), db.ForeignKey('products.id'), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=TransactionStatus.COMPLETED.value)
    payment_method_id = db.Column(db.String(36), db.ForeignKey('payment_methods.id', ondelete='SET NULL'))
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    product = db.relationship('Product', lazy=True)

    def __repr__(self):
        return f'<Transaction {self.id} {self.amount} ({self.status})>'

    def to_dict(self):
        return {
            'id': self.id,
            'buyerId': self.buyer_id,
            'sellerId': self.seller_id,
            'productId': self.product_id,
            'amount': format_money(self.amount),
            'status': self.status,
            'paymentMethodId': self.payment_method_id,
            'createdAt': isoformat(self.created_at)
        }
