import enum
from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat, format_money


class ProductStatus(enum.Enum):
    ACTIVE = 'active'
    AVAILABLE = 'available'
    SOLD = 'sold'
    REMOVED = 'removed'


# Statuses that make a listing visible in the public catalogue
LISTED_STATUSES = (ProductStatus.ACTIVE.value, ProductStatus.AVAILABLE.value)

CATEGORIES = ['textbooks', 'electronics', 'clothing', 'furniture', 'sports']
CONDITIONS = ['new', 'like-new', 'good', 'fair', 'vintage']


class Product(db.Model):
    __tablename__ = 'products'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    category = db.Column(db.String(50), nullable=False)
    condition = db.Column(db.String(20), nullable=False)
    location = db.Column(db.String(200), nullable=False)
    image_url = db.Column(db.String(255))
    status = db.Column(db.String(20), nullable=False, default=ProductStatus.AVAILABLE.value)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Product {self.title} ({self.status})>'

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'price': format_money(self.price),
            'category': self.category,
            'condition': self.condition,
            'location': self.location,
            'imageUrl': self.image_url,
            'status': self.status,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at)
        }
