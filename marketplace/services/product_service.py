# Product service module for business logic
import logging
from marketplace import db
from marketplace.errors import NotFoundError, PermissionDenied, ConflictError, ValidationError
from marketplace.models.product_model import Product, ProductStatus, LISTED_STATUSES
from marketplace.utils.util import to_money

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'price': 'price',
    'category': 'category',
    'condition': 'condition',
    'location': 'location',
    'imageUrl': 'image_url',
    'status': 'status'
}

# Owners may move a listing between these; "sold" is reserved for purchases
OWNER_SETTABLE_STATUSES = (
    ProductStatus.ACTIVE.value,
    ProductStatus.AVAILABLE.value,
    ProductStatus.REMOVED.value
)


def get_product(product_id):
    return db.session.get(Product, product_id)


def get_product_or_404(product_id):
    product = get_product(product_id)
    if not product:
        raise NotFoundError('Product not found')
    return product


def list_products(category=None, status=None):
    """Catalogue listing. Without a status only listed products are returned."""
    query = Product.query
    if category:
        query = query.filter(Product.category == category)
    if status:
        query = query.filter(Product.status == status)
    else:
        query = query.filter(Product.status.in_(LISTED_STATUSES))
    return query.order_by(Product.created_at.desc()).all()


def list_all_products(status=None):
    query = Product.query
    if status:
        query = query.filter(Product.status == status)
    return query.order_by(Product.created_at.desc()).all()


def list_products_by_user(user_id):
    return Product.query.filter_by(user_id=user_id).order_by(Product.created_at.desc()).all()


def _check_image_url(data):
    image_url = data.get('imageUrl')
    if image_url is not None and not isinstance(image_url, str):
        raise ValidationError('imageUrl must be a string')


def create_product(data, owner_id):
    _check_image_url(data)
    product = Product(
        user_id=owner_id,
        title=data['title'],
        description=data['description'],
        price=to_money(data['price']),
        category=data['category'],
        condition=data['condition'],
        location=data['location'],
        image_url=data.get('imageUrl'),
        status=ProductStatus.AVAILABLE.value
    )
    db.session.add(product)
    db.session.commit()
    logger.info(f"Product created: ID {product.id} by user {owner_id}")
    return product


def update_product(product_id, data, auth):
    product = get_product_or_404(product_id)
    if product.user_id != auth.user_id:
        raise PermissionDenied()

    if product.status == ProductStatus.SOLD.value:
        raise ConflictError('Sold products cannot be modified')

    new_status = data.get('status')
    if new_status is not None and new_status not in OWNER_SETTABLE_STATUSES:
        raise ValidationError(f'Invalid status: {new_status}')

    _check_image_url(data)

    for key, attribute in UPDATABLE_FIELDS.items():
        if key in data:
            value = data[key]
            if key == 'price':
                value = to_money(value)
            setattr(product, attribute, value)

    db.session.commit()
    logger.info(f"Product updated: ID {product.id}")
    return product


def remove_product(product_id, auth):
    """Soft delete: the row is kept so transactions keep referencing it."""
    product = get_product_or_404(product_id)
    if product.user_id != auth.user_id and not auth.is_admin:
        raise PermissionDenied()
    if product.status == ProductStatus.SOLD.value:
        raise ConflictError('Sold products cannot be removed')

    product.status = ProductStatus.REMOVED.value
    db.session.commit()
    logger.info(f"Product removed: ID {product.id} by user {auth.user_id}")
    return product
