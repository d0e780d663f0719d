import logging
from flask import request
from flask_restx import Namespace, Resource, fields, reqparse
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.models.product_model import CATEGORIES, CONDITIONS
from marketplace.services import product_service
from marketplace.utils.auth_middleware import auth_required

product_ns = Namespace('products', description='Operations related to listings', path='/products')

logger = logging.getLogger(__name__)

PRICE_PATTERN = r'^\d+(\.\d{1,2})?$'

# Swagger model
product_model = product_ns.model('ProductInput', {
    'title': fields.String(required=True, min_length=3, max_length=200),
    'description': fields.String(required=True, min_length=10),
    'price': fields.String(required=True, pattern=PRICE_PATTERN, description='Fixed-point price, e.g. "45.00"'),
    'category': fields.String(required=True, enum=CATEGORIES),
    'condition': fields.String(required=True, enum=CONDITIONS),
    'location': fields.String(required=True, min_length=1)
})

product_update_model = product_ns.model('ProductUpdate', {
    'title': fields.String(min_length=3, max_length=200),
    'description': fields.String(min_length=10),
    'price': fields.String(pattern=PRICE_PATTERN),
    'category': fields.String(enum=CATEGORIES),
    'condition': fields.String(enum=CONDITIONS),
    'location': fields.String(min_length=1),
    'status': fields.String(enum=['active', 'available', 'removed'])
})

listing_parser = reqparse.RequestParser()
listing_parser.add_argument('category', type=str, location='args', help='Category filter')
listing_parser.add_argument('status', type=str, location='args', help='Status filter')


@product_ns.route('')
class ProductList(Resource):
    @product_ns.expect(listing_parser)
    def get(self):
        """List products, newest first. Without a status only listed items are returned"""
        args = listing_parser.parse_args()
        try:
            products = product_service.list_products(category=args['category'], status=args['status'])
            logger.debug(f"Retrieved {len(products)} products")
            return {'products': [p.to_dict() for p in products]}, 200
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch products: {str(e)}")
            return {'message': 'Failed to fetch products'}, 500

    @auth_required
    @product_ns.expect(product_model, validate=True)
    def post(self, auth):
        """Create a listing owned by the caller"""
        data = request.get_json()
        try:
            product = product_service.create_product(data, auth.user_id)
            return {'product': product.to_dict()}, 201
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to create product: {str(e)}")
            return {'message': 'Failed to create product'}, 500


@product_ns.route('/<string:product_id>')
class ProductResource(Resource):
    def get(self, product_id):
        """Get a product by ID"""
        product = product_service.get_product_or_404(product_id)
        return {'product': product.to_dict()}, 200

    @auth_required
    @product_ns.expect(product_update_model, validate=True)
    def patch(self, product_id, auth):
        """Update a listing (owner only)"""
        data = request.get_json()
        try:
            product = product_service.update_product(product_id, data, auth)
            return {'product': product.to_dict()}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to update product {product_id}: {str(e)}")
            return {'message': 'Failed to update product'}, 500

    @auth_required
    def delete(self, product_id, auth):
        """Soft-delete a listing (owner or admin)"""
        try:
            product_service.remove_product(product_id, auth)
            return {'message': 'Product deleted'}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to delete product {product_id}: {str(e)}")
            return {'message': 'Failed to delete product'}, 500
