from flask_restx import Namespace, Resource
from marketplace.services import user_service, product_service

users_ns = Namespace('users', description='Public user profiles')


@users_ns.route('/<string:user_id>')
class UserResource(Resource):
    def get(self, user_id):
        """Get a user's public profile"""
        user = user_service.get_user_or_404(user_id)
        return {'user': user.to_public_dict()}, 200


@users_ns.route('/<string:user_id>/products')
class UserProducts(Resource):
    def get(self, user_id):
        """Get all listings of a user, newest first"""
        products = product_service.list_products_by_user(user_id)
        return {'products': [p.to_dict() for p in products]}, 200
