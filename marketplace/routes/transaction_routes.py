import logging
from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import SQLAlchemyError
from marketplace.services import transaction_service
from marketplace.utils.auth_middleware import auth_required

transaction_ns = Namespace('transactions', description='Purchase history and checkout')

logger = logging.getLogger(__name__)

purchase_model = transaction_ns.model('PurchaseInput', {
    'productId': fields.String(required=True, min_length=1),
    'paymentMethodId': fields.String(required=True, min_length=1)
})


@transaction_ns.route('')
class TransactionList(Resource):
    @auth_required
    def get(self, auth):
        """List transactions where the caller is buyer or seller"""
        transactions = transaction_service.list_transactions_for_user(auth.user_id)
        return {'transactions': [t.to_dict() for t in transactions]}, 200

    @auth_required
    @transaction_ns.expect(purchase_model, validate=True)
    def post(self, auth):
        """Purchase a product with one of the caller's payment methods"""
        data = request.get_json()
        try:
            transaction = transaction_service.purchase_product(auth.user_id, data['productId'], data['paymentMethodId'])
        except SQLAlchemyError:
            return {'message': 'Failed to process purchase'}, 500
        return {'transaction': transaction.to_dict()}, 201
