import logging
from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.services import payment_service
from marketplace.utils.auth_middleware import auth_required

payment_ns = Namespace('payment-methods', description='Stored card metadata', path='/payment-methods')

logger = logging.getLogger(__name__)

payment_method_model = payment_ns.model('PaymentMethodInput', {
    'last4': fields.String(required=True, pattern=r'^\d{4}$', description='Last four card digits'),
    'brand': fields.String(required=True, min_length=1),
    'expiryMonth': fields.Integer(required=True, min=1, max=12),
    'expiryYear': fields.Integer(required=True, min=24, max=99, description='Two-digit year')
})


@payment_ns.route('')
class PaymentMethodList(Resource):
    @auth_required
    def get(self, auth):
        """List the caller's payment methods"""
        methods = payment_service.list_payment_methods(auth.user_id)
        return {'paymentMethods': [m.to_dict() for m in methods]}, 200

    @auth_required
    @payment_ns.expect(payment_method_model, validate=True)
    def post(self, auth):
        """Store card metadata for the caller"""
        data = request.get_json()
        try:
            method = payment_service.create_payment_method(data, auth.user_id)
            return {'paymentMethod': method.to_dict()}, 201
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to add payment method: {str(e)}")
            return {'message': 'Failed to add payment method'}, 500


@payment_ns.route('/<string:payment_method_id>')
class PaymentMethodResource(Resource):
    @auth_required
    def delete(self, payment_method_id, auth):
        """Delete one of the caller's payment methods"""
        try:
            payment_service.delete_payment_method(payment_method_id, auth.user_id)
            return {'message': 'Payment method deleted'}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to delete payment method {payment_method_id}: {str(e)}")
            return {'message': 'Failed to delete payment method'}, 500
