# Payment method service module. Only card metadata is stored.
import logging
from marketplace import db
from marketplace.errors import NotFoundError, PermissionDenied
from marketplace.models.payment_model import PaymentMethod

logger = logging.getLogger(__name__)


def list_payment_methods(user_id):
    return PaymentMethod.query.filter_by(user_id=user_id).order_by(PaymentMethod.created_at.desc()).all()


def get_payment_method_for_user(payment_method_id, user_id):
    return PaymentMethod.query.filter_by(id=payment_method_id, user_id=user_id).first()


def create_payment_method(data, user_id):
    payment_method = PaymentMethod(
        user_id=user_id,
        last4=data['last4'],
        brand=data['brand'],
        expiry_month=int(data['expiryMonth']),
        expiry_year=int(data['expiryYear'])
    )
    db.session.add(payment_method)
    db.session.commit()
    logger.info(f"Payment method {payment_method.id} added for user {user_id}")
    return payment_method


def delete_payment_method(payment_method_id, user_id):
    payment_method = db.session.get(PaymentMethod, payment_method_id)
    if not payment_method:
        raise NotFoundError('Payment method not found')
    if payment_method.user_id != user_id:
        raise PermissionDenied()
    db.session.delete(payment_method)
    db.session.commit()
    logger.info(f"Payment method {payment_method_id} deleted by user {user_id}")
