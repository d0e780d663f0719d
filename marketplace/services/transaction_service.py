# Transaction service module: purchase history and the purchase itself
import logging
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.errors import MarketplaceError, NotFoundError, ConflictError, InvalidOperationError
from marketplace.models.product_model import Product, ProductStatus
from marketplace.models.payment_model import PaymentMethod
from marketplace.models.transaction_model import Transaction, TransactionStatus
from marketplace.utils.util import utcnow

logger = logging.getLogger(__name__)

PRODUCT_UNAVAILABLE = 'This product is no longer available'
OWN_PRODUCT = 'You cannot purchase your own product'
INVALID_PAYMENT_METHOD = 'Invalid payment method'


def list_transactions_for_user(user_id):
    return Transaction.query.filter(
        or_(Transaction.buyer_id == user_id, Transaction.seller_id == user_id)
    ).order_by(Transaction.created_at.desc()).all()


def purchase_product(buyer_id, product_id, payment_method_id):
    """Buy an available product in one unit of work.

    Checks run in order: the product exists, it is ``available``, the buyer is
    not the owner, and the payment method belongs to the buyer. The product row
    is locked for the duration, and the flip to ``sold`` only applies while the
    row is still ``available``, so of two racing purchases exactly one commits.
    Any failure rolls back both the ledger row and the status change.
    """
    try:
        product = (
            db.session.query(Product)
            .filter(Product.id == product_id)
            .with_for_update()
            .first()
        )
        if not product:
            raise NotFoundError('Product not found')
        if product.status != ProductStatus.AVAILABLE.value:
            raise ConflictError(PRODUCT_UNAVAILABLE)
        if product.user_id == buyer_id:
            raise InvalidOperationError(OWN_PRODUCT)

        payment_method = PaymentMethod.query.filter_by(id=payment_method_id, user_id=buyer_id).first()
        if not payment_method:
            raise InvalidOperationError(INVALID_PAYMENT_METHOD)

        flipped = (
            db.session.query(Product)
            .filter(Product.id == product.id, Product.status == ProductStatus.AVAILABLE.value)
            .update({'status': ProductStatus.SOLD.value, 'updated_at': utcnow()},
                    synchronize_session=False)
        )
        if flipped != 1:
            raise ConflictError(PRODUCT_UNAVAILABLE)

        transaction = Transaction(
            buyer_id=buyer_id,
            seller_id=product.user_id,
            product_id=product.id,
            amount=product.price,
            status=TransactionStatus.COMPLETED.value,
            payment_method_id=payment_method.id
        )
        db.session.add(transaction)
        db.session.commit()
    except MarketplaceError as e:
        db.session.rollback()
        logger.warning(f"Purchase of product {product_id} by {buyer_id} rejected: {e.message}")
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Purchase of product {product_id} by {buyer_id} failed: {str(e)}")
        raise

    logger.info(f"Product {product_id} sold to {buyer_id} for {transaction.amount} (transaction {transaction.id})")
    return transaction
