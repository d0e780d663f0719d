# Conversation and message service module
import logging
from sqlalchemy import or_
from marketplace import db
from marketplace.errors import NotFoundError, PermissionDenied, InvalidOperationError
from marketplace.models.conversation_model import Conversation, Message
from marketplace.services.product_service import get_product_or_404
from marketplace.utils.util import utcnow

logger = logging.getLogger(__name__)


def get_conversation(conversation_id):
    return db.session.get(Conversation, conversation_id)


def get_conversation_for_participant(conversation_id, user_id):
    conversation = get_conversation(conversation_id)
    if not conversation:
        raise NotFoundError('Conversation not found')
    if not conversation.has_participant(user_id):
        raise PermissionDenied()
    return conversation


def list_conversations_for_user(user_id):
    return Conversation.query.filter(
        or_(Conversation.buyer_id == user_id, Conversation.seller_id == user_id)
    ).order_by(Conversation.last_message_at.desc()).all()


def find_or_create_conversation(product_id, buyer_id, seller_id):
    """Return the conversation for this exact triple, creating it on first contact.

    The lookup and insert are separate statements, so two simultaneous first
    contacts can still produce two rows.
    """
    existing = Conversation.query.filter_by(
        product_id=product_id,
        buyer_id=buyer_id,
        seller_id=seller_id
    ).first()
    if existing:
        return existing, False

    conversation = Conversation(product_id=product_id, buyer_id=buyer_id, seller_id=seller_id)
    db.session.add(conversation)
    db.session.commit()
    logger.info(f"Conversation {conversation.id} opened on product {product_id} by {buyer_id}")
    return conversation, True


def start_conversation(product_id, buyer_id, seller_id=None):
    product = get_product_or_404(product_id)
    if seller_id is None:
        seller_id = product.user_id
    elif seller_id != product.user_id:
        raise InvalidOperationError('Seller does not own this product')
    if seller_id == buyer_id:
        raise InvalidOperationError('You cannot start a conversation about your own product')
    return find_or_create_conversation(product.id, buyer_id, seller_id)


def list_messages(conversation_id, user_id):
    conversation = get_conversation_for_participant(conversation_id, user_id)
    return Message.query.filter_by(conversation_id=conversation.id).order_by(Message.created_at).all()


def send_message(conversation_id, sender_id, content):
    conversation = get_conversation_for_participant(conversation_id, sender_id)
    message = Message(conversation_id=conversation.id, sender_id=sender_id, content=content)
    db.session.add(message)
    conversation.last_message_at = utcnow()
    db.session.commit()
    logger.debug(f"Message {message.id} sent in conversation {conversation.id}")
    return message


def mark_conversation_read(conversation_id, user_id):
    """Mark every message the other participant sent as read. Returns the count."""
    conversation = get_conversation_for_participant(conversation_id, user_id)
    updated = Message.query.filter(
        Message.conversation_id == conversation.id,
        Message.sender_id != user_id,
        Message.is_read.is_(False)
    ).update({'is_read': True}, synchronize_session=False)
    db.session.commit()
    return updated
