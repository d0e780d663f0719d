import logging
from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import SQLAlchemyError
from marketplace import db
from marketplace.services import conversation_service
from marketplace.utils.auth_middleware import auth_required

conversation_ns = Namespace('conversations', description='Buyer and seller conversations')
message_ns = Namespace('messages', description='Messages inside conversations')

logger = logging.getLogger(__name__)

conversation_model = conversation_ns.model('ConversationInput', {
    'productId': fields.String(required=True, description='Product being discussed'),
    'sellerId': fields.String(description='Product owner; derived from the product when omitted')
})

message_model = message_ns.model('MessageInput', {
    'conversationId': fields.String(required=True),
    'content': fields.String(required=True, min_length=1)
})


@conversation_ns.route('')
class ConversationList(Resource):
    @auth_required
    def get(self, auth):
        """List the caller's conversations, most recent activity first"""
        conversations = conversation_service.list_conversations_for_user(auth.user_id)
        return {'conversations': [c.to_dict() for c in conversations]}, 200

    @auth_required
    @conversation_ns.expect(conversation_model, validate=True)
    def post(self, auth):
        """Find or start the conversation with a product's seller"""
        data = request.get_json()
        try:
            conversation, created = conversation_service.start_conversation(
                data['productId'], auth.user_id, data.get('sellerId')
            )
            return {'conversation': conversation.to_dict()}, 201 if created else 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to create conversation: {str(e)}")
            return {'message': 'Failed to create conversation'}, 500


@conversation_ns.route('/<string:conversation_id>/messages')
class ConversationMessages(Resource):
    @auth_required
    def get(self, conversation_id, auth):
        """Get the messages of a conversation, oldest first"""
        messages = conversation_service.list_messages(conversation_id, auth.user_id)
        return {'messages': [m.to_dict() for m in messages]}, 200


@conversation_ns.route('/<string:conversation_id>/read')
class ConversationRead(Resource):
    @auth_required
    def post(self, conversation_id, auth):
        """Mark the other participant's messages as read"""
        try:
            updated = conversation_service.mark_conversation_read(conversation_id, auth.user_id)
            return {'updated': updated}, 200
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to mark conversation {conversation_id} read: {str(e)}")
            return {'message': 'Failed to update messages'}, 500


@message_ns.route('')
class MessageList(Resource):
    @auth_required
    @message_ns.expect(message_model, validate=True)
    def post(self, auth):
        """Send a message in a conversation the caller takes part in"""
        data = request.get_json()
        try:
            message = conversation_service.send_message(data['conversationId'], auth.user_id, data['content'])
            return {'message': message.to_dict()}, 201
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to send message: {str(e)}")
            return {'message': 'Failed to send message'}, 500
