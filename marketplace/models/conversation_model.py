from marketplace import db
from marketplace.utils.util import generate_id, utcnow, isoformat


class Conversation(db.Model):
    __tablename__ = 'conversations'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    product_id = db.Column(db.String(36), db.ForeignKey('products.id'), nullable=False)
    buyer_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    seller_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    last_message_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    messages = db.relationship('Message', backref='conversation', lazy=True,
                               order_by='Message.created_at')

    def has_participant(self, user_id):
        return user_id in (self.buyer_id, self.seller_id)

    def __repr__(self):
        return f'<Conversation {self.id} product={self.product_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'productId': self.product_id,
            'buyerId': self.buyer_id,
            'sellerId': self.seller_id,
            'lastMessageAt': isoformat(self.last_message_at),
            'createdAt': isoformat(self.created_at)
        }


class Message(db.Model):
    __tablename__ = 'messages'
    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    conversation_id = db.Column(db.String(36), db.ForeignKey('conversations.id'), nullable=False)
    sender_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<Message {self.id} from User {self.sender_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'conversationId': self.conversation_id,
            'senderId': self.sender_id,
            'content': self.content,
            'isRead': self.is_read,
            'createdAt': isoformat(self.created_at)
        }
