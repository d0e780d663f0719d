import logging
from marketplace import db, bcrypt
from marketplace.models import (
    User, Role, Product, Conversation, Message, PaymentMethod, Transaction, Report, UserSession
)
from marketplace.services import transaction_service
from marketplace.utils.util import to_money

logger = logging.getLogger(__name__)

SEED_PASSWORD = 'password123'

STUDENTS = [
    {'email': 'sarah@stanford.edu', 'first_name': 'Sarah', 'last_name': 'Chen', 'university': 'stanford'},
    {'email': 'mike@mit.edu', 'first_name': 'Mike', 'last_name': 'Johnson', 'university': 'mit'},
    {'email': 'emma@berkeley.edu', 'first_name': 'Emma', 'last_name': 'Wilson', 'university': 'berkeley'},
]

LISTINGS = [
    # (owner index, title, description, price, category, condition, location)
    (0, 'Calculus: Early Transcendentals', 'Eighth edition, light highlighting in the first chapters.',
     '45.00', 'textbooks', 'good', 'Green Library'),
    (0, 'Desk Lamp', 'Adjustable LED desk lamp with three brightness levels.',
     '15.00', 'furniture', 'like-new', 'Wilbur Hall'),
    (1, 'TI-84 Plus Calculator', 'Works perfectly, batteries included.',
     '60.00', 'electronics', 'good', 'Student Center'),
    (1, 'Intramural Soccer Cleats', 'Size 10, worn for one season.',
     '25.00', 'sports', 'fair', 'Athletics Building'),
    (2, 'Vintage University Hoodie', 'Classic crewneck from the 90s, size M.',
     '35.00', 'clothing', 'vintage', 'Sproul Plaza'),
]


def clear_database():
    # Children before parents
    for model in (UserSession, Transaction, Message, Conversation, Report, PaymentMethod, Product, User):
        db.session.query(model).delete()
    db.session.commit()


def seed_database():
    """Replace the database contents with a small demo data set."""
    clear_database()
    password = bcrypt.generate_password_hash(SEED_PASSWORD).decode('utf-8')

    admin = User(email='admin@university.edu', password=password, first_name='Admin', last_name='User',
                 university='university', role=Role.ADMIN.value, is_verified=True)
    db.session.add(admin)

    students = []
    for data in STUDENTS:
        student = User(password=password, role=Role.STUDENT.value, is_verified=True, **data)
        db.session.add(student)
        students.append(student)
    db.session.flush()

    cards = []
    for student, (last4, brand) in zip(students, [('4242', 'visa'), ('5555', 'mastercard'), ('0005', 'amex')]):
        card = PaymentMethod(user_id=student.id, last4=last4, brand=brand,
                             expiry_month=12, expiry_year=28, is_default=True)
        db.session.add(card)
        cards.append(card)

    products = []
    for owner_index, title, description, price, category, condition, location in LISTINGS:
        product = Product(user_id=students[owner_index].id, title=title, description=description,
                          price=to_money(price), category=category, condition=condition, location=location)
        db.session.add(product)
        products.append(product)
    db.session.flush()

    conversation = Conversation(product_id=products[2].id, buyer_id=students[0].id, seller_id=students[1].id)
    db.session.add(conversation)
    db.session.flush()
    db.session.add(Message(conversation_id=conversation.id, sender_id=students[0].id,
                           content='Hi! Is the calculator still available?'))
    db.session.add(Message(conversation_id=conversation.id, sender_id=students[1].id,
                           content='Yes it is, happy to meet at the Student Center.'))

    db.session.add(Report(product_id=products[3].id, reporter_id=students[2].id,
                          reason='Listing photos do not match the description.'))
    db.session.commit()

    transaction_service.purchase_product(students[2].id, products[0].id, cards[2].id)

    counts = {
        'users': User.query.count(),
        'products': Product.query.count(),
        'transactions': Transaction.query.count()
    }
    logger.info(f"Seeded database: {counts}")
    return counts
