from datetime import datetime, timedelta
import pytest
from marketplace import create_app, db, bcrypt
from marketplace.config import TestConfig
from marketplace.models import User, Role, Product, PaymentMethod
from marketplace.utils.util import to_money

PASSWORD = 'password123'


@pytest.fixture
def app(tmp_path):
    app = create_app(TestConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {'n': 0}

    def _make_user(email=None, role=Role.STUDENT.value, **kwargs):
        counter['n'] += 1
        user = User(
            email=email or f"student{counter['n']}@campus.edu",
            password=bcrypt.generate_password_hash(PASSWORD).decode('utf-8'),
            first_name=kwargs.pop('first_name', 'Test'),
            last_name=kwargs.pop('last_name', f"User{counter['n']}"),
            role=role,
            **kwargs
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def make_product(app):
    base = datetime(2024, 1, 1)
    counter = {'n': 0}

    def _make_product(owner, price='45.00', status='available', category='textbooks', **kwargs):
        counter['n'] += 1
        product = Product(
            user_id=owner.id,
            title=kwargs.pop('title', f"Listing {counter['n']}"),
            description=kwargs.pop('description', 'A perfectly fine item for sale.'),
            price=to_money(price),
            category=category,
            condition=kwargs.pop('condition', 'good'),
            location=kwargs.pop('location', 'Main Library'),
            status=status,
            created_at=kwargs.pop('created_at', base + timedelta(minutes=counter['n'])),
            **kwargs
        )
        db.session.add(product)
        db.session.commit()
        return product
    return _make_product


@pytest.fixture
def make_card(app):
    def _make_card(user, last4='4242', brand='visa'):
        card = PaymentMethod(user_id=user.id, last4=last4, brand=brand, expiry_month=12, expiry_year=28)
        db.session.add(card)
        db.session.commit()
        return card
    return _make_card


@pytest.fixture
def login(app):
    """Return a test client with a session for the given user."""
    def _login(user, password=PASSWORD):
        client = app.test_client()
        response = client.post('/auth/login', json={'email': user.email, 'password': password})
        assert response.status_code == 200, response.get_json()
        return client
    return _login
