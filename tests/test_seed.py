from marketplace.models import User, Product, Transaction, Report
from marketplace.seed import seed_database, SEED_PASSWORD


def test_seed_populates_demo_data(client):
    counts = seed_database()
    assert counts == {'users': 4, 'products': 5, 'transactions': 1}

    assert User.query.filter_by(role='admin').count() == 1
    assert Product.query.filter_by(status='sold').count() == 1
    assert Transaction.query.one().amount == Product.query.filter_by(status='sold').one().price
    assert Report.query.filter_by(status='pending').count() == 1

    response = client.post('/auth/login', json={'email': 'sarah@stanford.edu', 'password': SEED_PASSWORD})
    assert response.status_code == 200


def test_seed_is_repeatable(app):
    seed_database()
    assert seed_database()['users'] == 4
