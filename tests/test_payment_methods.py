from marketplace import db
from marketplace.models import PaymentMethod


def card_payload(**overrides):
    payload = {'last4': '4242', 'brand': 'visa', 'expiryMonth': 12, 'expiryYear': 28}
    payload.update(overrides)
    return payload


def test_add_and_list_payment_methods(make_user, login):
    user = make_user()
    client = login(user)
    response = client.post('/payment-methods', json=card_payload())
    assert response.status_code == 201
    method = response.get_json()['paymentMethod']
    assert method['last4'] == '4242'
    assert method['userId'] == user.id

    methods = client.get('/payment-methods').get_json()['paymentMethods']
    assert [m['id'] for m in methods] == [method['id']]


def test_only_metadata_is_stored(make_user, login):
    client = login(make_user())
    client.post('/payment-methods', json=card_payload(cardNumber='4242424242424242', cvv='123'))
    stored = PaymentMethod.query.one()
    assert not hasattr(stored, 'card_number')
    assert not hasattr(stored, 'cvv')
    assert set(stored.to_dict()) == {
        'id', 'userId', 'last4', 'brand', 'expiryMonth', 'expiryYear', 'isDefault', 'createdAt'
    }


def test_payment_method_validation(make_user, login):
    client = login(make_user())
    response = client.post('/payment-methods', json=card_payload(last4='42a2', expiryMonth=13))
    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert 'last4' in errors
    assert 'expiryMonth' in errors


def test_payment_methods_are_private(make_user, make_card, login):
    owner = make_user()
    make_card(owner)
    assert login(make_user()).get('/payment-methods').get_json()['paymentMethods'] == []


def test_delete_payment_method_checks_owner(make_user, make_card, login):
    owner = make_user()
    card = make_card(owner)

    assert login(make_user()).delete(f'/payment-methods/{card.id}').status_code == 403
    assert login(owner).delete('/payment-methods/unknown').status_code == 404

    assert login(owner).delete(f'/payment-methods/{card.id}').status_code == 200
    assert db.session.get(PaymentMethod, card.id) is None


def test_payment_methods_require_session(client):
    assert client.get('/payment-methods').status_code == 401
    assert client.post('/payment-methods', json=card_payload()).status_code == 401
