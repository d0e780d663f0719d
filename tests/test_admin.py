from marketplace.models import Report
from marketplace.services import transaction_service


def test_admin_routes_require_admin_role(client, make_user, login):
    paths = ['/admin/stats', '/admin/users', '/admin/products', '/admin/reports']
    for path in paths:
        assert client.get(path).status_code == 401

    student = login(make_user())
    for path in paths:
        response = student.get(path)
        assert response.status_code == 403
        assert response.get_json()['message'] == 'Admin access required'


def test_stats_count_listed_products_and_pending_reports(make_user, make_product, make_card, login):
    admin = make_user(role='admin')
    seller = make_user()
    buyer = make_user()
    make_product(seller, price='45.00', status='available')
    make_product(seller, price='10.50', status='active')
    make_product(seller, price='100.00', status='removed')
    sold = make_product(seller, price='20.00')
    transaction_service.purchase_product(buyer.id, sold.id, make_card(buyer).id)

    client = login(buyer)
    client.post('/reports', json={'productId': sold.id, 'reason': 'Item never arrived'})

    stats = login(admin).get('/admin/stats').get_json()
    assert stats == {
        'totalUsers': 3,
        'activeListings': 2,
        'pendingReports': 1,
        'estimatedValue': 55.5
    }


def test_stats_on_empty_marketplace(make_user, login):
    stats = login(make_user(role='admin')).get('/admin/stats').get_json()
    assert stats['activeListings'] == 0
    assert stats['estimatedValue'] == 0


def test_admin_lists_users_and_all_products(make_user, make_product, login):
    admin = make_user(role='admin')
    seller = make_user()
    make_product(seller, status='available')
    removed = make_product(seller, status='removed')
    client = login(admin)

    users = client.get('/admin/users').get_json()['users']
    assert {u['id'] for u in users} == {admin.id, seller.id}
    assert all('password' not in u for u in users)

    assert len(client.get('/admin/products').get_json()['products']) == 2
    products = client.get('/admin/products?status=removed').get_json()['products']
    assert [p['id'] for p in products] == [removed.id]


def test_admin_updates_user(make_user, login):
    admin = make_user(role='admin')
    student = make_user()
    client = login(admin)

    response = client.patch(f'/admin/users/{student.id}', json={'isVerified': True, 'role': 'admin'})
    assert response.status_code == 200
    user = response.get_json()['user']
    assert user['isVerified'] is True
    assert user['role'] == 'admin'

    assert client.patch('/admin/users/missing', json={'isVerified': True}).status_code == 404
    assert client.patch(f'/admin/users/{student.id}', json={'role': 'superuser'}).status_code == 400


def test_admin_cannot_change_own_role(make_user, login):
    admin = make_user(role='admin')
    response = login(admin).patch(f'/admin/users/{admin.id}', json={'role': 'student'})
    assert response.status_code == 403


def test_report_lifecycle(make_user, make_product, login):
    admin = make_user(role='admin')
    reporter = make_user()
    product = make_product(make_user())

    response = login(reporter).post('/reports', json={'productId': product.id, 'reason': 'Looks like a scam'})
    assert response.status_code == 201
    report = response.get_json()['report']
    assert report['status'] == 'pending'

    client = login(admin)
    pending = client.get('/admin/reports?status=pending').get_json()['reports']
    assert [r['id'] for r in pending] == [report['id']]

    response = client.patch(f"/admin/reports/{report['id']}", json={'status': 'reviewed'})
    assert response.status_code == 200
    assert response.get_json()['report']['status'] == 'reviewed'

    response = client.patch(f"/admin/reports/{report['id']}", json={'status': 'pending'})
    assert response.status_code == 400

    client.patch(f"/admin/reports/{report['id']}", json={'status': 'resolved'})
    assert Report.query.one().status == 'resolved'
    assert client.get('/admin/reports?status=pending').get_json()['reports'] == []


def test_report_validation(make_user, make_product, login):
    client = login(make_user())
    product = make_product(make_user())
    assert client.post('/reports', json={'productId': product.id, 'reason': 'bad'}).status_code == 400
    assert client.post('/reports', json={'productId': 'missing', 'reason': 'Does not exist'}).status_code == 404
    assert login(make_user(role='admin')).patch('/admin/reports/missing', json={'status': 'reviewed'}).status_code == 404


def test_demoted_admin_loses_access_on_live_session(make_user, login):
    first = make_user(role='admin')
    second = make_user(role='admin')
    second_client = login(second)
    assert second_client.get('/admin/users').status_code == 200

    response = login(first).patch(f'/admin/users/{second.id}', json={'role': 'student'})
    assert response.status_code == 200

    response = second_client.get('/admin/users')
    assert response.status_code == 403
    assert response.get_json()['message'] == 'Admin access required'
