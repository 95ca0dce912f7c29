import pytest

from HUMPIZZA.models import Notification, Order, Reservation

pytestmark = pytest.mark.django_db


def _order_payload(items, **extra):
    payload = {
        'customerName': 'Nguyễn Văn A',
        'customerEmail': 'a@example.com',
        'customerPhone': '0901234567',
        'orderType': 'takeout',
        'paymentMethod': 'cash',
        'items': items,
    }
    payload.update(extra)
    return payload


# ==========================================
# ĐƠN HÀNG
# ==========================================
def test_order_total_uses_menu_prices(api_client, margherita, pepperoni):
    res = api_client.post('/api/orders', _order_payload([
        {'menuItemId': margherita.pk, 'quantity': 2, 'price': 1},
        {'menuItemId': pepperoni.pk},
    ]), format='json')

    assert res.status_code == 201
    body = res.json()
    assert body['totalAmount'] == 2 * 150000 + 180000
    assert body['status'] == 'pending'
    assert {line['name']: line['quantity'] for line in body['lines']} == {'Margherita': 2, 'Pepperoni': 1}


def test_duplicate_lines_are_merged(api_client, margherita):
    size = {'schemaId': 1, 'selections': {'size': 'L'}}
    res = api_client.post('/api/orders', _order_payload([
        {'menuItemId': margherita.pk, 'quantity': 1, 'customization': size},
        {'menuItemId': margherita.pk, 'quantity': 2, 'customization': size},
        {'menuItemId': margherita.pk, 'quantity': 1},
    ]), format='json')

    lines = res.json()['lines']
    assert len(lines) == 2
    assert sorted(line['quantity'] for line in lines) == [1, 3]
    assert Order.objects.get().total_amount == 4 * 150000


def test_unknown_item_rejected(api_client, margherita):
    res = api_client.post('/api/orders', _order_payload([{'menuItemId': 9999}]), format='json')

    assert res.status_code == 400
    assert Order.objects.count() == 0


def test_empty_cart_rejected(api_client):
    assert api_client.post('/api/orders', _order_payload([]), format='json').status_code == 400


def test_delivery_needs_address(api_client, margherita):
    res = api_client.post(
        '/api/orders', _order_payload([{'menuItemId': margherita.pk}], orderType='delivery'), format='json'
    )
    assert res.status_code == 400
    assert 'customerAddress' in res.json()['errors']


def test_order_creates_notification(api_client, margherita):
    res = api_client.post('/api/orders', _order_payload([{'menuItemId': margherita.pk}]), format='json')

    notification = Notification.objects.get()
    assert notification.type == 'order'
    assert notification.reference_id == str(res.json()['id'])
    assert notification.priority == 'high'


def test_order_list_is_back_office_only(api_client, staff_client, margherita):
    api_client.post('/api/orders', _order_payload([{'menuItemId': margherita.pk}]), format='json')

    assert api_client.get('/api/orders').status_code == 401
    assert len(staff_client.get('/api/orders').json()) == 1


def test_staff_updates_order_status(staff_client, api_client, margherita):
    order_id = api_client.post(
        '/api/orders', _order_payload([{'menuItemId': margherita.pk}]), format='json'
    ).json()['id']

    res = staff_client.patch(f'/api/orders/{order_id}', {'status': 'preparing'}, format='json')
    assert res.status_code == 200
    assert res.json()['status'] == 'preparing'

    assert staff_client.patch(f'/api/orders/{order_id}', {'status': 'eaten'}, format='json').status_code == 400


# ==========================================
# ĐẶT BÀN & THÔNG BÁO
# ==========================================
def test_public_reservation(api_client):
    res = api_client.post('/api/reservations', {
        'name': 'Trần B', 'phone': '0909999999', 'date': '2026-12-24', 'time': '19:30',
        'guests': 4, 'specialRequests': 'Gần cửa sổ', 'status': 'confirmed',
    }, format='json')

    assert res.status_code == 201
    assert res.json()['status'] == 'pending'
    assert Reservation.objects.get().special_requests == 'Gần cửa sổ'
    assert Notification.objects.get().type == 'reservation'


def test_reservation_needs_guests(api_client):
    res = api_client.post('/api/reservations', {
        'name': 'Trần B', 'phone': '0909999999', 'date': '2026-12-24', 'time': '19:30', 'guests': 0,
    }, format='json')
    assert res.status_code == 400


def test_notifications_read_flow(staff_client, api_client, margherita):
    for _ in range(2):
        api_client.post('/api/orders', _order_payload([{'menuItemId': margherita.pk}]), format='json')

    assert staff_client.get('/api/notifications/unread-count').json() == {'count': 2}

    first = staff_client.get('/api/notifications').json()[0]
    res = staff_client.patch(f"/api/notifications/{first['id']}/read")
    assert res.json()['isRead'] is True
    assert staff_client.get('/api/notifications/unread-count').json() == {'count': 1}

    staff_client.patch('/api/notifications/mark-all-read')
    assert staff_client.get('/api/notifications/unread-count').json() == {'count': 0}

    assert staff_client.delete('/api/notifications/clear-read').json()['deleted'] == 2


def test_notifications_require_login(api_client):
    assert api_client.get('/api/notifications').status_code == 401
