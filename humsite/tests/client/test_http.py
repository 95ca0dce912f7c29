import pytest

from humclient.cart import Cart
from humclient.errors import ApiError

from .conftest import make_response


def test_get_parses_json(client, http_session):
    http_session.request.return_value = make_response(200, [{'id': 1}])

    assert client.get('/api/menu-items') == [{'id': 1}]
    http_session.request.assert_called_once_with(
        'GET', 'http://hum.test/api/menu-items', json=None, files=None, data=None, headers=None, timeout=None,
    )


def test_401_goes_to_dispatcher_and_returns_none(client, http_session, dispatcher):
    calls = []
    dispatcher.set_handler(lambda: calls.append('logout'))
    http_session.request.return_value = make_response(401, {'message': 'Authentication required'})

    assert client.get('/api/admin/me') is None
    assert calls == ['logout']


def test_401_without_listener_raises(client, http_session):
    http_session.request.return_value = make_response(401, {'message': 'Authentication required'})

    with pytest.raises(ApiError) as exc:
        client.get('/api/admin/me')
    assert exc.value.status == 401


def test_401_can_skip_dispatcher(client, http_session, dispatcher):
    dispatcher.set_handler(lambda: pytest.fail('should not dispatch'))
    http_session.request.return_value = make_response(401, {})

    with pytest.raises(ApiError):
        client.me('admin', dispatch_401=False)


def test_error_message_from_json(client, http_session):
    http_session.request.return_value = make_response(400, {'message': 'Chỉ có thể ghim tối đa 4 món ăn.'})

    with pytest.raises(ApiError) as exc:
        client.patch('/api/menu-items/1/pin')
    assert exc.value.status == 400
    assert exc.value.message == 'Chỉ có thể ghim tối đa 4 món ăn.'


def test_error_message_from_upload_error_key(client, http_session):
    http_session.request.return_value = make_response(400, {'error': 'Only video files are allowed'})

    with pytest.raises(ApiError) as exc:
        client.post('/api/upload-hero-video')
    assert exc.value.message == 'Only video files are allowed'


def test_error_message_falls_back_to_text_then_reason(client, http_session):
    http_session.request.return_value = make_response(502, text='Bad gateway from proxy', reason='Bad Gateway')
    with pytest.raises(ApiError) as exc:
        client.get('/api/menu-items')
    assert exc.value.message == 'Bad gateway from proxy'

    http_session.request.return_value = make_response(500, text='', reason='Internal Server Error')
    with pytest.raises(ApiError) as exc:
        client.get('/api/menu-items')
    assert exc.value.message == 'Internal Server Error'


def test_absolute_urls_are_not_prefixed(client):
    assert client.url('https://storage.example/put?sig=1') == 'https://storage.example/put?sig=1'
    assert client.url('/api/orders') == 'http://hum.test/api/orders'


def test_cached_get_and_clear(client, http_session):
    http_session.request.return_value = make_response(200, {'heroTitle': 'Hum'})

    client.get_cached('/api/home-content')
    client.get_cached('/api/home-content')
    assert http_session.request.call_count == 1

    client.clear_cache()
    client.get_cached('/api/home-content')
    assert http_session.request.call_count == 2


def test_set_token(client, http_session):
    client.set_token('abc')
    assert http_session.headers['Authorization'] == 'Bearer abc'
    client.set_token(None)
    assert 'Authorization' not in http_session.headers


def test_submit_order_sends_cart_items(client, http_session):
    cart = Cart()
    cart.add(3, 'Margherita', 150000, quantity=2)
    http_session.request.return_value = make_response(201, {'id': 10, 'totalAmount': 300000})

    result = client.submit_order(cart, 'An', 'an@example.com', '0901', order_type='delivery', customer_address='Q1')

    assert result['id'] == 10
    _, kwargs = http_session.request.call_args
    assert kwargs['json']['items'] == [{'menuItemId': 3, 'quantity': 2, 'customization': None}]
    assert kwargs['json']['orderType'] == 'delivery'


def test_commit_pending_videos(client, http_session):
    client.commit_pending_videos(heroTitle='Hum')

    args, kwargs = http_session.request.call_args
    assert args == ('PUT', 'http://hum.test/api/home-content')
    assert kwargs['json'] == {'heroTitle': 'Hum', 'commitPendingVideos': True}
