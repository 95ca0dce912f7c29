from humclient.guards import AdminAuthGuard, GuardState, LoadingPlaceholder, StaffAuthGuard

from .conftest import make_response

ADMIN = {'id': 1, 'username': 'admin', 'role': 'admin', 'permissions': []}


def test_renders_loading_then_children(client, http_session, state, navigator):
    http_session.request.return_value = make_response(200, ADMIN)
    guard = AdminAuthGuard(client, state, navigator)

    first, second = guard.mount('DASHBOARD')

    assert first == LoadingPlaceholder('Đang kiểm tra đăng nhập...')
    assert second == 'DASHBOARD'
    assert guard.status is GuardState.AUTHENTICATED
    assert guard.user == ADMIN
    assert navigator.history == []


def test_401_redirects_exactly_once(client, http_session, state, navigator, dispatcher):
    calls = []
    dispatcher.set_handler(lambda: calls.append('logout'))
    state.set('user', ADMIN)
    state.set('loginTime', 1)
    http_session.request.return_value = make_response(401, {'message': 'Authentication required'})
    guard = AdminAuthGuard(client, state, navigator)

    first, second = guard.mount('DASHBOARD')
    guard.check()

    assert isinstance(first, LoadingPlaceholder)
    assert second is None
    assert navigator.history == ['/login']
    assert state.get('user') is None and state.get('loginTime') is None
    assert http_session.request.call_count == 1
    assert calls == []


def test_wrong_role_renders_nothing_without_redirect(client, http_session, state, navigator):
    http_session.request.return_value = make_response(403, {'message': 'Staff access required'})
    guard = StaffAuthGuard(client, state, navigator)

    _, rendered = guard.mount('STAFF PAGE')

    assert rendered is None
    assert guard.status is GuardState.UNAUTHENTICATED
    assert guard.error.status == 403
    assert navigator.history == []


def test_guard_queries_its_role_endpoint(client, http_session, state, navigator):
    http_session.request.return_value = make_response(200, dict(ADMIN, role='staff'))
    StaffAuthGuard(client, state, navigator).check()

    args, _ = http_session.request.call_args
    assert args == ('GET', 'http://hum.test/api/staff/me')


def test_loading_text_in_english(client, state, navigator):
    guard = AdminAuthGuard(client, state, navigator, language='en')
    assert guard.render('X') == LoadingPlaceholder('Checking login...')
