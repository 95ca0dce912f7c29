import pytest

from HUMPIZZA.models import CustomizationSchema, MenuItem

pytestmark = pytest.mark.django_db


def test_list_hides_unavailable_items(api_client, margherita, pepperoni):
    pepperoni.is_available = False
    pepperoni.save()

    names = [item['name'] for item in api_client.get('/api/menu-items').json()]
    assert names == ['Margherita']

    res = api_client.get('/api/menu-items', {'includeUnavailable': 'true'})
    assert {item['name'] for item in res.json()} == {'Margherita', 'Pepperoni'}


def test_item_payload_is_camel_case(api_client, margherita):
    item = api_client.get(f'/api/menu-items/{margherita.pk}').json()

    assert item['nameVi'] == 'Pizza Margherita'
    assert item['categoryName'] == 'Pizza'
    assert item['price'] == 150000
    assert item['isPinned'] is False
    assert item['imageUrl'] == ''


def test_search_requires_query(api_client):
    assert api_client.get('/api/menu-items/search').status_code == 400


def test_search_matches_vietnamese_description(api_client, margherita, pepperoni):
    res = api_client.get('/api/menu-items/search', {'q': 'húng quế'})

    assert [item['name'] for item in res.json()] == ['Margherita']


def test_create_item_requires_back_office(api_client, pizza_category):
    res = api_client.post('/api/menu-items', {'name': 'Hawaii', 'price': 160000}, format='json')
    assert res.status_code == 401


def test_staff_creates_and_updates_item(staff_client, pizza_category):
    res = staff_client.post('/api/menu-items', {
        'name': 'Hawaii', 'nameVi': 'Pizza Hawaii', 'price': 160000, 'categoryId': pizza_category.pk,
    }, format='json')
    assert res.status_code == 201
    item_id = res.json()['id']

    res = staff_client.patch(f'/api/menu-items/{item_id}', {'price': 170000}, format='json')
    assert res.status_code == 200
    assert res.json()['price'] == 170000
    assert res.json()['categoryName'] == 'Pizza'


def test_negative_price_rejected(staff_client):
    res = staff_client.post('/api/menu-items', {'name': 'Free', 'price': -1}, format='json')

    assert res.status_code == 400
    assert 'price' in res.json()['errors']


# ==========================================
# GHIM MÓN
# ==========================================
def test_pin_toggles(admin_client, margherita):
    res = admin_client.patch(f'/api/menu-items/{margherita.pk}/pin')
    assert res.json()['isPinned'] is True
    assert res.json()['pinnedAt']

    res = admin_client.patch(f'/api/menu-items/{margherita.pk}/pin')
    assert res.json()['isPinned'] is False
    assert res.json()['pinnedAt'] is None


def test_pin_limit(admin_client, pizza_category):
    items = [MenuItem.objects.create(name=f'Pizza {i}', price=100000, category=pizza_category) for i in range(5)]
    for item in items[:4]:
        assert admin_client.patch(f'/api/menu-items/{item.pk}/pin').status_code == 200

    res = admin_client.patch(f'/api/menu-items/{items[4].pk}/pin')
    assert res.status_code == 400
    assert 'tối đa 4' in res.json()['message']

    # Bỏ ghim vẫn được
    assert admin_client.patch(f'/api/menu-items/{items[0].pk}/pin').status_code == 200


def test_pin_is_admin_only(staff_client, api_client, margherita):
    assert staff_client.patch(f'/api/menu-items/{margherita.pk}/pin').status_code == 403
    assert api_client.patch(f'/api/menu-items/{margherita.pk}/pin').status_code == 401


def test_pinned_newest_first(admin_client, api_client, margherita, pepperoni):
    admin_client.patch(f'/api/menu-items/{margherita.pk}/pin')
    admin_client.patch(f'/api/menu-items/{pepperoni.pk}/pin')

    names = [item['name'] for item in api_client.get('/api/menu-items/pinned').json()]
    assert names == ['Pepperoni', 'Margherita']


# ==========================================
# TÙY CHỌN MÓN
# ==========================================
@pytest.fixture
def schemas(db):
    size = CustomizationSchema.objects.create(name='Size', type='size_selection', options={'sizes': ['S', 'L']})
    half = CustomizationSchema.objects.create(name='Half & half', type='half_and_half')
    return size, half


def test_attach_schemas_keeps_order(staff_client, api_client, margherita, schemas):
    size, half = schemas
    res = staff_client.patch(
        f'/api/menu-items/{margherita.pk}/customization-schemas', {'schemaIds': [half.pk, size.pk]}, format='json'
    )
    assert res.status_code == 200

    res = api_client.get(f'/api/menu-items/{margherita.pk}/customization-schemas')
    assert [schema['id'] for schema in res.json()] == [half.pk, size.pk]


def test_attach_duplicate_schema_ids_rejected(staff_client, margherita, schemas):
    size, _ = schemas
    res = staff_client.patch(
        f'/api/menu-items/{margherita.pk}/customization-schemas', {'schemaIds': [size.pk, size.pk]}, format='json'
    )
    assert res.status_code == 400


def test_attach_unknown_schema_rejected(staff_client, margherita):
    res = staff_client.patch(
        f'/api/menu-items/{margherita.pk}/customization-schemas', {'schemaIds': [999]}, format='json'
    )
    assert res.status_code == 400
    assert 'invalid schema id' in str(res.json()['errors'])


def test_categories_public_read_back_office_write(api_client, staff_client, pizza_category):
    assert api_client.get('/api/categories').json()[0]['nameVi'] == 'Pizza'
    assert api_client.post('/api/categories', {'name': 'Pasta'}, format='json').status_code == 401
    assert staff_client.post('/api/categories', {'name': 'Pasta', 'nameVi': 'Mì Ý'}, format='json').status_code == 201
