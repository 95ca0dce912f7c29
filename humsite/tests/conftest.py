import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from HUMPIZZA.models import Category, MenuItem, get_profile


@pytest.fixture(autouse=True)
def upload_dirs(settings, tmp_path):
    """Mỗi test dùng thư mục upload riêng"""
    settings.ASSETS_DIR = str(tmp_path / 'assets')
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    return tmp_path


def _make_user(username, role, password='secret123'):
    user = User.objects.create_user(username=username, password=password, is_staff=role != 'customer')
    profile = get_profile(user)
    profile.role = role
    profile.full_name = username.title()
    profile.save()
    return user


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return _make_user('admin', 'admin')


@pytest.fixture
def staff_user(db):
    return _make_user('staff', 'staff')


@pytest.fixture
def customer_user(db):
    return _make_user('khach', 'customer')


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def pizza_category(db):
    return Category.objects.create(name='Pizza', name_vi='Pizza', sort_order=1)


@pytest.fixture
def margherita(pizza_category):
    return MenuItem.objects.create(
        category=pizza_category, name='Margherita', name_vi='Pizza Margherita',
        description='Tomato, mozzarella, basil', description_vi='Cà chua, phô mai, húng quế',
        price=150000,
    )


@pytest.fixture
def pepperoni(pizza_category):
    return MenuItem.objects.create(
        category=pizza_category, name='Pepperoni', name_vi='Pizza Pepperoni',
        description='Spicy salami', price=180000,
    )
