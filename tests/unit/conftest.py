import pytest

from fakes import BASE_URL, FakePage, FakeStore
from pages.cart_page import CartPage
from pages.login_page import LoginPage
from pages.products_page import ProductsPage

# 假页面上的动作是同步生效的，超时给短一点，失败用例不用等太久
FAST_TIMEOUT = 0.3


@pytest.fixture(scope="function")
def store():
    return FakeStore()


@pytest.fixture(scope="function")
def fake_page(store):
    return FakePage(store)


@pytest.fixture(scope="function")
def fake_login_page(fake_page):
    return LoginPage(fake_page, BASE_URL, FAST_TIMEOUT)


@pytest.fixture(scope="function")
def fake_products_page(fake_page, store):
    """已登录并停留在商品列表页"""
    store.user = "standard_user"
    products_page = ProductsPage(fake_page, BASE_URL, FAST_TIMEOUT)
    products_page.open()
    return products_page


@pytest.fixture(scope="function")
def fake_cart_page(fake_page, store):
    store.user = "standard_user"
    return CartPage(fake_page, BASE_URL, FAST_TIMEOUT)
