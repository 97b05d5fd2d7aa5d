from decimal import Decimal
from typing import Iterable, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from assertions.inventory_assert import InventoryAssert
from config.locators import LOGIN_LOCATORS, PRODUCTS_LOCATORS, ProductsLocators, Selector
from config.pages import URL_PATTERNS
from pages.base_page import BasePage
from pages.models import Product, SortMode
from utils.common_utils import parse_price
from utils.exceptions import ItemNotFoundError


class ProductsPage(BasePage):
    def __init__(self, page: Page, base_url: str = None, timeout: float = None,
                 locators: ProductsLocators = PRODUCTS_LOCATORS):
        super().__init__(page, base_url, timeout)
        self.locators = locators

    # ================= 页面行为 =================
    def open(self):
        self.navigate_to(f"{self.base_url}/inventory.html")
        self.locate(self.locators.item_product, "product card")

    def is_on_products_page(self) -> bool:
        on_page = (self.is_visible(self.locators.page_title)
                   and self.is_visible(self.locators.inventory_container)
                   and "inventory.html" in self.current_url())
        if not on_page:
            logger.warning("❌ We may not be on the products page")
        return on_page

    def add_product_by_name(self, name: str):
        """按名称精确匹配加购，购物车角标 +1 才算成功"""
        before = self.cart_item_count()
        product = next((p for p in self.all_products() if p.name == name), None)
        if product is None:
            raise ItemNotFoundError(name, "products page")

        self.click(Selector.by_id(product.button_id), f"add to cart button for {name}")
        self.wait_for_cart_count(before + 1)
        logger.info(f"🛒 Added to cart: {name} ({product.price_text})")

    def add_products(self, names: Iterable[str]):
        for name in names:
            self.add_product_by_name(name)

    def remove_product_by_name(self, name: str):
        """在列表页把已加购商品移除（按钮从 Remove 变回 Add to cart）"""
        before = self.cart_item_count()
        product = next((p for p in self.all_products() if p.name == name), None)
        if product is None or not product.button_id.startswith("remove"):
            raise ItemNotFoundError(name, "cart (products page)")

        self.click(Selector.by_id(product.button_id), f"remove button for {name}")
        self.wait_for_cart_count(before - 1)

    def sort_by(self, mode: Union[SortMode, str]):
        """选择排序方式，然后轮询直到列表真正按该方式排好"""
        mode = SortMode(mode)
        self.locate(self.locators.product_sort_type, "sort dropdown").select_option(value=mode.value)
        self.wait_until(lambda: self._is_sorted(mode), f"products not sorted by {mode.name}")
        logger.info(f"📊 Products sorted by: {mode.name}")

    def go_to_cart(self):
        self.click(self.locators.shopping_cart_link, "shopping cart")
        self.wait_url(URL_PATTERNS["cart"])

    def logout(self):
        self.click(self.locators.menu_button, "menu button")
        self.wait_visible(self.locators.logout_link, "logout link")
        self.click(self.locators.logout_link, "logout link")
        self.wait_visible(LOGIN_LOCATORS.login_button, "login button")

    # ================= 数据获取 =================
    def all_products(self) -> list[Product]:
        """逐个读取商品卡片；单张卡片解析失败只记日志并跳过"""
        self.locate(self.locators.item_product, "product card")
        cards = self._locator(self.locators.item_product)
        products = []
        for i in range(cards.count()):
            card = cards.nth(i)
            try:
                price_text = self._child(card, self.locators.item_product_price).inner_text()
                products.append(Product(
                    index=i,
                    name=self._child(card, self.locators.item_product_name).inner_text(),
                    price=parse_price(price_text),
                    price_text=price_text,
                    description=self._child(card, self.locators.item_product_desc).inner_text(),
                    button_id=self._child(card, self.locators.item_button).get_attribute("id") or ""))
            except (PlaywrightError, ValueError) as e:
                logger.warning(f"❌ Error reading product {i + 1}: {e}")
        logger.debug(f"📦 Gathered {len(products)} products")
        return products

    def product_names(self) -> list[str]:
        return self.get_texts(self.locators.item_product_name)

    def product_prices(self) -> list[Decimal]:
        return [parse_price(p) for p in self.get_texts(self.locators.item_product_price)]

    def cart_item_count(self) -> int:
        """购物车角标数字，角标不显示即为 0"""
        if not self.is_visible(self.locators.shopping_cart_badge):
            return 0
        return int(self.read_text(self.locators.shopping_cart_badge, "cart badge"))

    def wait_for_cart_count(self, expected: int):
        self.wait_until(lambda: self.cart_item_count() == expected, f"Cart count did not reach {expected}")

    def most_expensive_product(self) -> Product:
        return max(self.all_products(), key=lambda p: p.price)

    def cheapest_product(self) -> Product:
        return min(self.all_products(), key=lambda p: p.price)

    def _sort_keys(self, mode: SortMode) -> list:
        return self.product_prices() if mode.by_price else self.product_names()

    def _is_sorted(self, mode: SortMode) -> bool:
        values = self._sort_keys(mode)
        return bool(values) and values == sorted(values, reverse=mode.descending)

    # ========== 基础校验 ==========
    def verify_sorted(self, mode: Union[SortMode, str]):
        mode = SortMode(mode)
        values = self._sort_keys(mode)
        if mode.descending:
            InventoryAssert.sort_desc(values)
        else:
            InventoryAssert.sort_asc(values)
