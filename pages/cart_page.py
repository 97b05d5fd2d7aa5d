from decimal import Decimal
from typing import Optional

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from assertions.cart_assert import CartAssert
from assertions.check_out_assert import CheckOutAssert
from config.locators import (CART_LOCATORS, CHECKOUT_LOCATORS, CartLocators,
                             CheckoutLocators, Selector)
from config.pages import URL_PATTERNS
from pages.base_page import BasePage
from pages.models import (CartItem, CheckoutInfo, CheckoutResult, CheckoutStage,
                          Completion, OrderSummary)
from utils.common_utils import parse_money, parse_price
from utils.exceptions import (CheckoutStateError, CheckoutValidationError,
                              ItemNotFoundError)


class CartPage(BasePage):
    """
    购物车页 + 结算流程。
    结算是单向状态机 CART → INFO_FORM → REVIEW → COMPLETE，
    IDLE 表示不在结算流程中（刚创建或已离开购物车页），只有确认停在购物车页后才能开始结算；
    在错误的阶段调用某一步会立即抛 CheckoutStateError，而不是傻等一个不会出现的页面。
    """

    def __init__(self, page: Page, base_url: str = None, timeout: float = None, stage_timeout: float = None,
                 locators: CartLocators = CART_LOCATORS, checkout_locators: CheckoutLocators = CHECKOUT_LOCATORS):
        super().__init__(page, base_url, timeout)
        self.locators = locators
        self.checkout_locators = checkout_locators
        # 阶段切换（等待下一屏出现）的等待上限
        self.stage_timeout = self.timeout if stage_timeout is None else stage_timeout
        self.stage = CheckoutStage.IDLE

    def _require(self, expected: CheckoutStage, action: str):
        if self.stage is not expected:
            raise CheckoutStateError(action, expected, self.stage)

    # ================= 购物车行为 =================
    def open(self):
        self.navigate_to(f"{self.base_url}/cart.html")
        self.locate(self.locators.cart_contents, "cart contents")
        self.stage = CheckoutStage.CART

    def is_on_cart_page(self) -> bool:
        return "cart.html" in self.current_url() and self.is_visible(self.locators.page_title)

    def remove_item_by_name(self, name: str):
        """点击 Remove 后轮询，直到该行从购物车中消失"""
        item = next((i for i in self.cart_items() if i.name == name), None)
        if item is None:
            raise ItemNotFoundError(name, "cart page")

        self.click(Selector.by_id(item.remove_button_id), f"remove button for {name}")
        self.wait_until(lambda: name not in self.item_names(), f"'{name}' still in cart")
        logger.info(f"🗑️ Removed from cart: {name}")

    def continue_shopping(self):
        self.click(self.locators.continue_shopping, "continue shopping button")
        self.wait_url(URL_PATTERNS["inventory"])
        self.stage = CheckoutStage.IDLE

    # ================= 数据获取 =================
    def cart_items(self) -> list[CartItem]:
        """读取购物车行；单行解析失败只记日志并跳过"""
        rows = self._locator(self.locators.cart_item)
        items = []
        for i in range(rows.count()):
            row = rows.nth(i)
            try:
                price_text = self._child(row, self.locators.item_price).inner_text()
                items.append(CartItem(
                    index=i,
                    name=self._child(row, self.locators.item_name).inner_text(),
                    price=parse_price(price_text),
                    price_text=price_text,
                    quantity=int(self._child(row, self.locators.item_quantity).inner_text()),
                    remove_button_id=self._child(row, self.locators.remove_button).get_attribute("id") or ""))
            except (PlaywrightError, ValueError) as e:
                logger.warning(f"❌ Error reading cart item {i + 1}: {e}")
        if not items:
            logger.debug("🛒 Cart is empty")
        return items

    def item_names(self) -> list[str]:
        return [item.name for item in self.cart_items()]

    def is_cart_empty(self) -> bool:
        return not self.cart_items()

    def calculate_expected_subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.cart_items()), Decimal("0"))

    # ================= 结算状态机 =================
    def proceed_to_checkout(self):
        if self.stage is CheckoutStage.IDLE and self.is_on_cart_page():
            self.stage = CheckoutStage.CART
        self._require(CheckoutStage.CART, "proceed to checkout")
        self.click(self.locators.checkout_button, "checkout button")
        self.wait_visible(self.checkout_locators.info_container, "checkout form",
                          stage=CheckoutStage.INFO_FORM.name, timeout=self.stage_timeout)
        self.stage = CheckoutStage.INFO_FORM

    def fill_checkout_info(self, info: CheckoutInfo):
        self._require(CheckoutStage.INFO_FORM, "fill checkout info")
        self.type_text(self.checkout_locators.first_name_input, info.first_name, "first name field")
        self.type_text(self.checkout_locators.last_name_input, info.last_name, "last name field")
        self.type_text(self.checkout_locators.postal_code_input, info.postal_code, "postal code field")
        logger.info(f"📝 Filled checkout info: {info.first_name} {info.last_name}, {info.postal_code}")

    def cancel_checkout(self):
        self._require(CheckoutStage.INFO_FORM, "cancel checkout")
        self.click(self.checkout_locators.cancel_button, "cancel button")
        self.wait_url(URL_PATTERNS["cart"])
        self.stage = CheckoutStage.CART

    def checkout_error_message(self) -> Optional[str]:
        return self.peek_text(self.checkout_locators.error_msg)

    def dismiss_checkout_error(self):
        if not self.probe(self.checkout_locators.error_msg).present:
            return
        self.click(self.checkout_locators.error_close_button, "error close button")
        self.wait_for_removal(self.checkout_locators.error_msg, "checkout error message")

    def continue_to_review(self):
        """
        表单校验失败时页面不会跳转：出现错误横幅即抛 CheckoutValidationError。
        上一次提交留下的横幅先关掉，之后出现的横幅才是这次点击的结果。
        """
        self._require(CheckoutStage.INFO_FORM, "continue to review")
        self.dismiss_checkout_error()
        self.click(self.checkout_locators.continue_button, "continue button")
        self.wait_until(lambda: (self.is_visible(self.checkout_locators.summary_container)
                                 or self.is_visible(self.checkout_locators.error_msg)),
                        "Order summary did not load", timeout=self.stage_timeout, stage=CheckoutStage.REVIEW.name)

        error = self.checkout_error_message()
        if error is not None:
            logger.warning(f"🚨 Checkout form rejected: {error}")
            raise CheckoutValidationError(error)
        self.stage = CheckoutStage.REVIEW

    def read_order_summary(self) -> OrderSummary:
        self._require(CheckoutStage.REVIEW, "read order summary")
        subtotal_text = self.read_text(self.checkout_locators.subtotal_label, "subtotal")
        tax_text = self.read_text(self.checkout_locators.tax_label, "tax")
        total_text = self.read_text(self.checkout_locators.total_label, "total")

        summary = OrderSummary(subtotal=parse_money(subtotal_text), tax=parse_money(tax_text),
                               total=parse_money(total_text), subtotal_text=subtotal_text,
                               tax_text=tax_text, total_text=total_text)
        logger.info(f"💰 Order Summary - Subtotal: ${summary.subtotal}, Tax: ${summary.tax}, Total: ${summary.total}")
        return summary

    def finish_order(self):
        self._require(CheckoutStage.REVIEW, "finish order")
        self.click(self.checkout_locators.finish_button, "finish button")
        self.wait_visible(self.checkout_locators.complete_header, "completion header",
                          stage=CheckoutStage.COMPLETE.name, timeout=self.stage_timeout)
        self.stage = CheckoutStage.COMPLETE

    def read_completion(self) -> Completion:
        self._require(CheckoutStage.COMPLETE, "read completion")
        return Completion(header=self.read_text(self.checkout_locators.complete_header, "completion header"),
                          text=self.read_text(self.checkout_locators.complete_text, "completion text"))

    def back_to_products(self):
        self._require(CheckoutStage.COMPLETE, "go back to products")
        self.click(self.checkout_locators.back_to_products, "back home button")
        self.wait_url(URL_PATTERNS["inventory"])
        self.stage = CheckoutStage.IDLE

    def complete_checkout(self, info: CheckoutInfo) -> CheckoutResult:
        logger.info("🛍️ Starting complete checkout process...")
        self.proceed_to_checkout()
        self.fill_checkout_info(info)
        self.continue_to_review()
        summary = self.read_order_summary()
        self.finish_order()
        completion = self.read_completion()
        logger.info("🎉 Full checkout process completed")
        return CheckoutResult(order_summary=summary, completion=completion)

    # ================= 基础验证 =================
    def verify_items(self, expected_names: list[str]):
        CartAssert.item_names(expected_names, [item.name for item in self.cart_items()])

    def verify_order_totals(self, summary: OrderSummary, expected_subtotal: Decimal):
        CheckOutAssert.price_close(summary.subtotal, expected_subtotal)
        CheckOutAssert.tax(summary.tax, expected_subtotal)
        CheckOutAssert.order_price(summary.subtotal, summary.tax, summary.total)
