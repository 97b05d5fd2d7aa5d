import re
from decimal import Decimal

from utils.common_utils import MONEY_TOLERANCE, within_tolerance

TAX_RATE = Decimal("0.08")


class CheckOutAssert:

    @staticmethod
    def tips_message(actual_msg, expect_msg: str):
        """收件人为空，点击continue按钮"""
        assert actual_msg and expect_msg in actual_msg, f"预期提示信息：{expect_msg}，不存在于{actual_msg}"

    @staticmethod
    def price_format(price: str):
        """只关心price格式，不关心具体 label 文案"""
        assert re.match(r"^[A-Za-z ]+: \$\d+(\.\d{2})$", price), f"价格格式错误：{price}"

    @staticmethod
    def price_close(actual: Decimal, expect: Decimal, tolerance: Decimal = MONEY_TOLERANCE):
        assert within_tolerance(actual, expect, tolerance), f"预期价格：{expect}!={actual}（容差{tolerance}）"

    @staticmethod
    def tax(tax: Decimal, subtotal: Decimal):
        expect = subtotal * TAX_RATE
        assert within_tolerance(tax, expect), f"税费{tax}!=商品总价{subtotal}的8%（{expect}）"

    @staticmethod
    def order_price(item_price: Decimal, tax: Decimal, order_price: Decimal):
        """订单总价 = 商品总价 + 税费"""
        expect = item_price + tax
        assert within_tolerance(order_price, expect), f"实际总金额{order_price}!=预期总金额{expect}"
