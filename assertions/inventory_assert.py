from collections import Counter

from pages.models import Product
from utils.common_utils import parse_price

PRICE_EXPONENT = -2  # 页面价格统一显示两位小数


class InventoryAssert:

    @staticmethod
    def catalog(products: list[Product], expect_count: int):
        """商品数量正确，且每张卡片的名称、描述都不为空"""
        assert len(products) == expect_count, f"期望商品数量：{expect_count}，实际商品数量：{len(products)}"
        blank = [p.index for p in products if not p.name.strip() or not p.description.strip()]
        assert not blank, f"第 {blank} 个商品名称或描述为空"

    @staticmethod
    def prices(products: list[Product]):
        """价格文本能按 $ 前缀解析、保留两位小数，并与解析出的 Decimal 一致且大于 0"""
        assert products, "商品列表为空"
        for product in products:
            try:
                value = parse_price(product.price_text)
            except ValueError as e:
                raise AssertionError(f"{product.name} 价格格式错误：{e}") from None
            assert value.as_tuple().exponent == PRICE_EXPONENT, f"{product.name} 价格不是两位小数：{product.price_text}"
            assert value == product.price, f"{product.name} 价格解析不一致：{product.price_text} != {product.price}"
            assert value > 0, f"{product.name} 价格必须大于 0：{product.price_text}"

    @staticmethod
    def same_items(before: list, after: list):
        """排序前后是同一批商品（排列关系）"""
        assert Counter(before) == Counter(after), f"排序后商品集合发生变化：{before} -> {after}"

    @staticmethod
    def sort_asc(values: list):
        assert values == sorted(values), f"未按正序排列：{values}"

    @staticmethod
    def sort_desc(values: list):
        assert values == sorted(values, reverse=True), f"未按倒序排列：{values}"
