from collections import Counter


class CartAssert:

    @staticmethod
    def cart_badge_count(actual: int, expect: int):
        """购物车图标显示数字"""
        assert actual == expect, f"购物车角标显示的加购商品数量错误：{actual}!={expect}"

    @staticmethod
    def item_names(added: list[str], cart_names: list[str]):
        """加购商品与购物车页商品一致性对比（不关心顺序）"""
        assert Counter(added) == Counter(cart_names), f"已加购商品{added}，购物车页面商品{cart_names}"

    @staticmethod
    def item_absent(name: str, cart_names: list[str]):
        assert name not in cart_names, f"商品{name}已删除，但仍在购物车中：{cart_names}"
