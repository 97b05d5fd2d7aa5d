"""inventory / cart 功能测试数据"""
from decimal import Decimal

PRODUCT_COUNT = 6  # 商品列表页商品总数

# 加购商品，名称必须与页面完全一致
ADD_PRODUCTS = ["Sauce Labs Backpack", "Sauce Labs Bike Light", "Sauce Labs Onesie"]
DELETE_PRODUCT = "Sauce Labs Bike Light"

# 下单金额场景：Backpack $29.99 + Bike Light $9.99
ORDER_PRODUCTS = ["Sauce Labs Backpack", "Sauce Labs Bike Light"]
ORDER_SUBTOTAL = Decimal("39.98")
ORDER_TAX = Decimal("3.1984")
ORDER_TOTAL = Decimal("43.1784")
