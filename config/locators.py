from dataclasses import dataclass


@dataclass(frozen=True)
class Selector:
    """声明式元素定位规则：按 id / css / 属性谓词"""
    strategy: str
    value: str
    attr: str = ""

    @classmethod
    def by_id(cls, value: str) -> "Selector":
        return cls("id", value)

    @classmethod
    def by_css(cls, value: str) -> "Selector":
        return cls("css", value)

    @classmethod
    def by_test(cls, value: str) -> "Selector":
        """data-test 属性等值匹配"""
        return cls("attr", value, attr="data-test")

    @classmethod
    def by_attr_prefix(cls, attr: str, prefix: str) -> "Selector":
        return cls("attr_prefix", prefix, attr=attr)

    @property
    def css(self) -> str:
        """转换成 Playwright 可用的 selector 字符串"""
        if self.strategy == "id":
            return f"[id='{self.value}']"
        if self.strategy == "attr":
            return f"[{self.attr}='{self.value}']"
        if self.strategy == "attr_prefix":
            return f"[{self.attr}^='{self.value}']"
        return self.value

    def __str__(self):
        return self.css


@dataclass(frozen=True)
class LoginLocators:
    username_input: Selector = Selector.by_id("user-name")  # 用户名
    password_input: Selector = Selector.by_id("password")  # 用户密码
    login_button: Selector = Selector.by_id("login-button")  # 登录按钮
    error_msg: Selector = Selector.by_test("error")  # 登录错误提示信息
    logo: Selector = Selector.by_css(".login_logo")
    login_container: Selector = Selector.by_id("login_button_container")
    credentials_hint: Selector = Selector.by_id("login_credentials")  # 页面上展示的可用用户名


@dataclass(frozen=True)
class ProductsLocators:
    page_title: Selector = Selector.by_css(".title")  # "Products" 标题
    inventory_container: Selector = Selector.by_id("inventory_container")
    item_product: Selector = Selector.by_css(".inventory_item")  # 商品卡片
    item_product_name: Selector = Selector.by_css(".inventory_item_name")  # 单商品名称
    item_product_price: Selector = Selector.by_css(".inventory_item_price")  # 单商品价格
    item_product_desc: Selector = Selector.by_css(".inventory_item_desc")  # 单商品描述
    item_button: Selector = Selector.by_css("button")  # 卡片内 add/remove 按钮
    add_product_button: Selector = Selector.by_attr_prefix("id", "add-to-cart")
    shopping_cart_link: Selector = Selector.by_css(".shopping_cart_link")  # 购物车icon
    shopping_cart_badge: Selector = Selector.by_css(".shopping_cart_badge")  # 购物车显示商品数量
    product_sort_type: Selector = Selector.by_css(".product_sort_container")  # 商品排序方式
    menu_button: Selector = Selector.by_id("react-burger-menu-btn")
    logout_link: Selector = Selector.by_id("logout_sidebar_link")


@dataclass(frozen=True)
class CartLocators:
    page_title: Selector = Selector.by_css(".title")  # "Your Cart"
    cart_contents: Selector = Selector.by_css(".cart_list")
    cart_item: Selector = Selector.by_css(".cart_item")
    item_name: Selector = Selector.by_css(".inventory_item_name")
    item_price: Selector = Selector.by_css(".inventory_item_price")
    item_quantity: Selector = Selector.by_css(".cart_quantity")
    remove_button: Selector = Selector.by_attr_prefix("id", "remove-")
    continue_shopping: Selector = Selector.by_id("continue-shopping")
    checkout_button: Selector = Selector.by_id("checkout")


@dataclass(frozen=True)
class CheckoutLocators:
    # 收货人信息 checkout-step-one
    info_container: Selector = Selector.by_css(".checkout_info")
    first_name_input: Selector = Selector.by_id("first-name")
    last_name_input: Selector = Selector.by_id("last-name")
    postal_code_input: Selector = Selector.by_id("postal-code")
    error_msg: Selector = Selector.by_test("error")  # Error: First Name is required
    error_close_button: Selector = Selector.by_test("error-button")  # 错误横幅右侧的 X
    continue_button: Selector = Selector.by_id("continue")
    cancel_button: Selector = Selector.by_id("cancel")

    # 订单确认 checkout-step-two
    summary_container: Selector = Selector.by_css(".summary_info")
    subtotal_label: Selector = Selector.by_css(".summary_subtotal_label")
    tax_label: Selector = Selector.by_css(".summary_tax_label")
    total_label: Selector = Selector.by_css(".summary_total_label")
    finish_button: Selector = Selector.by_id("finish")

    # 完成页面 checkout-complete
    complete_header: Selector = Selector.by_css(".complete-header")
    complete_text: Selector = Selector.by_css(".complete-text")
    back_to_products: Selector = Selector.by_id("back-to-products")


LOGIN_LOCATORS = LoginLocators()
PRODUCTS_LOCATORS = ProductsLocators()
CART_LOCATORS = CartLocators()
CHECKOUT_LOCATORS = CheckoutLocators()
