"""
内存版 SauceDemo + 最小化的 Playwright Page / Locator 替身。
每次查询都会根据当前状态重新渲染 DOM，模拟 React 重渲染；
lag > 0 时点击/排序等动作要经过若干次 wait_for_timeout 才生效，用于验证轮询等待。
"""
import re
from decimal import Decimal
from pathlib import Path

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

BASE_URL = "https://fake.saucedemo.test"
PASSWORD = "secret_sauce"
VALID_USERS = ("standard_user", "problem_user", "performance_glitch_user")
LOCKED_USER = "locked_out_user"

CATALOG = [
    ("Sauce Labs Backpack", "29.99"),
    ("Sauce Labs Bike Light", "9.99"),
    ("Sauce Labs Bolt T-Shirt", "15.99"),
    ("Sauce Labs Fleece Jacket", "49.99"),
    ("Sauce Labs Onesie", "7.99"),
    ("Test.allTheThings() T-Shirt (Red)", "15.99"),
]

COMPLETE_TEXT = "Your order has been dispatched, and will arrive just as fast as the pony can get there!"

_ATTR = re.compile(r"^\[([\w-]+)(\^?=)'(.*)'\]$")
_CLASS = re.compile(r"^\.([\w-]+)$")
_TAG = re.compile(r"^([a-z]+)$")


def slug(name: str) -> str:
    return name.lower().replace(" ", "-")


class FakeElement:
    def __init__(self, tag="div", text="", children=None, visible=True, enabled=True, on_click=None, **attrs):
        self.tag = tag
        self.text = text
        self.children = children or []
        self.visible = visible
        self.enabled = enabled
        self.on_click = on_click
        self.attrs = {k.rstrip("_").replace("_", "-"): v for k, v in attrs.items()}

    def matches(self, selector: str) -> bool:
        m = _ATTR.match(selector)
        if m:
            attr, op, value = m.groups()
            actual = self.attrs.get(attr)
            if actual is None:
                return False
            return actual.startswith(value) if op == "^=" else actual == value
        m = _CLASS.match(selector)
        if m:
            return m.group(1) in self.attrs.get("class", "").split()
        m = _TAG.match(selector)
        if m:
            return self.tag == m.group(1)
        raise ValueError(f"fake DOM does not support selector {selector!r}")

    def query(self, selector: str) -> list:
        found = []
        for child in self.children:
            if child.matches(selector):
                found.append(child)
            found.extend(child.query(selector))
        return found


class FakeLocator:
    def __init__(self, page, resolve, description):
        self._page = page
        self._resolve = resolve
        self._description = description

    def _one(self) -> FakeElement:
        elements = self._resolve()
        if not elements:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self._description}")
        return elements[0]

    @property
    def first(self):
        return self.nth(0)

    def nth(self, index: int):
        return FakeLocator(self._page, lambda: self._resolve()[index:index + 1], f"{self._description} >> nth={index}")

    def locator(self, selector: str):
        return FakeLocator(self._page, lambda: [c for e in self._resolve() for c in e.query(selector)],
                           f"{self._description} >> {selector}")

    def count(self) -> int:
        return len(self._resolve())

    def wait_for(self, state="visible", timeout=None):
        self._page.store.flush()
        elements = self._resolve()
        reached = {
            "attached": bool(elements),
            "detached": not elements,
            "visible": bool(elements) and elements[0].visible,
            "hidden": not elements or not elements[0].visible,
        }[state]
        if not reached:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms waiting for {self._description} to be {state}")

    def is_visible(self) -> bool:
        elements = self._resolve()
        return bool(elements) and elements[0].visible

    def is_enabled(self, timeout=None) -> bool:
        return self._one().enabled

    def scroll_into_view_if_needed(self):
        self._one()

    def click(self):
        element = self._one()
        self._page.clicks.append(element.attrs.get("id") or element.attrs.get("class", element.tag))
        if element.on_click and not self._page.store.frozen:
            element.on_click()

    def clear(self):
        self._page.store.inputs[self._one().attrs["id"]] = ""

    def fill(self, text: str):
        self._page.store.inputs[self._one().attrs["id"]] = text

    def inner_text(self) -> str:
        return self._one().text

    def all_inner_texts(self) -> list:
        return [e.text for e in self._resolve()]

    def get_attribute(self, name: str):
        return self._one().attrs.get(name)

    def select_option(self, value=None):
        self._one()
        self._page.store.defer(lambda: self._page.store.sort(value))
        return [value]


class FakeStore:
    """SauceDemo 的业务状态 + 渲染"""

    def __init__(self, lag: int = 0):
        self.lag = lag
        self.frozen = False  # True 时所有点击都不生效
        self.path = "about:blank"
        self.user = None
        self.login_error = None
        self.checkout_error = None
        self.menu_open = False
        self.cart = []
        self.order = [name for name, _ in CATALOG]
        self.prices = dict(CATALOG)
        self.inputs = {}
        self.malformed = set()  # 这些商品的价格渲染成无法解析的文本
        self._pending = []

    # ========= 时间 =========
    def defer(self, action):
        if self.lag:
            self._pending.append([self.lag, action])
        else:
            action()

    def tick(self):
        due = []
        for entry in self._pending:
            entry[0] -= 1
            if entry[0] <= 0:
                due.append(entry)
        for entry in due:
            self._pending.remove(entry)
            entry[1]()

    def flush(self):
        while self._pending:
            self._pending.pop(0)[1]()

    # ========= 路由 =========
    def navigate(self, path: str):
        self.menu_open = False
        self.login_error = None
        self.checkout_error = None
        if path not in ("/", "") and self.user is None:
            path = "/"
        self.path = path or "/"

    def login(self):
        username = self.inputs.get("user-name", "")
        password = self.inputs.get("password", "")
        if not username:
            self.login_error = "Epic sadface: Username is required"
        elif not password:
            self.login_error = "Epic sadface: Password is required"
        elif username == LOCKED_USER and password == PASSWORD:
            self.login_error = "Epic sadface: Sorry, this user has been locked out."
        elif username in VALID_USERS and password == PASSWORD:
            self.user = username
            self.navigate("/inventory.html")
        else:
            self.login_error = "Epic sadface: Username and password do not match any user in this service"

    def logout(self):
        self.user = None
        self.cart = []
        self.navigate("/")

    def sort(self, mode: str):
        keys = {
            "az": (lambda n: n, False),
            "za": (lambda n: n, True),
            "lohi": (lambda n: Decimal(self.prices[n]), False),
            "hilo": (lambda n: Decimal(self.prices[n]), True),
        }
        key, reverse = keys[mode]
        self.order = sorted(self.order, key=key, reverse=reverse)

    def toggle(self, name: str):
        if name in self.cart:
            self.cart.remove(name)
        else:
            self.cart.append(name)

    def continue_checkout(self):
        fields = [("first-name", "First Name"), ("last-name", "Last Name"), ("postal-code", "Postal Code")]
        for field_id, label in fields:
            if not self.inputs.get(field_id):
                self.checkout_error = f"Error: {label} is required"
                return
        self.navigate("/checkout-step-two.html")

    def _dismiss_checkout_error(self):
        self.checkout_error = None

    def finish(self):
        self.cart = []
        self.navigate("/checkout-complete.html")

    def subtotal(self) -> Decimal:
        return sum((Decimal(self.prices[n]) for n in self.cart), Decimal("0"))

    # ========= 渲染 =========
    def _later(self, action):
        return lambda: self.defer(action)

    def render(self) -> FakeElement:
        pages = {
            "/": self._login_page,
            "/inventory.html": self._inventory_page,
            "/cart.html": self._cart_page,
            "/checkout-step-one.html": self._step_one_page,
            "/checkout-step-two.html": self._step_two_page,
            "/checkout-complete.html": self._complete_page,
        }
        body = pages[self.path]() if self.path in pages else []
        return FakeElement("body", children=body)

    def _login_page(self):
        elements = [
            FakeElement(class_="login_logo", text="Swag Labs"),
            FakeElement("input", id="user-name"),
            FakeElement("input", id="password"),
            FakeElement("input", id="login-button", on_click=self.login),
            FakeElement(id="login_credentials",
                        text="Accepted usernames are:\nstandard_user\nlocked_out_user\n"
                             "problem_user\nperformance_glitch_user"),
        ]
        if self.login_error:
            elements.append(FakeElement("h3", text=self.login_error, data_test="error"))
        return elements

    def _header(self, title: str):
        elements = [
            FakeElement("button", id="react-burger-menu-btn", on_click=self._open_menu),
            FakeElement("a", id="logout_sidebar_link", visible=self.menu_open, on_click=self._later(self.logout)),
            FakeElement("a", class_="shopping_cart_link", on_click=lambda: self.navigate("/cart.html")),
            FakeElement("span", class_="title", text=title),
        ]
        if self.cart:
            elements.append(FakeElement("span", class_="shopping_cart_badge", text=str(len(self.cart))))
        return elements

    def _open_menu(self):
        self.menu_open = True

    def _price_text(self, name: str) -> str:
        return "N/A" if name in self.malformed else f"${self.prices[name]}"

    def _inventory_page(self):
        cards = []
        for name in self.order:
            in_cart = name in self.cart
            button_id = f"remove-{slug(name)}" if in_cart else f"add-to-cart-{slug(name)}"
            cards.append(FakeElement(class_="inventory_item", children=[
                FakeElement(class_="inventory_item_name", text=name),
                FakeElement(class_="inventory_item_desc", text=f"{name} description"),
                FakeElement(class_="inventory_item_price", text=self._price_text(name)),
                FakeElement("button", id=button_id, text="Remove" if in_cart else "Add to cart",
                            on_click=self._later(lambda n=name: self.toggle(n))),
            ]))
        return self._header("Products") + [
            FakeElement("select", class_="product_sort_container"),
            FakeElement(id="inventory_container", children=cards),
        ]

    def _cart_page(self):
        rows = [FakeElement(class_="cart_item", children=[
            FakeElement(class_="cart_quantity", text="1"),
            FakeElement(class_="inventory_item_name", text=name),
            FakeElement(class_="inventory_item_price", text=self._price_text(name)),
            FakeElement("button", id=f"remove-{slug(name)}", on_click=self._later(lambda n=name: self.toggle(n))),
        ]) for name in self.cart]
        return self._header("Your Cart") + [
            FakeElement(class_="cart_list", children=rows),
            FakeElement("button", id="continue-shopping", on_click=lambda: self.navigate("/inventory.html")),
            FakeElement("button", id="checkout", on_click=self._later(self._start_checkout)),
        ]

    def _start_checkout(self):
        self.inputs.update({"first-name": "", "last-name": "", "postal-code": ""})
        self.navigate("/checkout-step-one.html")

    def _step_one_page(self):
        elements = [FakeElement(class_="checkout_info", children=[
            FakeElement("input", id="first-name"),
            FakeElement("input", id="last-name"),
            FakeElement("input", id="postal-code"),
        ])]
        if self.checkout_error:
            elements.append(FakeElement("h3", text=self.checkout_error, data_test="error", children=[
                FakeElement("button", class_="error-button", data_test="error-button",
                            on_click=self._later(self._dismiss_checkout_error)),
            ]))
        return self._header("Checkout: Your Information") + elements + [
            FakeElement("input", id="continue", on_click=self._later(self.continue_checkout)),
            FakeElement("button", id="cancel", on_click=lambda: self.navigate("/cart.html")),
        ]

    def _step_two_page(self):
        subtotal = self.subtotal()
        tax = (subtotal * Decimal("0.08")).quantize(Decimal("0.01"))
        return self._header("Checkout: Overview") + [
            FakeElement(class_="summary_info", children=[
                FakeElement(class_="summary_subtotal_label", text=f"Item total: ${subtotal}"),
                FakeElement(class_="summary_tax_label", text=f"Tax: ${tax}"),
                FakeElement(class_="summary_total_label", text=f"Total: ${subtotal + tax}"),
            ]),
            FakeElement("button", id="finish", on_click=self._later(self.finish)),
        ]

    def _complete_page(self):
        return self._header("Checkout: Complete!") + [
            FakeElement("h2", class_="complete-header", text="Thank you for your order!"),
            FakeElement(class_="complete-text", text=COMPLETE_TEXT),
            FakeElement("button", id="back-to-products", on_click=lambda: self.navigate("/inventory.html")),
        ]


class FakePage:
    """只实现 page object 与诊断模块用到的 Page 接口"""

    def __init__(self, store: FakeStore = None, base_url: str = BASE_URL):
        self.store = store or FakeStore()
        self.base_url = base_url
        self.clicks = []
        self.screenshots = []
        self.handlers = {}
        self.waited_ms = 0

    @property
    def url(self) -> str:
        return self.store.path if self.store.path == "about:blank" else f"{self.base_url}{self.store.path}"

    def goto(self, url: str):
        self.store.navigate(url[len(self.base_url):] if url.startswith(self.base_url) else url)

    def title(self) -> str:
        return "Swag Labs"

    def content(self) -> str:
        return f"<html><body data-path='{self.store.path}'></body></html>"

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, lambda: self.store.render().query(selector), selector)

    def screenshot(self, path: str = None, full_page: bool = False):
        Path(path).write_bytes(b"\x89PNG fake")
        self.screenshots.append(path)

    def wait_for_timeout(self, ms):
        self.waited_ms += ms
        self.store.tick()

    def wait_for_url(self, pattern, timeout=None):
        self.store.flush()
        if not pattern.search(self.url):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms waiting for URL {pattern.pattern}")

    def on(self, event: str, handler):
        self.handlers.setdefault(event, []).append(handler)
