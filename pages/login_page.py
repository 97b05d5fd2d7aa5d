from typing import Optional

from loguru import logger
from playwright.sync_api import Page

from assertions.login_assert import LoginAssert
from config.locators import LOGIN_LOCATORS, LoginLocators
from pages.base_page import BasePage
from utils.exceptions import PageLoadError


class LoginPage(BasePage):
    def __init__(self, page: Page, base_url: str = None, timeout: float = None,
                 locators: LoginLocators = LOGIN_LOCATORS):
        super().__init__(page, base_url, timeout)
        self.locators = locators

    # ================= 页面行为 =================
    def open(self):
        """打开登录页；登录按钮不可见说明页面没加载成功，尽早失败"""
        self.navigate_to(f"{self.base_url}/")
        if not self.is_visible(self.locators.login_button):
            raise PageLoadError("Login page did not load correctly")
        logger.info("✅ Login page loaded")

    def enter_username(self, username: str):
        self.type_text(self.locators.username_input, username, "username field")

    def enter_password(self, password: str):
        logger.debug(f"🔒 Entering password: {'*' * len(password)}")
        self.type_text(self.locators.password_input, password, "password field")

    def click_login_button(self):
        self.click(self.locators.login_button, "login button")

    def login(self, username: str, password: str):
        logger.info(f"🔐 Performing login for user: {username}")
        self.enter_username(username)
        self.enter_password(password)
        self.click_login_button()

    # ================= 数据获取 =================
    def error_message(self) -> Optional[str]:
        """错误横幅文字；没有横幅时返回 None 而不是抛异常"""
        return self.peek_text(self.locators.error_msg)

    def is_on_login_page(self) -> bool:
        return self.is_visible(self.locators.login_button)

    def available_usernames(self) -> list[str]:
        """解析页面上的 “Accepted usernames” 提示块"""
        if not self.is_visible(self.locators.credentials_hint):
            logger.info("ℹ️ Could not read usernames from page")
            return []
        text = self.read_text(self.locators.credentials_hint, "usernames list")
        return [line.strip() for line in text.split("\n") if "_user" in line]

    # ========== 登录校验 ==========
    def verify_login_fail(self, expect_msg: str):
        LoginAssert.error_message(self.error_message(), expect_msg)
