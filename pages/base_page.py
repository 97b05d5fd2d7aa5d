import re
import time
from typing import Callable, Optional, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from config.locators import Selector
from config.pages import BASE_URL
from pages.models import ABSENT, Probe
from utils.exceptions import (ElementNotFoundError, ElementNotInteractableError,
                              WaitTimeoutError)

DEFAULT_TIMEOUT = 15.0  # 秒
POLL_INTERVAL_MS = 100

Target = Union[Selector, Locator, str]


class BasePage:
    """
    所有 page object 的同步原语。
    严格原语（locate / click / type_text / read_text）找不到元素直接抛异常；
    宽松原语（probe / is_visible / wait_for_removal）把“不存在”当作正常分支。
    """

    def __init__(self, page: Page, base_url: str = None, timeout: float = None):
        self.page = page
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout

    # ========= 定位 =========
    def _locator(self, target: Target) -> Locator:
        if isinstance(target, Selector):
            return self.page.locator(target.css)
        if isinstance(target, str):
            return self.page.locator(target)
        return target

    def _child(self, parent: Locator, target: Target) -> Locator:
        """卡片/行内的子元素；缺失时立即报错而不是等满超时"""
        child = parent.locator(target.css if isinstance(target, Selector) else target).first
        if child.count() == 0:
            raise ValueError(f"missing sub-element {target}")
        return child

    def _ms(self, timeout: float = None) -> float:
        return (self.timeout if timeout is None else timeout) * 1000

    def locate(self, target: Target, label: str = "element") -> Locator:
        """解析第一个匹配元素，超时抛 ElementNotFoundError"""
        element = self._locator(target).first
        try:
            element.wait_for(state="attached", timeout=self._ms())
        except PlaywrightTimeoutError:
            logger.error(f"❌ Could not find {label}")
            raise ElementNotFoundError(label, self.timeout) from None
        return element

    # ========= 基础动作 =========
    def navigate_to(self, url: str):
        logger.info(f"🌐 Navigating to: {url}")
        self.page.goto(url)

    def click(self, target: Target, label: str = "element"):
        """等待元素存在且可用后再点击"""
        element = self._locator(target).first

        def ready() -> bool:
            return element.count() > 0 and element.is_enabled(timeout=self._ms())

        try:
            self.wait_until(ready, f"{label} not clickable")
        except WaitTimeoutError:
            logger.error(f"❌ {label} not clickable within {self.timeout}s")
            raise ElementNotInteractableError(label, self.timeout) from None
        element.scroll_into_view_if_needed()
        element.click()
        logger.debug(f"👆 Clicked {label}")

    def type_text(self, target: Target, text: str, label: str = "field"):
        """清空后输入；不等待输入带来的副作用（如校验），调用方自行等待"""
        element = self.locate(target, label)
        element.clear()
        element.fill(text)

    def read_text(self, target: Target, label: str = "element") -> str:
        return self.locate(target, label).inner_text()

    def get_texts(self, target: Target) -> list[str]:
        locator = self._locator(target)
        return [locator.nth(i).inner_text() for i in range(locator.count())]

    # ========= 探测（不抛异常）=========
    def probe(self, target: Target) -> Probe:
        element = self._locator(target).first
        try:
            if element.count() == 0:
                return ABSENT
            return Probe(present=True, visible=element.is_visible())
        except PlaywrightError:
            # 元素在读取过程中被移除
            return ABSENT

    def is_visible(self, target: Target) -> bool:
        return self.probe(target).visible

    def peek_text(self, target: Target) -> Optional[str]:
        """读取可见元素的文字；不可见或读取前已被移除都返回 None"""
        try:
            if not self.is_visible(target):
                return None
            texts = self._locator(target).all_inner_texts()
        except PlaywrightError:
            return None
        return texts[0] if texts else None

    # ========= 等待 =========
    def wait_until(self, condition: Callable[[], bool], message: str, timeout: float = None, stage: str = None):
        """轮询条件直到为真；重渲染期间的 DOM 读取错误视为条件未满足"""
        timeout = self.timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout
        while True:
            try:
                if condition():
                    return
            except PlaywrightError:
                pass
            if time.monotonic() >= deadline:
                raise WaitTimeoutError(f"{message} within {timeout}s", stage=stage)
            self.page.wait_for_timeout(POLL_INTERVAL_MS)

    def wait_visible(self, target: Target, label: str = "element", stage: str = None, timeout: float = None):
        timeout = self.timeout if timeout is None else timeout
        try:
            self._locator(target).first.wait_for(state="visible", timeout=self._ms(timeout))
        except PlaywrightTimeoutError:
            raise WaitTimeoutError(f"{label} did not appear within {timeout}s", stage=stage) from None

    def wait_for_removal(self, target: Target, label: str = "element"):
        """等待元素脱离 DOM；元素本来就不存在时直接返回"""
        if not self.probe(target).present:
            logger.debug(f"ℹ️ {label} was not found or already gone")
            return
        try:
            self._locator(target).first.wait_for(state="detached", timeout=self._ms())
        except PlaywrightTimeoutError:
            raise WaitTimeoutError(f"{label} still attached after {self.timeout}s") from None
        logger.debug(f"✅ {label} disappeared")

    def wait_url(self, pattern: str):
        try:
            self.page.wait_for_url(re.compile(pattern), timeout=self._ms())
        except PlaywrightTimeoutError:
            raise WaitTimeoutError(f"URL did not match {pattern!r} (current: {self.page.url})") from None

    # ========= 辅助 =========
    def current_url(self) -> str:
        return self.page.url

    def page_title(self) -> str:
        return self.page.title()
