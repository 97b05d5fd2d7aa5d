from dataclasses import dataclass
from typing import Optional

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from config.settings import SUPPORTED_BROWSERS, Settings, load_settings
from utils.exceptions import ConfigurationError

# chrome 走 Playwright 自带的 chromium
ENGINES = {"chrome": "chromium", "chromium": "chromium", "firefox": "firefox", "webkit": "webkit"}

# chromium 稳定性参数
CHROMIUM_ARGS = ["--no-sandbox", "--disable-dev-shm-usage", "--disable-gpu"]

VIEWPORT = {"width": 1920, "height": 1080}


@dataclass
class BrowserSession:
    """一个测试独占的一个浏览器进程"""
    kind: str
    headless: bool
    timeout: float
    playwright: Optional[Playwright] = None
    browser: Optional[Browser] = None
    context: Optional[BrowserContext] = None
    page: Optional[Page] = None
    closed: bool = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        close_session(self)


def open_session(kind: str = None, headless: bool = None, settings: Settings = None,
                 storage_state: str = None) -> BrowserSession:
    settings = settings or load_settings()
    kind = (kind or settings.browser).strip().lower()
    if kind not in SUPPORTED_BROWSERS:
        raise ConfigurationError(f"Unsupported browser: {kind!r} (supported: {', '.join(SUPPORTED_BROWSERS)})")
    headless = settings.headless if headless is None else headless
    engine = ENGINES[kind]

    session = BrowserSession(kind=kind, headless=headless, timeout=settings.default_timeout)
    logger.info(f"🚀 Starting {kind} browser (headless={headless})")
    try:
        session.playwright = sync_playwright().start()
        session.browser = getattr(session.playwright, engine).launch(
            headless=headless, args=CHROMIUM_ARGS if engine == "chromium" else [])
        session.context = session.browser.new_context(viewport=VIEWPORT, storage_state=storage_state)
        # 相当于隐式等待：Playwright 单个动作的默认超时
        session.context.set_default_timeout(settings.timeouts.implicit)
        session.context.set_default_navigation_timeout(settings.timeouts.page_load)
        session.page = session.context.new_page()
    except Exception:
        logger.error(f"❌ Failed to start {kind} browser")
        close_session(session)
        raise

    logger.info("✅ Browser started")
    return session


def close_session(session: BrowserSession):
    """
    无条件释放浏览器资源。清理失败只记日志，不能掩盖测试本身的结果。
    重复调用是 no-op。
    """
    if session is None or session.closed:
        return
    session.closed = True

    steps = [
        ("page", session.page, lambda: session.page.close()),
        ("context", session.context, lambda: session.context.close()),
        ("browser", session.browser, lambda: session.browser.close()),
        ("playwright", session.playwright, lambda: session.playwright.stop()),
    ]
    for name, resource, close in steps:
        if resource is None:
            continue
        try:
            close()
        except Exception as e:
            logger.warning(f"⚠️ Error closing {name}: {e}")
    logger.info("🔚 Browser closed")
