import dataclasses
import os
import shutil
import time
from pathlib import Path

import pytest
from loguru import logger

from config.settings import Settings, load_settings
from data.login_data import SAVE_LOGIN_STATE_FILE, SAVE_LOGIN_STATE_PATH
from pages.cart_page import CartPage
from pages.login_page import LoginPage
from pages.products_page import ProductsPage
from reporting.report_generator import render
from reporting.results import RunResults, TestResult
from scripts.save_login_state import save_login_state
from utils.browser_session import close_session, open_session
from utils.data_reader import DataReader
from utils.diagnostics import REPORTS_DIR, DiagnosticCapture
from utils.logger import setup_logging


# ================== 命令行参数 / 初始化 ==================
def pytest_addoption(parser):
    group = parser.getgroup("saucedemo")
    group.addoption("--browser-kind", action="store", default=None,
                    help="chrome / chromium / firefox / webkit，默认读取 BROWSER 环境变量")
    group.addoption("--show-browser", action="store_true", default=False, help="有界面模式运行浏览器")
    group.addoption("--summary-report", action="store_true", default=False,
                    help="测试结束后在 reports/ 下生成 HTML 汇总报告")


def pytest_configure(config):
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    config._run_results = RunResults()
    config._run_started = time.time()


# ================== Session Fixtures ==================
@pytest.fixture(scope="session")
def settings(request) -> Settings:
    """环境变量 + 命令行参数，整个 session 只读取一次"""
    cfg = load_settings()
    kind = request.config.getoption("--browser-kind")
    if kind:
        cfg = dataclasses.replace(cfg, browser=kind.strip().lower())
    if request.config.getoption("--show-browser"):
        cfg = dataclasses.replace(cfg, headless=False)
    request.config._settings = cfg
    return cfg


@pytest.fixture(scope="session")
def data_reader() -> DataReader:
    return DataReader()


@pytest.fixture(scope="session")
def clean_artifacts():
    """UI 测试开始前，清空上一次的截图和失败证据"""
    for path in [REPORTS_DIR / "screenshots", REPORTS_DIR / "evidence"]:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True)


@pytest.fixture(scope="session")
def login_state(settings) -> Path:
    """确保 login.json 存在且有效"""
    login_file = Path(SAVE_LOGIN_STATE_PATH) / SAVE_LOGIN_STATE_FILE
    if not login_file.exists() or login_file.stat().st_size == 0:
        logger.info("🔐 login.json不存在或无效，重新生成")
        return save_login_state(settings)
    logger.info("✅ login.json已存在且有效，跳过生成")
    return login_file


# ================== Function Fixtures ==================
@pytest.fixture(scope="function")
def browser_session(settings, clean_artifacts, request):
    """每个测试一个独立浏览器进程，结束后无条件关闭"""
    need_login = request.node.get_closest_marker("need_login") is not None
    storage_state = str(request.getfixturevalue("login_state")) if need_login else None

    session = open_session(settings=settings, storage_state=storage_state)
    try:
        yield session
    finally:
        close_session(session)


@pytest.fixture(scope="function")
def page(browser_session):
    page = browser_session.page
    console_error = []  # 所有console.error都会被收集

    page.on(
        "console",
        lambda msg: console_error.append({
            "type": msg.type,
            "text": msg.text,
            "location": str(msg.location)
        }) if msg.type == "error" else None
    )
    page._console_errors = console_error  # 挂到page上，方便hook里取
    return page


@pytest.fixture(scope="function")
def diagnostics(page) -> DiagnosticCapture:
    return DiagnosticCapture(page)


@pytest.fixture(scope="function")
def login_page(page, settings) -> LoginPage:
    return LoginPage(page, settings.base_url, settings.default_timeout)


@pytest.fixture(scope="function")
def products_page(page, settings) -> ProductsPage:
    return ProductsPage(page, settings.base_url, settings.default_timeout)


@pytest.fixture(scope="function")
def cart_page(page, settings) -> CartPage:
    return CartPage(page, settings.base_url, settings.default_timeout, stage_timeout=settings.stage_timeout)


# ================== Pytest Hook：结果收集 + 失败处理 ==================
def _suite_name(item) -> str:
    module = item.module.__name__.split(".")[-1] if item.module else "no_module"
    return f"{module}::{item.cls.__name__}" if item.cls else module


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    - call 阶段的结果记入 RunResults
    - setup 阶段失败/跳过也记入
    - UI 用例失败时自动保存截图、URL、页面源码
    """
    outcome = yield
    rep = outcome.get_result()

    if rep.when == "call" or (rep.when == "setup" and not rep.passed):
        result = TestResult(name=item.name, status=rep.outcome, duration_ms=int(rep.duration * 1000),
                            error=rep.longreprtext if rep.failed else None)
        item.config._run_results.add(_suite_name(item), result)
    else:
        return

    if rep.when != "call" or not rep.failed:
        return
    page = item.funcargs.get("page")
    if page is None:
        return
    evidence = DiagnosticCapture(page).on_failure(item.name, rep.longreprtext)
    if evidence and evidence["screenshotPath"]:
        result.screenshot = evidence["screenshotPath"]


def pytest_sessionfinish(session, exitstatus):
    config = session.config
    if not config.getoption("--summary-report"):
        return
    results = config._run_results
    results.duration_ms = int((time.time() - config._run_started) * 1000)
    render(results, getattr(config, "_settings", None) or Settings())
