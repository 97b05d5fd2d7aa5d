import json
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import allure
from loguru import logger
from playwright.sync_api import Page

from utils.common_utils import file_timestamp, sanitize

REPORTS_DIR = Path("reports")


def describe_error(error: Union[BaseException, str, None]) -> dict:
    """异常对象或 pytest longrepr 文本 -> {message, stack}"""
    if isinstance(error, BaseException):
        return {"message": str(error) or type(error).__name__,
                "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__))}
    text = str(error or "")
    return {"message": text.strip().splitlines()[-1] if text.strip() else "", "stack": text}


class DiagnosticCapture:
    """
    截图 + 失败证据收集。
    所有方法都是 best-effort：采集本身失败只记日志并返回 None，绝不向测试抛异常。
    """

    def __init__(self, page: Page, reports_dir: Path = REPORTS_DIR):
        self.page = page
        self.screenshots_dir = Path(reports_dir) / "screenshots"
        self.evidence_dir = Path(reports_dir) / "evidence"
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        self.evidence_dir.mkdir(parents=True, exist_ok=True)

    def take_screenshot(self, test_name: str, step: str = "screenshot", kind: str = "step") -> Optional[Path]:
        """文件名：<timestamp>_<testName>_<step>_<kind>.png"""
        try:
            path = self.screenshots_dir / f"{file_timestamp()}_{sanitize(test_name)}_{sanitize(step)}_{kind}.png"
            self.page.screenshot(path=str(path), full_page=True)
        except Exception as e:
            logger.error(f"❌ Failed to take screenshot: {e}")
            return None
        logger.debug(f"📸 Screenshot saved: {path.name}")
        return path

    def on_step(self, test_name: str, label: str) -> Optional[Path]:
        return self.take_screenshot(test_name, label, "step")

    def on_success(self, test_name: str) -> Optional[Path]:
        return self.take_screenshot(test_name, "SUCCESS", "success")

    def on_failure(self, test_name: str, error) -> Optional[dict]:
        logger.info("🔍 Capturing failure evidence...")
        try:
            screenshot = self.take_screenshot(test_name, "FAILURE", "failure")
            evidence = {
                "testName": test_name,
                "timestamp": datetime.now().isoformat(),
                "screenshotPath": str(screenshot) if screenshot else None,
                "error": describe_error(error),
                "browserState": {"url": self.page.url, "title": self.page.title()},
                "pageSource": self.page.content(),
                "consoleErrors": getattr(self.page, "_console_errors", []),
            }
            path = self.evidence_dir / f"failure_{int(time.time() * 1000)}_{sanitize(test_name)}.json"
            path.write_text(json.dumps(evidence, indent=2, ensure_ascii=False), encoding="utf-8")
            self._attach(screenshot, path, evidence["browserState"]["url"])
        except Exception as e:
            logger.error(f"❌ Failed to capture failure evidence: {e}")
            return None

        logger.info(f"📋 Failure evidence saved: {path.name} (URL at failure: {evidence['browserState']['url']})")
        return evidence

    @staticmethod
    def _attach(screenshot: Optional[Path], evidence_path: Path, url: str):
        # 在 Allure Report 的 Test Body 位置显示
        if screenshot and screenshot.exists():
            allure.attach.file(str(screenshot), name="Failure-Screenshot", attachment_type=allure.attachment_type.PNG)
        allure.attach(url, name="Page-Url", attachment_type=allure.attachment_type.TEXT)
        allure.attach.file(str(evidence_path), name="Failure-Evidence", attachment_type=allure.attachment_type.JSON)

    def cleanup_old_screenshots(self, days_to_keep: int = 7) -> int:
        threshold = time.time() - days_to_keep * 24 * 60 * 60
        deleted = 0
        try:
            for file in self.screenshots_dir.glob("*.png"):
                if file.stat().st_mtime < threshold:
                    file.unlink()
                    deleted += 1
        except OSError as e:
            logger.warning(f"ℹ️ Screenshot cleanup stopped early: {e}")
        logger.info(f"🗑️ Deleted {deleted} old screenshot files")
        return deleted
