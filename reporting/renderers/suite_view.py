from html import escape

from reporting.results import FAILED, PASSED, SuiteResult, TestResult
from reporting.utils.template_loader import render_template

STATUS_ICONS = {PASSED: "✅", FAILED: "❌"}


def format_duration(ms) -> str:
    if not ms:
        return "0ms"
    if ms < 1000:
        return f"{ms}ms"
    if ms < 60000:
        return f"{ms / 1000:.1f}s"
    minutes, rest = divmod(ms, 60000)
    return f"{int(minutes)}m {rest / 1000:.0f}s"


def render_test_item(test: TestResult, link) -> str:
    error_html = ""
    if test.error:
        error_html = f'<div class="test-error"><strong>Error:</strong><pre>{escape(test.error)}</pre></div>'
    screenshot_html = ""
    if test.screenshot:
        href = escape(link(test.screenshot))
        screenshot_html = (f'<div class="test-screenshot"><a href="{href}" target="_blank">'
                           f'<img src="{href}" alt="Test screenshot" /></a></div>')

    return render_template("test_item.html",
                           status=escape(test.status),
                           icon=STATUS_ICONS.get(test.status, "⏭️"),
                           name=escape(test.name),
                           duration=format_duration(test.duration_ms),
                           error=error_html,
                           screenshot=screenshot_html)


def render_suites(suites: list[SuiteResult], link) -> str:
    """link: 把截图路径转换成报告内可用的相对链接"""
    if not suites:
        return '<p class="no-data">No test suite data available</p>'

    return "".join(
        render_template("suite.html",
                        index=index,
                        title=escape(suite.title),
                        passed=suite.passed,
                        failed=suite.failed,
                        tests="".join(render_test_item(t, link) for t in suite.tests))
        for index, suite in enumerate(suites))
