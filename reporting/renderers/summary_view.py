import platform
from html import escape

from config.settings import Settings
from reporting.results import RunResults
from reporting.utils.template_loader import render_template


def render_summary(results: RunResults) -> str:
    return render_template("summary.html",
                           total=results.total,
                           passed=results.passed,
                           failed=results.failed,
                           skipped=results.skipped,
                           pass_rate=results.pass_rate)


def render_environment(config: Settings) -> str:
    browser = config.browser + (" (headless)" if config.headless else "")
    return render_template("environment.html",
                           browser=escape(browser),
                           base_url=escape(config.base_url),
                           platform=escape(platform.platform()),
                           python=escape(platform.python_version()))


def render_screenshots(screenshots: list, link) -> str:
    if not screenshots:
        return ""
    items = "".join(
        f'<div class="screenshot-item"><a href="{escape(link(path))}" target="_blank">'
        f'<img src="{escape(link(path))}" alt="{escape(name)}" /></a><p>{escape(name)}</p></div>'
        for name, path in screenshots)
    return render_template("screenshots.html", items=items)
