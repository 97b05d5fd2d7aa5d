import os
from datetime import datetime
from html import escape
from pathlib import Path

from loguru import logger

from config.settings import Settings
from reporting.renderers.suite_view import format_duration, render_suites
from reporting.renderers.summary_view import render_environment, render_screenshots, render_summary
from reporting.results import RunResults
from reporting.utils.template_loader import read_asset, render_template

REPORTS_DIR = Path("reports")


def build_html(results: RunResults, config: Settings, output_dir: Path) -> str:
    """纯函数：结果 + 配置 -> 自包含的 HTML 文本"""

    def link(path) -> str:
        try:
            return Path(os.path.relpath(Path(path).resolve(), Path(output_dir).resolve())).as_posix()
        except ValueError:
            return Path(path).as_posix()

    return render_template("report.html",
                           date=results.started_at.strftime("%Y-%m-%d"),
                           timestamp=escape(results.started_at.strftime("%Y-%m-%d %H:%M:%S")),
                           duration=format_duration(results.duration_ms),
                           styles=read_asset("style", "report.css"),
                           script=read_asset("script", "report.js"),
                           summary=render_summary(results),
                           environment=render_environment(config),
                           suites=render_suites(list(results.suites.values()), link),
                           screenshots=render_screenshots(results.screenshots(), link))


def render(results: RunResults, config: Settings, output_dir: Path = REPORTS_DIR) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / f"test-report-{datetime.now().strftime('%Y-%m-%dT%H-%M-%S-%f')}.html"
    report_path.write_text(build_html(results, config, output_dir), encoding="utf-8")
    logger.info(f"✅ Test report generated: {report_path}")
    return report_path
