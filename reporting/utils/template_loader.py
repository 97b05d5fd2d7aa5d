import re
from functools import lru_cache
from pathlib import Path

REPORTING_DIR = Path(__file__).resolve().parent.parent
# 资源类型 -> reporting/ 下的目录
ASSET_DIRS = {"template": "templates", "style": "styles", "script": "scripts"}
PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


@lru_cache(maxsize=None)
def read_asset(kind: str, name: str) -> str:
    """每个测试项都会用到行模板，读一次后缓存"""
    return (REPORTING_DIR / ASSET_DIRS[kind] / name).read_text(encoding="utf-8")


def fill(template: str, **values) -> str:
    """一次性把 {{key}} 占位符替换成对应的值；替换进来的内容不会被再次展开"""
    return PLACEHOLDER.sub(lambda m: str(values[m.group(1)]) if m.group(1) in values else m.group(0), template)


def render_template(name: str, /, **values) -> str:
    return fill(read_asset("template", name), **values)
