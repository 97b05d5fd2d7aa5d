import os
from dataclasses import dataclass, field

from utils.exceptions import ConfigurationError

SUPPORTED_BROWSERS = ("chrome", "chromium", "firefox", "webkit")

# 四组内置账号，可通过 <NAME>_USERNAME / <NAME>_PASSWORD 覆盖
DEFAULT_USERS = {
    "standard": ("standard_user", "secret_sauce"),
    "locked": ("locked_out_user", "secret_sauce"),
    "problem": ("problem_user", "secret_sauce"),
    "performance": ("performance_glitch_user", "secret_sauce"),
}


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class Timeouts:
    """单位：毫秒"""
    default: int = 15000
    implicit: int = 10000
    explicit: int = 30000
    page_load: int = 60000


@dataclass(frozen=True)
class Settings:
    browser: str = "chrome"
    headless: bool = False
    base_url: str = "https://www.saucedemo.com"
    env: str = "prod"
    timeouts: Timeouts = field(default_factory=Timeouts)
    users: dict = field(default_factory=dict)

    @property
    def default_timeout(self) -> float:
        """page object 使用的默认超时（秒）"""
        return self.timeouts.default / 1000

    @property
    def stage_timeout(self) -> float:
        """结算流程等待下一屏出现的上限（秒），取 EXPLICIT_TIMEOUT"""
        return self.timeouts.explicit / 1000

    def user(self, name: str) -> Credentials:
        try:
            return self.users[name]
        except KeyError:
            raise ConfigurationError(f"Unknown test user: {name}") from None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_ms(name: str, value: str) -> int:
    try:
        ms = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer (ms), got {value!r}") from None
    if ms <= 0:
        raise ConfigurationError(f"{name} must be positive, got {ms}")
    return ms


def load_settings(environ=None) -> Settings:
    """启动时从环境变量读取一次配置，不做热加载"""
    environ = os.environ if environ is None else environ

    browser = environ.get("BROWSER", "chrome").strip().lower()
    if browser not in SUPPORTED_BROWSERS:
        raise ConfigurationError(f"Unsupported browser: {browser!r} (supported: {', '.join(SUPPORTED_BROWSERS)})")

    defaults = Timeouts()
    timeouts = Timeouts(
        default=_parse_ms("DEFAULT_TIMEOUT", environ.get("DEFAULT_TIMEOUT", str(defaults.default))),
        implicit=_parse_ms("IMPLICIT_TIMEOUT", environ.get("IMPLICIT_TIMEOUT", str(defaults.implicit))),
        explicit=_parse_ms("EXPLICIT_TIMEOUT", environ.get("EXPLICIT_TIMEOUT", str(defaults.explicit))),
        page_load=_parse_ms("PAGE_LOAD_TIMEOUT", environ.get("PAGE_LOAD_TIMEOUT", str(defaults.page_load))),
    )

    users = {}
    for name, (username, password) in DEFAULT_USERS.items():
        prefix = name.upper()
        users[name] = Credentials(environ.get(f"{prefix}_USERNAME", username),
                                  environ.get(f"{prefix}_PASSWORD", password))

    base_url = environ.get("BASE_URL", Settings.base_url).rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"BASE_URL must be an http(s) URL, got {base_url!r}")

    return Settings(
        browser=browser,
        headless=_parse_bool("HEADLESS", environ.get("HEADLESS", "") or str(bool(environ.get("CI")))),
        base_url=base_url,
        env=environ.get("ENV", "prod"),
        timeouts=timeouts,
        users=users,
    )
