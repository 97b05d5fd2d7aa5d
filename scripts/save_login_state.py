from pathlib import Path

from loguru import logger

from config.settings import Settings, load_settings
from data.login_data import LOGIN_SUCCESS_URL, SAVE_LOGIN_STATE_FILE, SAVE_LOGIN_STATE_PATH
from pages.login_page import LoginPage
from utils.browser_session import close_session, open_session


def save_login_state(settings: Settings = None, user: str = "standard") -> Path:
    """生成登录态
        单独执行该脚本命令：python -m scripts.save_login_state
    """
    settings = settings or load_settings()
    credentials = settings.user(user)
    login_path = Path(SAVE_LOGIN_STATE_PATH) / SAVE_LOGIN_STATE_FILE

    session = open_session(settings=settings)
    try:
        login_page = LoginPage(session.page, settings.base_url, settings.default_timeout)
        login_page.open()
        login_page.login(credentials.username, credentials.password)
        login_page.wait_url(LOGIN_SUCCESS_URL)

        login_path.parent.mkdir(parents=True, exist_ok=True)  # 确保storage目录一直存在
        session.context.storage_state(path=str(login_path))  # 保存登录态到login.json
    finally:
        close_session(session)

    # 再次校验文件
    if not login_path.exists() or login_path.stat().st_size == 0:
        raise RuntimeError("‼️ login.json生成失败，请检查浏览器或账号")
    logger.info(f"✅ login.json 已生成 -> {login_path}")
    return login_path


if __name__ == "__main__":
    save_login_state()
