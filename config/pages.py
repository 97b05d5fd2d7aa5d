import os

ENV = os.getenv("ENV", "prod")

_BASE_URLS = {
    "prod": "https://www.saucedemo.com",
}


def build_urls(base_url: str) -> dict:
    """各页面完整 URL"""
    base_url = base_url.rstrip("/")
    return {
        "login": f"{base_url}/",
        "inventory": f"{base_url}/inventory.html",
        "cart": f"{base_url}/cart.html",
        "step_one": f"{base_url}/checkout-step-one.html",
        "step_two": f"{base_url}/checkout-step-two.html",
        "complete": f"{base_url}/checkout-complete.html",
    }


URLS = {env: build_urls(url) for env, url in _BASE_URLS.items()}

BASE_URL = os.getenv("BASE_URL", _BASE_URLS.get(ENV, _BASE_URLS["prod"])).rstrip("/")

# 页面 URL 匹配片段，用于 wait_url
URL_PATTERNS = {
    "inventory": r"/inventory\.html",
    "cart": r"/cart\.html",
    "step_one": r"/checkout-step-one\.html",
    "step_two": r"/checkout-step-two\.html",
    "complete": r"/checkout-complete\.html",
}
