"""login功能测试用例：错误提示类别与期望文案
用户名密码不匹配
账号被锁定
必填项为空
"""

LOGIN_ERRORS = {
    "invalid_credentials": "Username and password do not match any user in this service",
    "locked_out": "Sorry, this user has been locked out",
    "username_required": "Username is required",
    "password_required": "Password is required",
}

# 登录失败场景：(用户名, 密码, 错误类别)
LOGIN_FAIL_CASES = {
    "wrong_username": ("HAHAHA", "secret_sauce", "invalid_credentials"),
    "wrong_password": ("standard_user", "12345", "invalid_credentials"),
    "locked_out_user": ("locked_out_user", "secret_sauce", "locked_out"),
    "empty_username_password": ("", "", "username_required"),
    "empty_password": ("standard_user", "", "password_required"),
}

LOGIN_SUCCESS_URL = r"/inventory\.html"

SAVE_LOGIN_STATE_PATH = "storage"
SAVE_LOGIN_STATE_FILE = "login.json"

CHECKOUT_REQUIRED_ERRORS = {
    "first_name": "First Name is required",
    "last_name": "Last Name is required",
    "postal_code": "Postal Code is required",
}

COMPLETE_HEADER = "Thank you for your order!"
