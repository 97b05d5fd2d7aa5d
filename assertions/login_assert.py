class LoginAssert:

    @staticmethod
    def error_message(actual_msg, expect_msg: str):
        assert actual_msg is not None, f"登录错误期望提示信息：{expect_msg}，页面没有显示错误提示"
        assert expect_msg in actual_msg, f"登录错误期望提示信息：{expect_msg}，登录错误实际提示信息：{actual_msg}"

    @staticmethod
    def no_error(actual_msg):
        assert actual_msg is None, f"不应出现登录错误提示：{actual_msg}"
