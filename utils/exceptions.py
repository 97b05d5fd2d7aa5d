class AutomationError(Exception):
    """所有自动化层异常的基类"""


class ElementNotFoundError(AutomationError):
    def __init__(self, label: str, timeout: float):
        self.label = label
        self.timeout = timeout
        super().__init__(f"Element '{label}' not found within {timeout}s")


class ElementNotInteractableError(AutomationError):
    def __init__(self, label: str, timeout: float):
        self.label = label
        self.timeout = timeout
        super().__init__(f"Element '{label}' not clickable within {timeout}s")


class WaitTimeoutError(AutomationError, TimeoutError):
    """条件等待超时；stage 标记 checkout 流程中未到达的阶段"""

    def __init__(self, message: str, stage: str = None):
        self.stage = stage
        super().__init__(message)


class PageLoadError(AutomationError):
    pass


class ItemNotFoundError(AutomationError, LookupError):
    """业务查找失败，例如当前页面不存在该商品名"""

    def __init__(self, name: str, where: str):
        self.name = name
        self.where = where
        super().__init__(f"'{name}' not found on {where}")


class ConfigurationError(AutomationError):
    pass


class DataFormatError(AutomationError):
    pass


class CheckoutStateError(AutomationError):
    def __init__(self, action: str, expected, actual):
        self.action = action
        self.expected = expected
        self.actual = actual
        super().__init__(f"Cannot {action}: checkout is at {actual.name}, expected {expected.name}")


class CheckoutValidationError(AutomationError):
    """收货人表单校验失败，页面停留在 step one"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
