"""从页面读取的数据快照。提取后不再与 DOM 同步，需要最新状态请重新查询"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class Product:
    index: int
    name: str
    price: Decimal
    price_text: str
    description: str
    button_id: str


@dataclass(frozen=True)
class CartItem:
    index: int
    name: str
    price: Decimal
    price_text: str
    quantity: int
    remove_button_id: str

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class CheckoutInfo:
    first_name: str
    last_name: str
    postal_code: str
    test_case: str = ""


@dataclass(frozen=True)
class OrderSummary:
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    subtotal_text: str = ""
    tax_text: str = ""
    total_text: str = ""


@dataclass(frozen=True)
class Completion:
    header: str
    text: str


@dataclass(frozen=True)
class CheckoutResult:
    order_summary: OrderSummary
    completion: Completion


class SortMode(str, Enum):
    NAME_ASC = "az"
    NAME_DESC = "za"
    PRICE_ASC = "lohi"
    PRICE_DESC = "hilo"

    @property
    def by_price(self) -> bool:
        return self in (SortMode.PRICE_ASC, SortMode.PRICE_DESC)

    @property
    def descending(self) -> bool:
        return self in (SortMode.NAME_DESC, SortMode.PRICE_DESC)


class CheckoutStage(Enum):
    IDLE = 0  # 不在结算流程中
    CART = 1
    INFO_FORM = 2
    REVIEW = 3
    COMPLETE = 4


@dataclass(frozen=True)
class Probe:
    """非抛异常的探测结果：present=DOM 中存在，visible=存在且可见"""
    present: bool
    visible: bool = False

    def __bool__(self):
        return self.visible


ABSENT = Probe(present=False)
