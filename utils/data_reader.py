import csv
import json
import random
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from loguru import logger

from pages.models import CheckoutInfo
from utils.exceptions import DataFormatError

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

USER_COLUMNS = ("username", "password", "description", "expectedResult")
OUTCOMES = ("success", "error")


@dataclass(frozen=True)
class UserCredential:
    username: str
    password: str
    description: str
    expected_result: str


@dataclass(frozen=True)
class CheckoutScenario:
    name: str
    products: tuple
    expected_subtotal: Decimal


class DataReader:
    """读取外部测试数据：用户 CSV、结算场景 JSON"""

    def __init__(self, data_dir: Path = DATA_DIR, users_file: str = "users.csv",
                 checkout_file: str = "checkout_data.json"):
        self.data_dir = Path(data_dir)
        self.users_file = users_file
        self.checkout_file = checkout_file

    def _path(self, filename: str, suffix: str) -> Path:
        return self.data_dir / (filename if filename.endswith(suffix) else f"{filename}{suffix}")

    # ========= 原始文件 =========
    def read_json(self, filename: str):
        path = self._path(filename, ".json")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataFormatError(f"Failed to read JSON file {path.name}: {e}") from e
        logger.debug(f"📖 Loaded JSON data from {path.name}")
        return data

    def read_csv(self, filename: str) -> list[dict]:
        path = self._path(filename, ".csv")
        try:
            with path.open(encoding="utf-8", newline="") as f:
                rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except (OSError, csv.Error) as e:
            raise DataFormatError(f"Failed to read CSV file {path.name}: {e}") from e

        if len(rows) < 2:
            raise DataFormatError(f"{path.name} must have a header row and at least one data row")
        headers = [h.strip() for h in rows[0]]
        data = []
        for line_no, values in enumerate(rows[1:], start=2):
            if len(values) != len(headers):
                raise DataFormatError(
                    f"{path.name} row {line_no} has {len(values)} values, expected {len(headers)}")
            data.append(dict(zip(headers, (v.strip() for v in values))))
        logger.debug(f"📊 Loaded {len(data)} rows from {path.name}")
        return data

    # ========= 用户 =========
    def users(self) -> list[UserCredential]:
        rows = self.read_csv(self.users_file)
        missing = [c for c in USER_COLUMNS if c not in rows[0]]
        if missing:
            raise DataFormatError(f"{self.users_file} is missing columns: {', '.join(missing)}")

        users = []
        for row in rows:
            if row["expectedResult"] not in OUTCOMES:
                raise DataFormatError(f"Unknown expectedResult {row['expectedResult']!r} for {row['username']!r}")
            users.append(UserCredential(row["username"], row["password"], row["description"], row["expectedResult"]))
        return users

    def users_by_outcome(self, outcome: str) -> list[UserCredential]:
        if outcome not in OUTCOMES:
            raise ValueError(f"outcome must be one of {OUTCOMES}, got {outcome!r}")
        return [u for u in self.users() if u.expected_result == outcome]

    def valid_users(self) -> list[UserCredential]:
        return self.users_by_outcome("success")

    def invalid_users(self) -> list[UserCredential]:
        return self.users_by_outcome("error")

    def user(self, username: str) -> UserCredential:
        for u in self.users():
            if u.username == username:
                return u
        raise KeyError(username)

    # ========= 结算数据 =========
    def _checkout_data(self) -> dict:
        data = self.read_json(self.checkout_file)
        if not isinstance(data, dict):
            raise DataFormatError(f"{self.checkout_file} must contain a JSON object")
        return data

    def checkout_scenarios(self) -> list[CheckoutScenario]:
        scenarios = []
        for raw in self._checkout_data().get("shoppingScenarios", []):
            try:
                scenarios.append(CheckoutScenario(name=raw["scenario"], products=tuple(raw["products"]),
                                                  expected_subtotal=Decimal(str(raw["expectedSubtotal"]))))
            except (KeyError, TypeError, InvalidOperation) as e:
                raise DataFormatError(f"Malformed shopping scenario {raw!r}: {e}") from e
        return scenarios

    def valid_checkout_infos(self) -> list[CheckoutInfo]:
        infos = []
        for raw in self._checkout_data().get("validCheckoutData", []):
            try:
                infos.append(CheckoutInfo(first_name=raw["firstName"], last_name=raw["lastName"],
                                          postal_code=raw["postalCode"], test_case=raw.get("testCase", "")))
            except (KeyError, TypeError, AttributeError) as e:
                raise DataFormatError(f"Malformed checkout info {raw!r}: {e}") from e
        return infos

    def random_checkout_info(self, rng: random.Random = None) -> CheckoutInfo:
        infos = self.valid_checkout_infos()
        if not infos:
            raise DataFormatError(f"{self.checkout_file} has no validCheckoutData entries")
        info = (rng or random).choice(infos)
        logger.info(f"🎲 Selected random checkout info: {info.test_case}")
        return info
