from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class TestResult:
    __test__ = False  # 避免被 pytest 当作测试类收集

    name: str
    status: str
    duration_ms: int = 0
    error: Optional[str] = None
    screenshot: Optional[str] = None


@dataclass
class SuiteResult:
    title: str
    tests: list = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for t in self.tests if t.status == status)

    @property
    def passed(self) -> int:
        return self.count(PASSED)

    @property
    def failed(self) -> int:
        return self.count(FAILED)


@dataclass
class RunResults:
    """一次测试运行累计的结果，报告生成只依赖它，不依赖浏览器会话"""
    started_at: datetime = field(default_factory=datetime.now)
    duration_ms: int = 0
    suites: dict = field(default_factory=dict)

    def add(self, suite: str, result: TestResult):
        self.suites.setdefault(suite, SuiteResult(suite)).tests.append(result)

    def all_tests(self) -> list:
        return [t for s in self.suites.values() for t in s.tests]

    @property
    def total(self) -> int:
        return len(self.all_tests())

    @property
    def passed(self) -> int:
        return sum(s.passed for s in self.suites.values())

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.suites.values())

    @property
    def skipped(self) -> int:
        return sum(s.count(SKIPPED) for s in self.suites.values())

    @property
    def pass_rate(self) -> str:
        return f"{self.passed / self.total * 100:.2f}" if self.total else "0"

    def screenshots(self) -> list:
        return [(t.name, t.screenshot) for t in self.all_tests() if t.screenshot]
