import pytest

from creal.models import AnalysisRecord, AuthorInfo, BiasResult
from creal.services.infrastructure.storage import CacheStore, InMemoryKeyValueStore

DAY = 24 * 3600.0


class FakeClock:
    """Manually advanced wall clock (epoch seconds)."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAnalyzer:
    def __init__(self, result: BiasResult = None, error: Exception = None):
        self.result = result or make_bias_result()
        self.error = error
        self.calls = []

    async def analyze(self, text: str) -> BiasResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class FakeAuthorSource:
    def __init__(self, info: AuthorInfo = None, error: Exception = None):
        self.info = info or AuthorInfo(name="Jane Doe", bio="Reporter")
        self.error = error
        self.calls = []

    async def fetch(self, name: str) -> AuthorInfo:
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return self.info


def make_bias_result(**overrides) -> BiasResult:
    values = dict(
        left_right=-12.0,
        auth_lib=5.0,
        nat_glob=0.0,
        tone_calm_urgent=20.0,
        objectivity=70.0,
        sensationalism=15.0,
        clarity=80.0,
        confidence=65.0,
        reasoning="Mostly neutral reporting.",
    )
    values.update(overrides)
    return BiasResult(**values)


def make_record(key: str, created_at: float, **overrides) -> AnalysisRecord:
    values = dict(key=key, title=f"Title for {key}", result=make_bias_result(), created_at=created_at)
    values.update(overrides)
    return AnalysisRecord(**values)


@pytest.fixture(autouse=True)
def clear_gemini_env(monkeypatch):
    """Tests never reach the real Gemini API."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def substrate():
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(substrate, clock):
    return CacheStore(substrate, clock=clock)


@pytest.fixture
def analyzer():
    return FakeAnalyzer()
