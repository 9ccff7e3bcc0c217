import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'activator' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from activator.core.diagnostics import RecordingDiagnostics
from activator.core.registry import InMemoryRegistry
from activator.core.sources import MappingFieldLookup, StaticEnvironment
from activator.core.stdlib_logging import reset_stdlib_logging_for_tests
from activator.data import clear_caches
from helpers.config_files import write_config


@pytest.fixture(autouse=True)
def _reset_activator_state():
    """Ensure bundled-data caches and log handlers are fresh for each test."""
    clear_caches()
    yield
    clear_caches()
    reset_stdlib_logging_for_tests()


@pytest.fixture(autouse=True)
def _clear_activator_env(monkeypatch):
    """Developer shells must not leak ACTIVATOR_* overrides into tests."""
    for key in list(os.environ):
        if key.startswith("ACTIVATOR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def registry() -> InMemoryRegistry:
    """Registry with three installed items, one of them active."""
    return InMemoryRegistry.from_items(
        {
            "akismet/akismet.php": "5.3.0",
            "woocommerce/woocommerce.php": "8.2.1",
            "hello-dolly/hello.php": None,
        },
        active=["hello-dolly/hello.php"],
    )


@pytest.fixture
def environment() -> StaticEnvironment:
    return StaticEnvironment("https://staging.example.com/")


@pytest.fixture
def options() -> dict:
    return {"blog_public": "1", "template": "storefront"}


@pytest.fixture
def fields(options) -> MappingFieldLookup:
    return MappingFieldLookup(options)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / "plugin-config"
    d.mkdir()
    return d


@pytest.fixture
def make_config(config_dir: Path):
    """Write ``<config_dir>/<key>.json`` and return its path."""

    def _make(key: str, document) -> Path:
        return write_config(config_dir, key, document)

    return _make
