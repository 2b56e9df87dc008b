"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and exposes the sample Go module used by end-to-end tests.
"""

import shutil
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of extcover modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("extcover"):
        del sys.modules[module_name]

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_module(tmp_path: Path) -> Path:
    """Writable copy of the sample Go module (go.mod, sources, coverage.out)."""
    dest = tmp_path / "sample"
    shutil.copytree(FIXTURES_DIR / "sample", dest)
    return dest
