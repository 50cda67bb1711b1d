from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from nps_dashboard.core import logging_setup  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Runtime wiring must not replace pytest's root handlers.
    monkeypatch.setattr(logging_setup, "_configured", True)
    monkeypatch.setattr(logging_setup, "_handler", None)
