import os
import sys
from pathlib import Path

import pytest

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "dev")
os.environ.setdefault("ENFORCEMENT_LOOKUP_BACKEND", "static")
os.environ.pop("ALLOW_BILLABLE_VERTEX", None)

from premortem.enforcement.gate import set_admission_gate  # noqa: E402
from premortem.generation.llm_client import set_scenario_generator  # noqa: E402
from premortem.generation.service import set_premortem_service  # noqa: E402
from premortem.logging.audit import set_audit_logger  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_singletons():
    yield
    set_admission_gate(None)
    set_scenario_generator(None)
    set_premortem_service(None)
    set_audit_logger(None)
