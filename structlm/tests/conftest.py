from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clean_structlm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer STRUCTLM_* settings out of the tests."""
    for name in ("STRUCTLM_ALLOW_NAN", "STRUCTLM_REPAIR_REPLIES", "STRUCTLM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
