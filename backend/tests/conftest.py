import pytest

from app.services.medication_safety import catalog as catalog_module
from app.services.medication_safety import config as config_module


@pytest.fixture(autouse=True)
def isolated_engine_state(monkeypatch):
    """Each test starts from default config and a freshly loaded built-in catalog."""
    monkeypatch.delenv("MEDSAFETY_CATALOG_PATH", raising=False)
    monkeypatch.delenv("MEDSAFETY_LOG_LEVEL", raising=False)
    config_module.reset_config()
    monkeypatch.setattr(catalog_module, "_catalog_instance", None)
    yield
    config_module.reset_config()
