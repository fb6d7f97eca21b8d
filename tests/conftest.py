"""Global fixtures for the hamqtt test suite."""

import logging
from pathlib import Path

import pytest

from hamqtt.adapters.io.enhanced_logging import LoggerManager
from hamqtt.config.loader import ConfigLoader
from hamqtt.domain.common import Device, Origin


# ================================================================================
# Domain Fixtures
# ================================================================================

@pytest.fixture
def origin() -> Origin:
    return Origin(name="application name")


@pytest.fixture
def device() -> Device:
    return Device(name="device name", identifiers=["device-id"])


@pytest.fixture
def entity_base(origin, device) -> dict:
    """Fields every entity needs, for building models with ** expansion."""
    return {"origin": origin, "device": device}


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture
def sample_config_dict() -> dict:
    """The starter configuration written by 'hamqtt init-config'."""
    return ConfigLoader()._get_sample_config()


@pytest.fixture
def sample_config_file(tmp_path: Path) -> Path:
    """A valid TOML configuration file on disk."""
    return ConfigLoader().create_sample_toml_config(tmp_path / ".hamqtt.toml")


@pytest.fixture(autouse=True)
def reset_logging_manager():
    """Each test starts with an unconfigured logging manager."""
    root_level = logging.getLogger().level
    LoggerManager.reset()
    yield
    LoggerManager.reset()
    logging.getLogger().setLevel(root_level)
