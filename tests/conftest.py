import os
import random
import sys

import pytest

# Make the project root importable when tests run from any directory
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import AppConfig
from form_filler.data_generator import DataGenerator
from form_filler.options import FillOptions


@pytest.fixture
def app_config() -> AppConfig:
    """Application config built from defaults and the test environment."""
    return AppConfig()


@pytest.fixture
def options() -> FillOptions:
    """Default fill options with hidden-field handling on."""
    return FillOptions()


@pytest.fixture
def generator() -> DataGenerator:
    """Seeded generator so failures are reproducible."""
    return DataGenerator(random.Random(1234))
