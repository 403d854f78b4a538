"""
Shared pytest fixtures for the transglyph test suite.

The collaborator fakes themselves live in ``tests/fakes.py``; this module
only wires them into fixtures.
"""

import pytest

from tests.fakes import PROMPT_PREFIX, FakeFontHost, FakeTokenizer
from transglyph.config import ShaperConfig
from transglyph.translation.cache import TranslationCache


@pytest.fixture
def tokenizer() -> FakeTokenizer:
    return FakeTokenizer()


@pytest.fixture
def font() -> FakeFontHost:
    return FakeFontHost()


@pytest.fixture
def cache() -> TranslationCache:
    return TranslationCache()


@pytest.fixture
def shaper_config() -> ShaperConfig:
    """
    Default configuration, independent of any ini file or environment.

    Built from the dataclass defaults rather than ``load_config`` so that a
    developer's local ``config/transglyph.ini`` cannot leak into tests.
    """
    cfg = ShaperConfig()
    cfg.generation.prompt_prefix = PROMPT_PREFIX
    return cfg
