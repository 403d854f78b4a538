"""
Shaper configuration management.

This module handles loading and accessing configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/transglyph.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ShaperConfig
dataclass provides typed access to all settings.

Usage:
    from transglyph.config import config

    print(config.model.weights_path)
    print(config.generation.prompt_prefix)

Environment Variable Mapping:
    TRANSGLYPH_WEIGHTS         -> model.weights_path
    TRANSGLYPH_TOKENIZER       -> model.tokenizer_path
    TRANSGLYPH_MODEL_CONFIG    -> model.config_path
    TRANSGLYPH_PROMPT_PREFIX   -> generation.prompt_prefix
    TRANSGLYPH_SEED            -> generation.seed
    TRANSGLYPH_LOG_LEVEL       -> logging.level
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from transglyph.generation.params import MAX_LENGTH_CEILING, GenerationParams

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/, models/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "transglyph.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "transglyph.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ModelSettings:
    """Where the model assets live and how they are loaded."""

    weights_path: str = "models/model.safetensors"
    tokenizer_path: str = "models/tokenizer.json"
    config_path: str = "models/config.json"
    fetch_timeout_seconds: float = 30.0
    retry_failed_load: bool = False


@dataclass
class GenerationSettings:
    """Sampling defaults applied to every sentence."""

    prompt_prefix: str = "translate English to German:"
    temperature: float = 0.0
    top_p: float = 1.0
    repeat_penalty: float = 1.1
    repeat_last_n: int = 1
    seed: int = 0
    max_length: int = MAX_LENGTH_CEILING

    def to_params(self, prompt: str) -> GenerationParams:
        """Build the per-call parameters for ``prompt``."""
        return GenerationParams(
            prompt=prompt,
            temperature=self.temperature,
            seed=self.seed,
            top_p=self.top_p,
            repeat_penalty=self.repeat_penalty,
            repeat_last_n=self.repeat_last_n,
            max_length=self.max_length,
        )


@dataclass
class CacheSettings:
    """Translation cache configuration."""

    max_entries: int = 0  # 0 = unbounded


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class ShaperConfig:
    """
    Complete shaper configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    model: ModelSettings = field(default_factory=ModelSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _load_from_ini(parser: configparser.ConfigParser, cfg: ShaperConfig) -> None:
    """Load configuration from parsed INI file into ShaperConfig."""
    # Model section
    if parser.has_section("model"):
        if parser.has_option("model", "weights_path"):
            cfg.model.weights_path = parser.get("model", "weights_path")
        if parser.has_option("model", "tokenizer_path"):
            cfg.model.tokenizer_path = parser.get("model", "tokenizer_path")
        if parser.has_option("model", "config_path"):
            cfg.model.config_path = parser.get("model", "config_path")
        if parser.has_option("model", "fetch_timeout_seconds"):
            cfg.model.fetch_timeout_seconds = parser.getfloat("model", "fetch_timeout_seconds")
        if parser.has_option("model", "retry_failed_load"):
            cfg.model.retry_failed_load = _parse_bool(parser.get("model", "retry_failed_load"))

    # Generation section
    if parser.has_section("generation"):
        if parser.has_option("generation", "prompt_prefix"):
            cfg.generation.prompt_prefix = parser.get("generation", "prompt_prefix")
        if parser.has_option("generation", "temperature"):
            cfg.generation.temperature = parser.getfloat("generation", "temperature")
        if parser.has_option("generation", "top_p"):
            cfg.generation.top_p = parser.getfloat("generation", "top_p")
        if parser.has_option("generation", "repeat_penalty"):
            cfg.generation.repeat_penalty = parser.getfloat("generation", "repeat_penalty")
        if parser.has_option("generation", "repeat_last_n"):
            cfg.generation.repeat_last_n = parser.getint("generation", "repeat_last_n")
        if parser.has_option("generation", "seed"):
            cfg.generation.seed = parser.getint("generation", "seed")
        if parser.has_option("generation", "max_length"):
            cfg.generation.max_length = parser.getint("generation", "max_length")

    # Cache section
    if parser.has_section("cache"):
        if parser.has_option("cache", "max_entries"):
            cfg.cache.max_entries = parser.getint("cache", "max_entries")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: ShaperConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Model settings
    if env_weights := os.getenv("TRANSGLYPH_WEIGHTS"):
        cfg.model.weights_path = env_weights
    if env_tokenizer := os.getenv("TRANSGLYPH_TOKENIZER"):
        cfg.model.tokenizer_path = env_tokenizer
    if env_model_config := os.getenv("TRANSGLYPH_MODEL_CONFIG"):
        cfg.model.config_path = env_model_config

    # Generation settings
    if env_prefix := os.getenv("TRANSGLYPH_PROMPT_PREFIX"):
        cfg.generation.prompt_prefix = env_prefix
    if env_seed := os.getenv("TRANSGLYPH_SEED"):
        cfg.generation.seed = int(env_seed)

    # Logging settings
    if env_log := os.getenv("TRANSGLYPH_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()


def load_config(config_file: Path | None = None) -> ShaperConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. ``config_file`` if given, else config/transglyph.ini
        3. config/transglyph.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ShaperConfig: Fully populated configuration object.
    """
    cfg = ShaperConfig()

    # Determine which config file to use
    if config_file is None:
        if CONFIG_FILE.exists():
            config_file = CONFIG_FILE
        elif CONFIG_EXAMPLE.exists():
            # Use example as fallback for development
            config_file = CONFIG_EXAMPLE

    # Load from INI file if available
    if config_file:
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "ShaperConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Contexts that were
    already constructed keep the settings they were built with.

    Returns:
        ShaperConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information,
    useful for debugging.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "weights_path": config.model.weights_path,
        "prompt_prefix": config.generation.prompt_prefix,
        "cache_bounded": config.cache.max_entries > 0,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("TRANSGLYPH CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to transglyph.ini to customise)")
    print("-" * 60)
    print(f"Weights:     {config.model.weights_path}")
    print(f"Tokenizer:   {config.model.tokenizer_path}")
    print(f"Model conf:  {config.model.config_path}")
    print(f"Prompt:      {config.generation.prompt_prefix!r}")
    print(f"Sampling:    temperature={config.generation.temperature} top_p={config.generation.top_p}")
    print(f"Cache:       {config.cache.max_entries or 'unbounded'}")
    print(f"Log level:   {config.logging.level}")
    print("=" * 60 + "\n")
