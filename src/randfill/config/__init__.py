"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_parameters`
    3. Environment variable ``RANDFILL_SEED`` overriding the seed
"""

from .schema import Range, RandomizationParameters, load_parameters

__all__ = ["Range", "RandomizationParameters", "load_parameters"]
