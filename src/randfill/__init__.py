"""Random population of arbitrary Python types for test fixtures.

``randfill`` builds fully populated instances of classes, dataclasses, pydantic
models, enums and typing constructs such as ``list[int]`` or
``dict[str, Address]``.  Values are random but valid, bounded by
:class:`~randfill.config.RandomizationParameters` and reproducible for a given
seed.  Cyclic and deeply nested type graphs terminate through depth and cycle
control instead of recursing forever.

Typical use::

    from randfill import RandomizationEngine, RandomizationParameters

    engine = RandomizationEngine(RandomizationParameters(seed=42))
    person = engine.next_object(Person)
"""

from .config import Range, RandomizationParameters, load_parameters
from .context import RandomizationContext
from .engine import RandomizationEngine, random_object
from .introspection import FieldInfo, TypeKind
from .randomizers import Char, FunctionRandomizer, Randomizer
from .registry import RandomizerRegistry
from .scanning import SubtypeScanner
from .utils.errors import (
    EmptyEnumError,
    NoConcreteSubtypeError,
    ObjectGenerationError,
    RandomizationError,
)

__version__ = "0.1.0"

__all__ = [
    "Char",
    "EmptyEnumError",
    "FieldInfo",
    "FunctionRandomizer",
    "NoConcreteSubtypeError",
    "ObjectGenerationError",
    "RandomizationContext",
    "RandomizationEngine",
    "RandomizationError",
    "RandomizationParameters",
    "Randomizer",
    "RandomizerRegistry",
    "Range",
    "SubtypeScanner",
    "TypeKind",
    "load_parameters",
    "random_object",
    "__version__",
]
