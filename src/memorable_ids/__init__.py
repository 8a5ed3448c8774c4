"""memorable_ids: short, human-memorable identifiers built from curated word lists.

>>> from memorable_ids import colourful_animal
>>> colourful_animal().with_joiner("-").generate()  # doctest: +SKIP
'Khaki-Langur'
"""

from .config import GeneratorConfig, apply_env_overrides
from .errors import ConfigurationError, MemorableIdError, ResourceLoadError, RetryExhaustedError
from .generator import (
    IdGenerator,
    colourful_animal,
    create,
    descriptive_animal,
    descriptive_colourful_animal,
)
from .wordlists import WordList

__all__ = [
    "ConfigurationError",
    "GeneratorConfig",
    "IdGenerator",
    "MemorableIdError",
    "ResourceLoadError",
    "RetryExhaustedError",
    "WordList",
    "apply_env_overrides",
    "colourful_animal",
    "create",
    "descriptive_animal",
    "descriptive_colourful_animal",
]
