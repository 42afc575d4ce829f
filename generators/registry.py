from __future__ import annotations

import importlib
import logging
import random
from typing import Callable, Dict, List, Optional, Type, TypeVar

from errors import GeneratorUnavailable
from questions import Subtopic

logger = logging.getLogger(__name__)

GENERATOR_MODULES = (
    "generators.arithmetic",
    "generators.conditionals",
    "generators.loops",
    "generators.lists",
    "generators.conversion",
    "generators.algorithms",
)

# Subtopic -> generator class, filled in by @register at import time
GENERATORS: Dict[Subtopic, type] = {}

G = TypeVar("G", bound=type)

_loaded = False


def register(subtopic: Subtopic) -> Callable[[G], G]:
    def decorator(cls: G) -> G:
        cls.subtopic = subtopic
        GENERATORS[subtopic] = cls
        return cls

    return decorator


def load_generators() -> None:
    """Import every generator module once; a module that fails is logged and skipped."""
    global _loaded
    if _loaded:
        return
    for name in GENERATOR_MODULES:
        try:
            importlib.import_module(name)
        except ImportError:
            logger.warning("generator module %s failed to import", name, exc_info=True)
    _loaded = True


def get_generator(
    subtopic: Subtopic | str,
    rng: Optional[random.Random] = None,
    **kwargs,
):
    load_generators()
    try:
        key = Subtopic(subtopic)
    except ValueError as exc:
        raise GeneratorUnavailable(f"Unknown subtopic {subtopic!r}") from exc
    cls: Optional[Type] = GENERATORS.get(key)
    if cls is None:
        raise GeneratorUnavailable(f"No generator registered for {key.value!r}")
    return cls(rng=rng, **kwargs)


def available_subtopics() -> List[Subtopic]:
    """Registered subtopics in enum order."""
    load_generators()
    return [s for s in Subtopic if s in GENERATORS]


def missing_subtopics() -> List[Subtopic]:
    load_generators()
    return [s for s in Subtopic if s not in GENERATORS]
