"""Combat domain for Monarchy.

Pure rule modules that operate on the dataclasses in :mod:`models`:

* :mod:`modifiers` resolves formation/terrain/race/era/buff modifiers.
* :mod:`power` turns unit maps into attack and defense power.
* :mod:`outcome` classifies power ratios and derives casualties and rewards.
* :mod:`war` decides when a war declaration is required.
* :mod:`restoration` decides when a defender enters a recovery period.
* :mod:`combat` chains the above into a single side-effect free pipeline.

Persistence and orchestration live in :mod:`monarchy.services`.
"""

from . import (
    combat,
    enums,
    models,
    modifiers,
    outcome,
    power,
    restoration,
    rules_config,
    tables,
    war,
)

__all__ = [
    "combat",
    "enums",
    "models",
    "modifiers",
    "outcome",
    "power",
    "restoration",
    "rules_config",
    "tables",
    "war",
]
