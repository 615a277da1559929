"""
Event pacing core.

This module provides:
- The indexed template catalog and weighted selection (EventBank)
- The per-session pacing state machine (EventGenerator)
- Generation configuration, presets and per-task adjustments
- Effect rolls, placeholder substitution and effect analysis
- A host-side facade for running events alongside a task
"""

from event_pacing.events.config import (
    EventGenerationConfig,
    PRODUCTION_EVENT_CONFIG,
    DEVELOPMENT_EVENT_CONFIG,
    TEST_EVENT_CONFIG,
    DISABLED_EVENT_CONFIG,
    TASK_EVENT_RATE_MODIFIERS,
    TASK_SEVERITY_ADJUSTMENTS,
    EVENT_BALANCING,
    get_task_event_config,
    get_environment_config,
)
from event_pacing.events.event_bank import (
    EventBank,
    SelectionCriteria,
    evaluate_conditions,
)
from event_pacing.events.event_generator import (
    EventGenerator,
    GeneratorState,
    GenerationResult,
    GenerationFailure,
    SessionStatus,
)
from event_pacing.events.effect_rolls import (
    roll_effects,
    replace_placeholders,
)
from event_pacing.events.effect_analysis import (
    is_harmful,
    is_beneficial,
    get_impact_score,
    summarize_effects,
)
from event_pacing.events.task_integration import (
    CharacterSnapshot,
    EventTaskIntegration,
    create_event_task_integration,
)

__all__ = [
    # Config
    "EventGenerationConfig",
    "PRODUCTION_EVENT_CONFIG",
    "DEVELOPMENT_EVENT_CONFIG",
    "TEST_EVENT_CONFIG",
    "DISABLED_EVENT_CONFIG",
    "TASK_EVENT_RATE_MODIFIERS",
    "TASK_SEVERITY_ADJUSTMENTS",
    "EVENT_BALANCING",
    "get_task_event_config",
    "get_environment_config",
    # Catalog
    "EventBank",
    "SelectionCriteria",
    "evaluate_conditions",
    # Generator
    "EventGenerator",
    "GeneratorState",
    "GenerationResult",
    "GenerationFailure",
    "SessionStatus",
    # Effects
    "roll_effects",
    "replace_placeholders",
    "is_harmful",
    "is_beneficial",
    "get_impact_score",
    "summarize_effects",
    # Integration
    "CharacterSnapshot",
    "EventTaskIntegration",
    "create_event_task_integration",
]
