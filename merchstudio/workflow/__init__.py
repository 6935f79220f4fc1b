"""
Merch Studio Workflow

Fixed step sequences for the two wizards and the navigation rules over them.
The machine is a pure projection of the latest Draft; it holds no state.
"""

from .steps import (
    AI_ENHANCE,
    BRAND_DESIGN,
    COLOR_LINE,
    CREATIVE_STEPS,
    FLOW_STEPS,
    PRODUCT_SELECT,
    PUBLISH,
    STEP_PREDICATES,
    STUDIO_STEPS,
    VARIANT_CONFIG,
    VISUAL_SELECTION,
    Step,
)
from .machine import StepMachine, StepState

__all__ = [
    "AI_ENHANCE",
    "BRAND_DESIGN",
    "COLOR_LINE",
    "CREATIVE_STEPS",
    "FLOW_STEPS",
    "PRODUCT_SELECT",
    "PUBLISH",
    "STEP_PREDICATES",
    "STUDIO_STEPS",
    "VARIANT_CONFIG",
    "VISUAL_SELECTION",
    "Step",
    "StepMachine",
    "StepState",
]
