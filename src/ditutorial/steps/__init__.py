"""
The tutorial steps, in reading order.

Each step module defines its own ``OrderProcessing``, a ``TITLE`` matching
the README section and ``run(config, order=None)`` returning the saved order.
"""

from types import ModuleType
from typing import Mapping

from ditutorial.steps import (
    step1_hard_dependency,
    step2_constructor_injection,
    step3_service_locator,
    step4_container,
)

STEPS: Mapping[str, ModuleType] = {
    "hard-dependency": step1_hard_dependency,
    "constructor-injection": step2_constructor_injection,
    "service-locator": step3_service_locator,
    "container": step4_container,
}
