"""
ditutorial: runnable companion code for the Dependency Injection tutorial.

The README walks one example through four designs. ``OrderProcessing``
needs a :class:`~ditutorial.domain.Logger`, an
:class:`~ditutorial.domain.OrderRepository` and a
:class:`~ditutorial.domain.Notifier`:

1. :mod:`ditutorial.steps.step1_hard_dependency` builds them itself;
2. :mod:`ditutorial.steps.step2_constructor_injection` receives them;
3. :mod:`ditutorial.steps.step3_service_locator` fetches them from a
   :class:`~ditutorial.service_locator.ServiceLocator`;
4. :mod:`ditutorial.steps.step4_container` lets the ``injector`` container
   assemble the whole graph.

## Example

```python
from ditutorial.config import TutorialConfig
from ditutorial.steps import step4_container

saved = step4_container.run(TutorialConfig())
saved.id  # 1
```
"""

from ditutorial.config import TutorialConfig
from ditutorial.domain import (
    InMemoryOrderRepository,
    Logger,
    Notifier,
    Order,
    OrderRepository,
    RecordingNotifier,
    SmsGateway,
    SmsMessage,
    SmsNotifier,
    SqliteOrderRepository,
)
from ditutorial.service_locator import ServiceLocator, ServiceNotFoundError

__all__ = [
    "InMemoryOrderRepository",
    "Logger",
    "Notifier",
    "Order",
    "OrderRepository",
    "RecordingNotifier",
    "ServiceLocator",
    "ServiceNotFoundError",
    "SmsGateway",
    "SmsMessage",
    "SmsNotifier",
    "SqliteOrderRepository",
    "TutorialConfig",
]
