"""Step 3: collaborators are looked up in a :class:`ServiceLocator`."""

import sqlite3

from ditutorial.config import TutorialConfig
from ditutorial.domain import (
    DEMO_ORDER,
    Logger,
    Order,
    SmsGateway,
    SmsNotifier,
    SqliteOrderRepository,
    confirmation_text,
)
from ditutorial.service_locator import ServiceLocator

TITLE = "Service Locator"


# [docs:step3-service-locator]
class OrderProcessing:
    def __init__(self, locator: ServiceLocator) -> None:
        self.locator = locator

    def process(self, order: Order) -> Order:
        self.locator.get("logger").info(f"Processing order for {order.customer_phone}")
        saved = self.locator.get("order_repository").save(order)
        self.locator.get("notifier").notify(
            saved.customer_phone, confirmation_text(saved)
        )
        return saved
# [/docs:step3-service-locator]


# [docs:step3-registration]
def build_locator(config: TutorialConfig) -> ServiceLocator:
    locator = ServiceLocator()
    locator.register("connection", lambda: sqlite3.connect(config.database_path))
    locator.register("logger", Logger)
    locator.register(
        "order_repository",
        lambda: SqliteOrderRepository(locator.get("connection")),
    )
    locator.register("sms_gateway", SmsGateway)
    locator.register(
        "notifier",
        lambda: SmsNotifier(locator.get("sms_gateway"), sender=config.sms_sender),
    )
    return locator
# [/docs:step3-registration]


def run(config: TutorialConfig, order: Order | None = None) -> Order:
    if order is None:
        order = DEMO_ORDER
    locator = build_locator(config)
    try:
        return OrderProcessing(locator).process(order)
    finally:
        if locator.has_instance("connection"):
            locator.get("connection").close()
