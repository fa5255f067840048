"""Step 2: collaborators are passed to the constructor."""

import sqlite3

from ditutorial.config import TutorialConfig
from ditutorial.domain import (
    DEMO_ORDER,
    Logger,
    Notifier,
    Order,
    OrderRepository,
    SmsGateway,
    SmsNotifier,
    SqliteOrderRepository,
    confirmation_text,
)

TITLE = "Внедрение через конструктор"


# [docs:step2-constructor-injection]
class OrderProcessing:
    def __init__(
        self, logger: Logger, repository: OrderRepository, notifier: Notifier
    ) -> None:
        self.logger = logger
        self.repository = repository
        self.notifier = notifier

    def process(self, order: Order) -> Order:
        self.logger.info(f"Processing order for {order.customer_phone}")
        saved = self.repository.save(order)
        self.notifier.notify(saved.customer_phone, confirmation_text(saved))
        return saved
# [/docs:step2-constructor-injection]


# [docs:step2-composition-root]
def build(config: TutorialConfig, connection: sqlite3.Connection) -> OrderProcessing:
    return OrderProcessing(
        logger=Logger(),
        repository=SqliteOrderRepository(connection),
        notifier=SmsNotifier(SmsGateway(), sender=config.sms_sender),
    )
# [/docs:step2-composition-root]


def run(config: TutorialConfig, order: Order | None = None) -> Order:
    if order is None:
        order = DEMO_ORDER
    connection = sqlite3.connect(config.database_path)
    try:
        return build(config, connection).process(order)
    finally:
        connection.close()
