"""Step 1: ``OrderProcessing`` builds its own collaborators."""

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

TITLE = "Жёсткие зависимости"


# [docs:step1-hard-dependency]
class OrderProcessing:
    def __init__(self, config: TutorialConfig) -> None:
        self.logger = Logger()
        self.connection = sqlite3.connect(config.database_path)
        try:
            self.repository = SqliteOrderRepository(self.connection)
        except sqlite3.Error:
            self.connection.close()
            raise
        self.notifier = SmsNotifier(SmsGateway(), sender=config.sms_sender)

    def process(self, order: Order) -> Order:
        self.logger.info(f"Processing order for {order.customer_phone}")
        saved = self.repository.save(order)
        self.notifier.notify(saved.customer_phone, confirmation_text(saved))
        return saved
# [/docs:step1-hard-dependency]

    def close(self) -> None:
        self.connection.close()


def run(config: TutorialConfig, order: Order | None = None) -> Order:
    if order is None:
        order = DEMO_ORDER
    processing = OrderProcessing(config)
    try:
        return processing.process(order)
    finally:
        processing.close()
