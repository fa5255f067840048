"""Step 4: a dependency injection container assembles ``OrderProcessing``."""

import sqlite3

from injector import Binder, Injector, Module, inject, provider, singleton

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

TITLE = "Контейнер внедрения зависимостей"


# [docs:step4-inject]
class OrderProcessing:
    @inject
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
# [/docs:step4-inject]


# [docs:step4-module]
class ProductionModule(Module):
    def __init__(self, config: TutorialConfig) -> None:
        self._config = config

    def configure(self, binder: Binder) -> None:
        binder.bind(TutorialConfig, to=self._config)
        binder.bind(Logger, scope=singleton)
        binder.bind(SmsGateway, scope=singleton)

    @singleton
    @provider
    def provide_connection(self, config: TutorialConfig) -> sqlite3.Connection:
        return sqlite3.connect(config.database_path)

    @singleton
    @provider
    def provide_order_repository(
        self, connection: sqlite3.Connection
    ) -> OrderRepository:
        return SqliteOrderRepository(connection)

    @provider
    def provide_notifier(self, gateway: SmsGateway, config: TutorialConfig) -> Notifier:
        return SmsNotifier(gateway, sender=config.sms_sender)
# [/docs:step4-module]


def build_injector(config: TutorialConfig, *overrides: Module) -> Injector:
    """
    Build the container. Bindings from ``overrides`` replace the production
    ones, which is how tests swap the repository or the notifier.
    """
    return Injector([ProductionModule(config), *overrides])


def run(config: TutorialConfig, order: Order | None = None) -> Order:
    if order is None:
        order = DEMO_ORDER
    container = build_injector(config)
    connection = container.get(sqlite3.Connection)
    try:
        # [docs:step4-resolve]
        processing = container.get(OrderProcessing)
        saved = processing.process(order)
        # [/docs:step4-resolve]
        return saved
    finally:
        connection.close()
