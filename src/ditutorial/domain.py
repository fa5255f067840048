"""
The collaborators of the order-processing example.

Every step of the tutorial processes the same :class:`Order` with the same
collaborators; only the way ``OrderProcessing`` obtains them changes.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterator, final, override

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class Order:
    customer_phone: str
    total: Decimal
    id: int | None = None
    """Assigned by the repository on save."""

    def __post_init__(self) -> None:
        if not self.total.is_finite():
            raise ValueError(f"Order total must be a finite amount: {self.total}")
        if self.total < 0:
            raise ValueError(f"Order total must not be negative: {self.total}")

    def with_id(self, id: int) -> "Order":
        return replace(self, id=id)


class Logger:
    """Application logger handed to ``OrderProcessing``."""

    def __init__(self, name: str = "ditutorial.orders") -> None:
        self._logger = logging.getLogger(name)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


class OrderRepository(ABC):
    @abstractmethod
    def save(self, order: Order) -> Order:
        """Persist ``order`` and return it with its identifier set."""

    @abstractmethod
    def get(self, order_id: int) -> Order:
        """Raise ``KeyError`` when no order has ``order_id``."""

    @abstractmethod
    def count(self) -> int: ...


@final
class SqliteOrderRepository(OrderRepository):
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        connection.execute(
            "CREATE TABLE IF NOT EXISTS orders "
            "(id INTEGER PRIMARY KEY, customer_phone TEXT NOT NULL, total TEXT NOT NULL)"
        )

    @override
    def save(self, order: Order) -> Order:
        cursor = self._connection.execute(
            "INSERT INTO orders (customer_phone, total) VALUES (?, ?)",
            (order.customer_phone, str(order.total)),
        )
        self._connection.commit()
        assert cursor.lastrowid is not None
        return order.with_id(cursor.lastrowid)

    @override
    def get(self, order_id: int) -> Order:
        row = self._connection.execute(
            "SELECT customer_phone, total FROM orders WHERE id = ?", (order_id,)
        ).fetchone()
        if row is None:
            raise KeyError(order_id)
        customer_phone, total = row
        return Order(id=order_id, customer_phone=customer_phone, total=Decimal(total))

    @override
    def count(self) -> int:
        (count,) = self._connection.execute("SELECT COUNT(*) FROM orders").fetchone()
        return count


@final
class InMemoryOrderRepository(OrderRepository):
    def __init__(self) -> None:
        self._orders: dict[int, Order] = {}

    @override
    def save(self, order: Order) -> Order:
        saved = order.with_id(len(self._orders) + 1)
        self._orders[saved.id] = saved  # type: ignore[index]
        return saved

    @override
    def get(self, order_id: int) -> Order:
        return self._orders[order_id]

    @override
    def count(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders.values())


class Notifier(ABC):
    @abstractmethod
    def notify(self, phone: str, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class SmsMessage:
    sender: str
    phone: str
    text: str


@dataclass(kw_only=True)
class SmsGateway:
    """
    Outbox standing in for an SMS provider.

    Messages are logged and kept in :attr:`sent`; nothing leaves the process.
    """

    sent: list[SmsMessage] = field(default_factory=list)

    def send(self, message: SmsMessage) -> None:
        logger.info(
            "SMS from %s to %s: %s", message.sender, message.phone, message.text
        )
        self.sent.append(message)


@final
class SmsNotifier(Notifier):
    def __init__(self, gateway: SmsGateway, sender: str) -> None:
        self._gateway = gateway
        self._sender = sender

    @override
    def notify(self, phone: str, message: str) -> None:
        if not phone:
            raise ValueError("Cannot send an SMS without a phone number")
        self._gateway.send(SmsMessage(sender=self._sender, phone=phone, text=message))


@final
class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.notifications: list[tuple[str, str]] = []

    @override
    def notify(self, phone: str, message: str) -> None:
        self.notifications.append((phone, message))


def confirmation_text(order: Order) -> str:
    return f"Заказ №{order.id} на сумму {order.total} принят"


DEMO_ORDER = Order(customer_phone="+70000000000", total=Decimal("990.00"))
