import logging
import sqlite3
from decimal import Decimal

import pytest

from ditutorial.config import TutorialConfig
from ditutorial.domain import (
    InMemoryOrderRepository,
    Logger,
    Order,
    SmsGateway,
    SmsMessage,
    SmsNotifier,
    SqliteOrderRepository,
    confirmation_text,
)


class TestOrder:
    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            Order(customer_phone="+7", total=Decimal("-1"))

    @pytest.mark.parametrize("total", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_total_rejected(self, total: str) -> None:
        with pytest.raises(ValueError, match="finite"):
            Order(customer_phone="+7", total=Decimal(total))

    def test_with_id_returns_copy(self) -> None:
        order = Order(customer_phone="+7", total=Decimal("10"))
        saved = order.with_id(5)
        assert order.id is None
        assert saved.id == 5
        assert saved.total == order.total

    def test_confirmation_text(self) -> None:
        order = Order(id=3, customer_phone="+7", total=Decimal("99.90"))
        assert confirmation_text(order) == "Заказ №3 на сумму 99.90 принят"


class TestSqliteOrderRepository:
    def test_save_and_get(self) -> None:
        with sqlite3.connect(":memory:") as connection:
            repository = SqliteOrderRepository(connection)
            saved = repository.save(Order(customer_phone="+7", total=Decimal("12.50")))
            assert repository.get(saved.id) == saved
            assert repository.count() == 1
        connection.close()

    def test_missing_order_raises_key_error(self) -> None:
        connection = sqlite3.connect(":memory:")
        repository = SqliteOrderRepository(connection)
        with pytest.raises(KeyError):
            repository.get(42)
        connection.close()

    def test_table_survives_second_repository(self) -> None:
        connection = sqlite3.connect(":memory:")
        SqliteOrderRepository(connection).save(Order(customer_phone="+7", total=Decimal(1)))
        assert SqliteOrderRepository(connection).count() == 1
        connection.close()


class TestInMemoryOrderRepository:
    def test_assigns_sequential_ids(self) -> None:
        repository = InMemoryOrderRepository()
        first = repository.save(Order(customer_phone="+7", total=Decimal(1)))
        second = repository.save(Order(customer_phone="+8", total=Decimal(2)))
        assert (first.id, second.id) == (1, 2)
        assert list(repository) == [first, second]
        with pytest.raises(KeyError):
            repository.get(3)


class TestSmsNotifier:
    def test_sends_through_gateway(self, caplog: pytest.LogCaptureFixture) -> None:
        gateway = SmsGateway()
        notifier = SmsNotifier(gateway, sender="SHOP")
        with caplog.at_level(logging.INFO, logger="ditutorial.domain"):
            notifier.notify("+7", "hi")
        assert gateway.sent == [SmsMessage(sender="SHOP", phone="+7", text="hi")]
        assert "SMS from SHOP to +7: hi" in caplog.messages

    def test_empty_phone_rejected(self) -> None:
        notifier = SmsNotifier(SmsGateway(), sender="SHOP")
        with pytest.raises(ValueError, match="phone"):
            notifier.notify("", "hi")


class TestTutorialConfig:
    def test_defaults(self) -> None:
        config = TutorialConfig.from_environment({})
        assert config == TutorialConfig()
        assert config.database_path == ":memory:"
        assert config.numeric_log_level == logging.INFO

    def test_environment_overrides(self) -> None:
        config = TutorialConfig.from_environment(
            {
                "DITUTORIAL_DATABASE": "orders.sqlite3",
                "DITUTORIAL_SENDER": "SHOP",
                "DITUTORIAL_LOG_LEVEL": "debug",
            }
        )
        assert config.database_path == "orders.sqlite3"
        assert config.sms_sender == "SHOP"
        assert config.numeric_log_level == logging.DEBUG

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="log level"):
            TutorialConfig(log_level="LOUD")

    def test_empty_sender_rejected(self) -> None:
        with pytest.raises(ValueError, match="sms_sender"):
            TutorialConfig(sms_sender="")


def test_logger_writes_to_named_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = Logger("ditutorial.test")
    with caplog.at_level(logging.INFO, logger="ditutorial.test"):
        logger.info("accepted")
        logger.error("rejected")
    assert [(record.levelname, record.message) for record in caplog.records] == [
        ("INFO", "accepted"),
        ("ERROR", "rejected"),
    ]
