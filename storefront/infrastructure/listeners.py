import copy
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, List
from pydantic import BaseModel, Field

from storefront.domain.models import Event, EventType, OrderStatus, utcnow
from storefront.application.interfaces import EventListener

logger = logging.getLogger(__name__)


class SentMessage(BaseModel):
    recipient: str
    subject: str
    body: str


class EmailNotifier(EventListener):
    """Имитация email-рассылки"""

    def __init__(self, admin_email: str = "admin@storefront.local"):
        self._admin_email = admin_email
        self.sent: List[SentMessage] = []

    def handle(self, event: Event) -> None:
        payload = event.payload
        if event.type == EventType.ORDER_CREATED:
            order = payload["order"]
            self._send(
                order.customer_name,
                f"Заказ #{order.id} подтвержден",
                f"Ваш заказ на сумму {order.total:.2f} успешно создан",
            )
        elif event.type == EventType.ORDER_STATUS_CHANGED:
            self._send(
                payload["order"].customer_name,
                "Статус заказа обновлен",
                f"Заказ #{payload['order_id']} перешел в статус {payload['new_status'].value}",
            )
        elif event.type == EventType.ORDER_CANCELLED:
            order = payload["order"]
            self._send(
                order.customer_name,
                f"Заказ #{order.id} отменен",
                "Ваш заказ отменен по запросу",
            )
        elif event.type == EventType.PRODUCT_LOW_STOCK:
            product = payload["product"]
            self._send(
                self._admin_email,
                "ВНИМАНИЕ: низкий остаток",
                f"Товар '{product.name}': осталось {product.stock} шт.",
            )
        else:
            logger.info(f"Email: событие не обрабатывается: {event.type}")

    def _send(self, recipient: str, subject: str, body: str) -> None:
        self.sent.append(SentMessage(recipient=recipient, subject=subject, body=body))
        logger.info(f"Email отправлен {recipient}: {subject}")

    def name(self) -> str:
        return "EmailNotifier"


class AuditEntry(BaseModel):
    timestamp: datetime = Field(default_factory=utcnow)
    type: EventType
    payload: dict[str, Any]


class AuditLogger(EventListener):
    """Журнал аудита — только добавление, очистка только явная"""

    def __init__(self):
        self._entries: List[AuditEntry] = []

    def handle(self, event: Event) -> None:
        entry = AuditEntry(type=event.type, payload=copy.deepcopy(event.payload))
        self._entries.append(entry)
        logger.info(f"Аудит: {entry.type.value} в {entry.timestamp.isoformat()}")

    def get_logs(self) -> List[AuditEntry]:
        return list(self._entries)

    def get_logs_by_type(self, event_type: EventType) -> List[AuditEntry]:
        return [entry for entry in self._entries if entry.type == event_type]

    def clear(self) -> None:
        self._entries = []
        logger.info("Журнал аудита очищен")

    def name(self) -> str:
        return "AuditLogger"


class RealtimeStatistics(BaseModel):
    orders_created: int = 0
    orders_completed: int = 0
    orders_cancelled: int = 0
    low_stock_alerts: int = 0
    total_revenue: Decimal = Decimal("0")


class StatisticsCollector(EventListener):
    """Счетчики в реальном времени по потоку событий"""

    def __init__(self):
        self._stats = RealtimeStatistics()

    def handle(self, event: Event) -> None:
        if event.type == EventType.ORDER_CREATED:
            self._stats.orders_created += 1
        elif event.type == EventType.ORDER_STATUS_CHANGED:
            if event.payload["new_status"] == OrderStatus.COMPLETED:
                self._stats.orders_completed += 1
                self._stats.total_revenue += event.payload["order"].total
                logger.info(f"Статистика: выручка {self._stats.total_revenue:.2f}")
        elif event.type == EventType.ORDER_CANCELLED:
            self._stats.orders_cancelled += 1
        elif event.type == EventType.PRODUCT_LOW_STOCK:
            self._stats.low_stock_alerts += 1

    def get_statistics(self) -> RealtimeStatistics:
        return self._stats.model_copy()

    def reset(self) -> None:
        self._stats = RealtimeStatistics()
        logger.info("Статистика сброшена")

    def name(self) -> str:
        return "StatisticsCollector"


class PushNotification(BaseModel):
    title: str
    message: str


class PushNotifier(EventListener):
    """Имитация push-уведомлений — только события заказа"""

    def __init__(self):
        self.sent: List[PushNotification] = []

    def handle(self, event: Event) -> None:
        payload = event.payload
        if event.type == EventType.ORDER_CREATED:
            self._push("Заказ подтвержден", f"Заказ #{payload['order'].id} принят в обработку")
        elif event.type == EventType.ORDER_STATUS_CHANGED:
            self._push("Статус обновлен", f"Заказ #{payload['order_id']} теперь {payload['new_status'].value}")
        elif event.type == EventType.ORDER_CANCELLED:
            self._push("Заказ отменен", f"Заказ #{payload['order'].id} отменен")

    def _push(self, title: str, message: str) -> None:
        self.sent.append(PushNotification(title=title, message=message))
        logger.info(f"Push: {title}. {message}")

    def name(self) -> str:
        return "PushNotifier"
