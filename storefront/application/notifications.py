import logging
from typing import List

from storefront.domain.models import Event
from storefront.application.interfaces import EventListener

logger = logging.getLogger(__name__)


class NotificationBus:
    """Рассылает события всем подписчикам по порядку подписки.

    Ошибка одного подписчика логируется и не мешает остальным.
    """

    def __init__(self):
        self._listeners: List[EventListener] = []

    def attach(self, listener: EventListener) -> None:
        if any(existing is listener for existing in self._listeners):
            return
        self._listeners.append(listener)
        logger.info(f"Подписчик зарегистрирован: {listener.name()}")

    def detach(self, listener: EventListener) -> None:
        for index, existing in enumerate(self._listeners):
            if existing is listener:
                del self._listeners[index]
                logger.info(f"Подписчик удален: {listener.name()}")
                return

    def publish(self, event: Event) -> None:
        logger.info(f"Уведомление {len(self._listeners)} подписчиков о событии {event.type.value}")
        # снимок списка: подписчик может отписаться во время рассылки
        for listener in list(self._listeners):
            try:
                listener.handle(event)
            except Exception:
                logger.exception(f"Ошибка доставки события {event.type.value} подписчику {listener.name()}")

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def clear(self) -> None:
        self._listeners = []
        logger.info("Все подписчики удалены")
