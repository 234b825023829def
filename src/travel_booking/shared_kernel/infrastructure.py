"""
Инфраструктура общего ядра: консольный логгер и шина событий в памяти.
"""

import json
import sys
from typing import Any, Callable, Dict, List, Optional, Type

from .domain import DomainEvent
from .interfaces import IEventBus, ILogger

LOG_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class ConsoleLogger(ILogger):
    """Простая реализация логгера, выводящая сообщения в консоль."""

    def __init__(self, level: str = "INFO"):
        level = level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {level}")
        self._threshold = LOG_LEVELS[level]

    def _emit(self, level: str, message: str, context: Dict[str, Any]) -> None:
        if LOG_LEVELS[level] < self._threshold:
            return
        stream = sys.stderr if LOG_LEVELS[level] >= LOG_LEVELS["WARNING"] else sys.stdout
        print(f"[{level}] {message}", file=stream, flush=True)
        if context:
            print(
                "  Context:",
                json.dumps(context, default=str, indent=2, ensure_ascii=False),
                file=stream,
                flush=True,
            )

    def debug(self, message: str, **kwargs: Any) -> None:
        self._emit("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("INFO", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("WARNING", message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("ERROR", message, kwargs)


class InMemoryEventBus(IEventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._logger = logger or ConsoleLogger()

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие."""
        event_type = type(event)
        if event_type not in self._subscribers:
            self._logger.debug(f"No subscribers for event type {event_type.__name__}")
            return

        self._logger.debug(
            f"Publishing event: {event_type.__name__}", event=event.model_dump()
        )

        for handler in self._subscribers[event_type]:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for {event_type.__name__}",
                    error=str(e),
                    event=event.model_dump(),
                )

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def subscribe(self, event_type: Type[DomainEvent], handler: Callable) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")
