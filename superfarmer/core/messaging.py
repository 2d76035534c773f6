"""RabbitMQ publishing for report requests and verification mails."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractRobustConnection

from superfarmer.core.config import settings

logger = logging.getLogger(__name__)

PRICE_HISTORY_ROUTING_KEY = "price-history"
HARVEST_ROUTING_KEY = "harvest"
VERIFY_EMAIL_ROUTING_KEY = "verify-email"

PRICE_HISTORY_QUEUE = "price-history-queue"
HARVEST_QUEUE = "harvest-queue"


class Publisher:
    """Lazily connects on first publish and keeps one robust connection."""

    def __init__(self, url: str = settings.rabbitmq_url) -> None:
        self._url = url
        self._connection: Optional[AbstractRobustConnection] = None
        self._channel: Optional[AbstractChannel] = None
        self._exchanges: dict[str, AbstractExchange] = {}
        self._lock = asyncio.Lock()

    async def _connect(self) -> None:
        logger.info("Connecting to RabbitMQ")
        connection = await aio_pika.connect_robust(self._url)
        try:
            channel = await connection.channel()
        except Exception:
            await connection.close()
            raise
        self._connection, self._channel = connection, channel
        self._exchanges.clear()

    async def _exchange(self, name: str) -> AbstractExchange:
        async with self._lock:
            if self._connection is None or self._connection.is_closed:
                await self._connect()
            if name not in self._exchanges:
                self._exchanges[name] = await self._channel.declare_exchange(
                    name, aio_pika.ExchangeType.DIRECT, durable=True
                )
            return self._exchanges[name]

    async def publish(self, exchange: str, routing_key: str, payload: dict[str, Any]) -> None:
        target = await self._exchange(exchange)
        await target.publish(
            aio_pika.Message(
                body=json.dumps(payload).encode(),
                content_type="application/json",
                delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            ),
            routing_key=routing_key,
        )
        logger.info("Published %s message to %s", routing_key, exchange)

    async def publish_report(self, routing_key: str, payload: dict[str, Any]) -> None:
        await self.publish(settings.report_exchange, routing_key, payload)

    async def publish_mail(self, payload: dict[str, Any]) -> None:
        await self.publish(settings.mail_exchange, VERIFY_EMAIL_ROUTING_KEY, payload)

    async def close(self) -> None:
        async with self._lock:
            if self._connection is not None and not self._connection.is_closed:
                await self._connection.close()
            self._connection = None
            self._channel = None
            self._exchanges.clear()


publisher = Publisher()


async def get_publisher() -> Publisher:
    return publisher
