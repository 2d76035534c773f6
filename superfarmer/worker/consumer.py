"""RabbitMQ consumer loop for the report worker."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import aio_pika
from aio_pika.abc import AbstractIncomingMessage

from superfarmer.core.config import settings
from superfarmer.core.messaging import (
    HARVEST_QUEUE,
    HARVEST_ROUTING_KEY,
    PRICE_HISTORY_QUEUE,
    PRICE_HISTORY_ROUTING_KEY,
)
from superfarmer.db.base import async_session_factory, engine
from superfarmer.worker.handlers import ReportHandler

logger = logging.getLogger(__name__)

Handler = Callable[[bytes], Awaitable[object]]


async def process_message(message: AbstractIncomingMessage, handler: Handler) -> None:
    """Ack on success; reject without requeue when the handler fails."""
    try:
        async with message.process(requeue=False):
            await handler(message.body)
    except Exception:
        logger.exception("Report message %s on %s failed", message.message_id, message.routing_key)


async def run() -> None:
    handler = ReportHandler(async_session_factory)
    bindings: dict[str, tuple[str, Handler]] = {
        PRICE_HISTORY_QUEUE: (PRICE_HISTORY_ROUTING_KEY, handler.handle_price_history),
        HARVEST_QUEUE: (HARVEST_ROUTING_KEY, handler.handle_harvest),
    }

    connection = await aio_pika.connect_robust(settings.rabbitmq_url)
    try:
        channel = await connection.channel()
        await channel.set_qos(prefetch_count=settings.worker_prefetch_count)
        exchange = await channel.declare_exchange(
            settings.report_exchange, aio_pika.ExchangeType.DIRECT, durable=True
        )

        for queue_name, (routing_key, handle) in bindings.items():
            queue = await channel.declare_queue(queue_name, durable=True)
            await queue.bind(exchange, routing_key=routing_key)
            await queue.consume(
                lambda message, handle=handle: process_message(message, handle)
            )
            logger.info("Consuming %s (routing key %s)", queue_name, routing_key)

        await asyncio.Future()
    finally:
        await connection.close()
        await engine.dispose()
