"""
Kafka Event Publisher
Publishes document and author change events to the configured topic using a
CloudEvents-style envelope. Publishing is fire-and-forget: failures are
logged and reported as ``False``, never raised to the caller.
"""

import asyncio
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from aiokafka import AIOKafkaProducer
from aiokafka.errors import KafkaError

from app.core.config import config
from app.core.logger import logger
from app.middleware.trace_context import get_correlation_id

DOCUMENT_CREATED = "document.created"
DOCUMENT_UPDATED = "document.updated"
DOCUMENT_DELETED = "document.deleted"
AUTHOR_CREATED = "author.created"
AUTHOR_UPDATED = "author.updated"
AUTHOR_DELETED = "author.deleted"


def _serialize(value: Dict[str, Any]) -> bytes:
    return json.dumps(value, default=str).encode("utf-8")


class KafkaEventPublisher:
    """Publisher for sending change events to a Kafka topic"""

    def __init__(
        self,
        bootstrap_servers: List[str],
        topic: Optional[str],
        service_name: str,
        client_id: str = None,
        enabled: bool = True,
        send_timeout: float = 5.0,
    ):
        self.bootstrap_servers = bootstrap_servers
        self.topic = topic
        self.service_name = service_name
        self.client_id = client_id or service_name
        self.enabled = enabled
        self.send_timeout = send_timeout
        self.producer: Optional[AIOKafkaProducer] = None

    async def start(self) -> None:
        """Start the Kafka producer"""
        if not self.enabled:
            logger.info("Kafka publishing disabled", metadata={"event": "kafka_disabled"})
            return

        logger.info(
            f"Connecting to Kafka... brokers={self.bootstrap_servers}, topic={self.topic}",
            metadata={"event": "kafka_connecting"}
        )
        producer = AIOKafkaProducer(
            bootstrap_servers=self.bootstrap_servers,
            client_id=self.client_id,
            value_serializer=_serialize,
            key_serializer=lambda key: str(key).encode("utf-8"),
        )
        await producer.start()
        self.producer = producer
        logger.info("Kafka producer started", metadata={"event": "kafka_connected", "topic": self.topic})

    async def stop(self) -> None:
        """Flush pending messages and stop the producer"""
        if self.producer is not None:
            await self.producer.stop()
            self.producer = None
            logger.info("Kafka producer stopped", metadata={"event": "kafka_disconnected"})

    def is_healthy(self) -> bool:
        """True when the producer is started"""
        return self.producer is not None

    def build_event(
        self,
        event_type: str,
        data: Dict[str, Any],
        correlation_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Wrap ``data`` in the event envelope"""
        return {
            "eventId": str(uuid.uuid4()),
            "eventType": event_type,
            "source": self.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "correlationId": correlation_id,
            "data": data,
        }

    async def publish_event(
        self,
        event_type: str,
        data: Dict[str, Any],
        key: Any = None,
        correlation_id: Optional[str] = None,
    ) -> bool:
        """
        Enqueue an event on the topic without waiting for broker acknowledgement.

        Enqueueing itself can block on topic metadata or a full send buffer while
        the broker is unreachable; that wait is capped at ``send_timeout`` seconds
        so a broker outage never stalls the calling request.

        Returns:
            bool: True if the message was handed to the producer, False otherwise
        """
        correlation_id = correlation_id or get_correlation_id()
        metadata = {
            "eventType": event_type,
            "topic": self.topic,
            "key": key,
            "correlationId": correlation_id,
        }

        if self.producer is None:
            level = logger.debug if not self.enabled else logger.warning
            level(f"Event not published, producer unavailable: {event_type}", metadata=metadata)
            return False

        event = self.build_event(event_type, data, correlation_id)
        headers = [("eventType", event_type.encode("utf-8"))]
        if correlation_id:
            headers.append(("correlationId", correlation_id.encode("utf-8")))

        try:
            await asyncio.wait_for(
                self.producer.send(self.topic, value=event, key=key, headers=headers),
                timeout=self.send_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Timed out enqueueing event: {event_type}",
                metadata={**metadata, "timeout_seconds": self.send_timeout},
            )
            return False
        except KafkaError as e:
            logger.error(f"Failed to publish event: {event_type}", error=e, metadata=metadata)
            return False

        metadata["eventId"] = event["eventId"]
        logger.info(f"Published event: {event_type}", metadata=metadata)
        return True

    async def publish_document_created(self, document_id: int, document_data: Dict[str, Any],
                                       created_by: str = "system", correlation_id: str = None) -> bool:
        return await self.publish_event(
            DOCUMENT_CREATED,
            {"documentId": document_id, "createdBy": created_by, "document": document_data},
            key=document_id,
            correlation_id=correlation_id,
        )

    async def publish_document_updated(self, document_id: int, document_data: Dict[str, Any],
                                       updated_by: str = "system", correlation_id: str = None) -> bool:
        return await self.publish_event(
            DOCUMENT_UPDATED,
            {"documentId": document_id, "updatedBy": updated_by, "document": document_data},
            key=document_id,
            correlation_id=correlation_id,
        )

    async def publish_document_deleted(self, document_id: int, deleted_by: str = "system",
                                       correlation_id: str = None) -> bool:
        return await self.publish_event(
            DOCUMENT_DELETED,
            {"documentId": document_id, "deletedBy": deleted_by},
            key=document_id,
            correlation_id=correlation_id,
        )

    async def publish_author_created(self, author_id: int, author_data: Dict[str, Any],
                                     created_by: str = "system", correlation_id: str = None) -> bool:
        return await self.publish_event(
            AUTHOR_CREATED,
            {"authorId": author_id, "createdBy": created_by, "author": author_data},
            key=author_id,
            correlation_id=correlation_id,
        )

    async def publish_author_updated(self, author_id: int, author_data: Dict[str, Any],
                                     updated_by: str = "system", correlation_id: str = None) -> bool:
        return await self.publish_event(
            AUTHOR_UPDATED,
            {"authorId": author_id, "updatedBy": updated_by, "author": author_data},
            key=author_id,
            correlation_id=correlation_id,
        )

    async def publish_author_deleted(self, author_id: int, deleted_by: str = "system",
                                     correlation_id: str = None) -> bool:
        return await self.publish_event(
            AUTHOR_DELETED,
            {"authorId": author_id, "deletedBy": deleted_by},
            key=author_id,
            correlation_id=correlation_id,
        )


# Process-wide publisher, started and stopped in the application lifespan
event_publisher = KafkaEventPublisher(
    bootstrap_servers=config.kafka_servers,
    topic=config.kafka_topic,
    service_name=config.service_name,
    client_id=config.kafka_client_id,
    enabled=config.kafka_enabled,
    send_timeout=config.kafka_send_timeout_seconds,
)


def get_event_publisher() -> KafkaEventPublisher:
    """FastAPI dependency returning the shared publisher"""
    return event_publisher
