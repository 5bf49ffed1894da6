"""
Topic declaration at startup
"""

from aiokafka.admin import AIOKafkaAdminClient, NewTopic
from aiokafka.errors import NoError, TopicAlreadyExistsError, for_code

from app.core.config import config
from app.core.logger import logger


def build_topic(name: str, partitions: int = 1, replication_factor: int = 1) -> NewTopic:
    """NewTopic for ``name`` with explicit partition and replica counts"""
    if not name or not name.strip():
        raise ValueError("Topic name must not be empty")
    return NewTopic(
        name=name.strip(),
        num_partitions=partitions,
        replication_factor=replication_factor,
    )


async def ensure_topic(admin: AIOKafkaAdminClient, topic: NewTopic) -> bool:
    """
    Create ``topic`` unless it already exists.

    Returns:
        bool: True if the topic was created, False if it was already present

    Raises:
        KafkaError: If the broker rejects the topic for any other reason
    """
    existing = await admin.list_topics()
    if topic.name in existing:
        logger.info(f"Kafka topic already exists: {topic.name}", metadata={"event": "kafka_topic_exists"})
        return False

    response = await admin.create_topics([topic])
    for topic_error in response.topic_errors:
        name, error_code = topic_error[0], topic_error[1]
        error_type = for_code(error_code)
        if error_type is NoError:
            continue
        if error_type is TopicAlreadyExistsError:
            # Created concurrently by another instance
            logger.info(f"Kafka topic already exists: {name}", metadata={"event": "kafka_topic_exists"})
            return False

        message = topic_error[2] if len(topic_error) > 2 and topic_error[2] else error_type.description
        logger.error(
            f"Failed to create Kafka topic: {name}",
            metadata={"event": "kafka_topic_create_failed", "error_code": error_code, "error": message}
        )
        raise error_type(f"Failed to create topic {name}: {message}")

    logger.info(
        f"Created Kafka topic: {topic.name}",
        metadata={
            "event": "kafka_topic_created",
            "partitions": topic.num_partitions,
            "replication_factor": topic.replication_factor,
        }
    )
    return True


async def declare_topic() -> None:
    """Declare the configured event topic on the broker"""
    topic = build_topic(
        config.kafka_topic,
        config.kafka_topic_partitions,
        config.kafka_topic_replication_factor,
    )
    admin = AIOKafkaAdminClient(
        bootstrap_servers=config.kafka_servers,
        client_id=f"{config.kafka_client_id}-admin",
    )
    await admin.start()
    try:
        await ensure_topic(admin, topic)
    finally:
        await admin.close()
