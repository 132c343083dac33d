import logging
from dataclasses import dataclass, field
from typing import List

from kafka import KafkaAdminClient
from kafka.admin import NewTopic
from kafka.errors import KafkaConfigurationError, KafkaError, for_code

logger = logging.getLogger(__name__)

_BOOLEANS = {"true": True, "false": False}
_INTEGER_SUFFIXES = ("_ms", "_bytes", "_per_connection", "_samples")
SECURITY_PROTOCOLS = ("PLAINTEXT", "SSL", "SASL_PLAINTEXT", "SASL_SSL")


@dataclass
class AdminResult:
    error: bool = False
    detail: str = ""
    topics: List[str] = field(default_factory=list)

    @classmethod
    def failed(cls, exc):
        return cls(error=True, detail=str(exc) or type(exc).__name__)


def normalize_key(key):
    # security.protocol / request-timeout-ms -> security_protocol / request_timeout_ms
    return key.strip().replace(".", "_").replace("-", "_").lower()


def coerce_value(key, value):
    """Turn a command-line string into the type kafka-python expects for ``key``."""
    if not isinstance(value, str) or "password" in key:
        return value
    if key == "bootstrap_servers":
        return [server.strip() for server in value.split(",") if server.strip()]
    if key == "api_version":
        try:
            return tuple(int(part) for part in value.split("."))
        except ValueError:
            return value
    lowered = value.strip().lower()
    if lowered in _BOOLEANS and isinstance(KafkaAdminClient.DEFAULT_CONFIG.get(key), bool):
        return _BOOLEANS[lowered]
    if key.endswith(_INTEGER_SUFFIXES):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def client_configs(configs, defaults=None):
    """
    Translate a staged string map into KafkaAdminClient keyword arguments.

    Later keys win when two spellings normalise to the same option.
    """
    merged = dict(defaults or {})
    for key, value in configs.items():
        name = normalize_key(key)
        merged[name] = coerce_value(name, value)
    return merged


def _raise_for_topic_errors(entries):
    # entries are (topic, error_code[, error_message]) tuples
    for entry in entries or ():
        topic, error_code = entry[0], entry[1]
        if not error_code:
            continue
        message = entry[2] if len(entry) > 2 and entry[2] else topic
        raise for_code(error_code)(message)


class TopicAdmin:
    """Admin capability over KafkaAdminClient; every call returns an AdminResult."""

    def __init__(self, configs, defaults=None, client_factory=KafkaAdminClient):
        self.configs = client_configs(configs, defaults)
        self._client_factory = client_factory

    def _connect(self):
        protocol = self.configs.get("security_protocol")
        if protocol is not None and protocol not in SECURITY_PROTOCOLS:
            raise KafkaConfigurationError(
                f"security_protocol must be in {', '.join(SECURITY_PROTOCOLS)}, got {protocol!r}"
            )
        try:
            return self._client_factory(**self.configs)
        except (AssertionError, TypeError, ValueError) as e:
            # kafka-python rejects some option values with plain asserts and type errors
            raise KafkaConfigurationError(str(e) or type(e).__name__) from e

    def _call(self, action):
        admin_client = None
        try:
            logger.info(f"Connecting to Kafka at {self.configs.get('bootstrap_servers')}")
            admin_client = self._connect()
            return action(admin_client)
        except KafkaError as e:
            logger.debug("Admin request failed", exc_info=True)
            return AdminResult.failed(e)
        finally:
            if admin_client is not None:
                admin_client.close()

    def list_topics(self):
        def action(admin_client):
            topics = list(admin_client.list_topics())
            logger.info(f"Found {len(topics)} topics")
            return AdminResult(topics=topics)

        return self._call(action)

    def create_topics(self, names, num_partitions, replication_factor, properties=None):
        def action(admin_client):
            new_topics = [
                NewTopic(
                    name=name,
                    num_partitions=num_partitions,
                    replication_factor=replication_factor,
                    topic_configs=dict(properties or {}),
                )
                for name in names
            ]
            response = admin_client.create_topics(new_topics=new_topics)
            _raise_for_topic_errors(getattr(response, "topic_errors", None))
            logger.info(f"Created topics: {', '.join(names)}")
            return AdminResult()

        return self._call(action)

    def delete_topics(self, names):
        def action(admin_client):
            response = admin_client.delete_topics(list(names))
            _raise_for_topic_errors(getattr(response, "topic_error_codes", None))
            logger.info(f"Deleted topics: {', '.join(names)}")
            return AdminResult()

        return self._call(action)
