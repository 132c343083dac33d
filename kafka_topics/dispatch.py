import logging
import sys

from kafka_topics.arguments import Operation

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_admin_config(config):
    """Broker address first, then every --admin-config pair (last write wins)."""
    admin_config = {"bootstrap_servers": config.bootstrap_server}
    for key, value in config.admin_config:
        admin_config[key] = value
    return admin_config


def build_topic_properties(config):
    return {key: value for key, value in config.topic_props}


def _report(result, stderr):
    if result.error:
        print(f"Error: {result.detail}", file=stderr)
        return EXIT_FAILURE
    return EXIT_SUCCESS


def dispatch(config, admin, stdout=None, stderr=None):
    """
    Run the one operation selected by ``config`` against ``admin``.

    Args:
        config (InvocationConfig): Validated invocation
        admin: Object exposing list_topics/create_topics/delete_topics returning AdminResult
        stdout: Stream for listed topic names (default sys.stdout)
        stderr: Stream for the error line (default sys.stderr)

    Returns:
        int: Process exit status
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if config.operation is Operation.LIST:
        result = admin.list_topics()
        if result.error:
            return _report(result, stderr)
        for topic in result.topics:
            print(topic, file=stdout)
        return EXIT_SUCCESS

    if config.operation is Operation.CREATE:
        logger.info(
            f"Creating topic {config.topic} "
            f"(partitions={config.partitions}, replication_factor={config.replication_factor})"
        )
        result = admin.create_topics(
            [config.topic],
            config.partitions,
            config.replication_factor,
            build_topic_properties(config),
        )
        return _report(result, stderr)

    logger.info(f"Deleting topic {config.topic}")
    return _report(admin.delete_topics([config.topic]), stderr)
