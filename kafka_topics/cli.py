import logging
import sys

from kafka_topics.admin import TopicAdmin
from kafka_topics.arguments import UsageError, parse_arguments
from kafka_topics.dispatch import build_admin_config, dispatch
from kafka_topics.settings import get_settings, load_environment

EXIT_USAGE = 2


def configure_logging(level, verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
    # kafka-python is chatty at INFO
    logging.getLogger("kafka").setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv=None, admin_factory=TopicAdmin):
    load_environment()
    settings = get_settings()

    try:
        config = parse_arguments(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE
    if config is None:
        return 0

    configure_logging(settings.log_level, config.verbose)

    admin = admin_factory(build_admin_config(config), defaults=settings.client_defaults())
    return dispatch(config, admin)


if __name__ == "__main__":
    sys.exit(main())
