import argparse
import enum
import sys
from typing import List, Optional, Tuple

from kafka import __version__ as kafka_version
from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError, field_validator


class UsageError(Exception):
    """Bad command line: reported as a single line, never with a traceback."""


class Operation(enum.Enum):
    LIST = "list"
    CREATE = "create"
    DELETE = "delete"


class InvocationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    bootstrap_server: str
    operation: Operation
    topic: Optional[str] = None
    partitions: Optional[PositiveInt] = None
    replication_factor: Optional[PositiveInt] = None
    admin_config: List[Tuple[str, str]] = []
    topic_props: List[Tuple[str, str]] = []
    verbose: bool = False

    @field_validator("bootstrap_server")
    @classmethod
    def _non_empty(cls, value):
        if not value.strip():
            raise ValueError("the --bootstrap-server option is required")
        return value


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {text!r}")
    return value


def build_parser():
    parser = _ArgumentParser(
        prog="kafka-topics",
        description=(
            "This tool helps in Kafka topic operations\n"
            f"    (with kafka-python v{kafka_version})"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  %(prog)s --bootstrap-server localhost:9092 --list
  %(prog)s --bootstrap-server localhost:9092 --create --topic orders --partitions 3 --replication-factor 1 --topic-props retention.ms=86400000
  %(prog)s --bootstrap-server localhost:9092 --delete --topic orders
        """,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Print usage information.")
    parser.add_argument(
        "--bootstrap-server",
        help="REQUIRED: One broker from the Kafka cluster.",
    )
    parser.add_argument(
        "--admin-config",
        nargs="+",
        action="extend",
        metavar="KEY=VALUE",
        help="Properties for the Admin Client (e.g. security.protocol=SASL_SSL).",
    )

    parser.add_argument("--list", action="store_true", help="List topics.")
    parser.add_argument("--create", action="store_true", help="Create a topic.")
    parser.add_argument("--delete", action="store_true", help="Delete a topic.")

    parser.add_argument(
        "--topic",
        help="REQUIRED for --create and --delete: the topic name.",
    )
    parser.add_argument(
        "--partitions",
        type=_positive_int,
        help="Only used (and REQUIRED) for topic creation: partitions number of the topic.",
    )
    parser.add_argument(
        "--replication-factor",
        type=_positive_int,
        help="Only used (and REQUIRED) for topic creation: replication factor of the topic.",
    )
    parser.add_argument(
        "--topic-props",
        nargs="+",
        action="extend",
        metavar="KEY=VALUE",
        help="Only used for topic creation: properties for the topic.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")
    return parser


def split_key_values(tokens, option):
    """
    Split ``key=value`` tokens on the first ``=``.

    Args:
        tokens (list): Raw tokens in command-line order
        option (str): Flag name used in the error message

    Returns:
        list: (key, value) pairs in the same order

    Raises:
        UsageError: If a token has no ``=``, or an empty key or value
    """
    pairs = []
    for token in tokens or []:
        key, sep, value = token.partition("=")
        if not sep or not key or not value:
            raise UsageError(
                f"Wrong option for {option}! MUST follow with key=value format: {token!r}"
            )
        pairs.append((key, value))
    return pairs


def _selected_operation(args):
    chosen = [op for op in Operation if getattr(args, op.value)]
    if len(chosen) != 1:
        raise UsageError("MUST choose exactly one operation from '--list/--create/--delete'")
    return chosen[0]


def _check_operation_options(operation, args):
    if operation is Operation.LIST:
        if any(v is not None for v in (args.topic, args.partitions, args.replication_factor, args.topic_props)):
            raise UsageError(
                "The --list operation CANNOT take any '--topic/--partitions/--replication-factor/--topic-props' option!"
            )
    elif operation is Operation.CREATE:
        if args.topic is None or args.partitions is None or args.replication_factor is None:
            raise UsageError(
                "The --create operation MUST be with '--topic/--partitions/--replication-factor' options!"
            )
    else:
        if args.topic is None:
            raise UsageError("The --delete operation MUST be with '--topic' option!")
        if any(v is not None for v in (args.partitions, args.replication_factor, args.topic_props)):
            raise UsageError(
                "The --delete operation CANNOT take any of '--partitions/--replication-factor/--topic-props' options!"
            )


def parse_arguments(argv=None, stdout=None):
    """
    Parse and validate the command line.

    Returns:
        InvocationConfig: The validated invocation, or None when help was printed

    Raises:
        UsageError: On any bad flag combination or malformed key=value token
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help or not argv:
        parser.print_help(file=stdout or sys.stdout)
        return None

    if not args.bootstrap_server:
        raise UsageError("the --bootstrap-server option is required")

    operation = _selected_operation(args)
    _check_operation_options(operation, args)

    try:
        return InvocationConfig(
            bootstrap_server=args.bootstrap_server,
            operation=operation,
            topic=args.topic,
            partitions=args.partitions,
            replication_factor=args.replication_factor,
            admin_config=split_key_values(args.admin_config, "--admin-config"),
            topic_props=split_key_values(args.topic_props, "--topic-props"),
            verbose=args.verbose,
        )
    except ValidationError as e:
        raise UsageError(e.errors()[0]["msg"])
