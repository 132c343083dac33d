from kafka_topics.admin import AdminResult, TopicAdmin
from kafka_topics.arguments import InvocationConfig, Operation, UsageError, parse_arguments
from kafka_topics.dispatch import dispatch

__version__ = "0.1.0"

__all__ = [
    "AdminResult",
    "TopicAdmin",
    "InvocationConfig",
    "Operation",
    "UsageError",
    "parse_arguments",
    "dispatch",
]
