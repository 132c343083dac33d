import sys

from kafka_topics.cli import main

sys.exit(main())
