"""
Configuration management for MDB_INDEXER.

Configuration is optional: AnnotationIndexer works with its defaults, and
nothing reads the environment unless ``IndexerConfig.from_env()`` is called.
"""

import os

from .constants import DEFAULT_ANNOTATION_KEY, ENV_ANNOTATION_KEY, ENV_FAIL_FAST
from .exceptions import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


class IndexerConfig:
    """
    Indexer configuration.

    Example:
        # Defaults: "index" metadata key, fail-fast planning
        indexer = AnnotationIndexer()

        # Collect every invalid field instead of stopping at the first one
        indexer = AnnotationIndexer(IndexerConfig(fail_fast=False))

        # From MDB_INDEXER_* environment variables
        indexer = AnnotationIndexer(IndexerConfig.from_env())
    """

    def __init__(
        self,
        annotation_key: str = DEFAULT_ANNOTATION_KEY,
        fail_fast: bool = True,
        log_prefix: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            annotation_key: Field metadata key holding the index annotation
            fail_fast: Stop planning at the first invalid field
            log_prefix: Prefix for log messages (defaults to the collection name)
        """
        self.annotation_key = annotation_key
        self.fail_fast = fail_fast
        self.log_prefix = log_prefix

    @classmethod
    def from_env(cls, **overrides) -> "IndexerConfig":
        """
        Build a configuration from environment variables.

        Reads MDB_INDEXER_ANNOTATION_KEY and MDB_INDEXER_FAIL_FAST; keyword
        overrides win over the environment.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        fail_fast_raw = os.getenv(ENV_FAIL_FAST, "true").strip().lower()
        if fail_fast_raw in _TRUE_VALUES:
            fail_fast = True
        elif fail_fast_raw in _FALSE_VALUES:
            fail_fast = False
        else:
            raise ConfigurationError(
                f"{ENV_FAIL_FAST} must be true or false",
                config_key=ENV_FAIL_FAST,
                config_value=fail_fast_raw,
            )

        values = {
            "annotation_key": os.getenv(ENV_ANNOTATION_KEY, DEFAULT_ANNOTATION_KEY),
            "fail_fast": fail_fast,
            **overrides,
        }
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self.annotation_key, str) or not self.annotation_key:
            raise ConfigurationError(
                "annotation_key must be a non-empty string",
                config_key="annotation_key",
                config_value=self.annotation_key,
            )

        if not isinstance(self.fail_fast, bool):
            raise ConfigurationError(
                f"fail_fast must be a bool, got {type(self.fail_fast).__name__}",
                config_key="fail_fast",
                config_value=self.fail_fast,
            )
