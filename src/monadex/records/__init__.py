"""
Records - on-disk deployment configuration.

A successful deployment is written as a flat JSON record; the ``config``
command reads it back.
"""

from .store import DEFAULT_CONFIG_PATH, DeploymentStore, InvalidRecordError, validate_record

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DeploymentStore",
    "InvalidRecordError",
    "validate_record",
]
