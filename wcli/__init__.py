"""WCLI - quick commands on an EC2 instance over a single SSH session."""

from wcli.constants import VERSION

__version__ = VERSION
