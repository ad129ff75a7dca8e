"""
sbundle - Build bundle staging for container image builds

Allocates the temporary staging directory an image build works in and
carries the descriptor that build phases share.
"""

__version__ = "0.1.0"
__author__ = "sbundle developers"

from sbundle.core.bundle import Bundle
from sbundle.core.allocator import new_bundle
from sbundle.core.sections import should_run

__all__ = [
    "__version__",
    "Bundle",
    "new_bundle",
    "should_run",
]
