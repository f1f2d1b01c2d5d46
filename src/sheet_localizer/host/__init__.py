# SPDX-License-Identifier: Apache-2.0
"""Document host implementations."""

from .base import DocumentHost
from .memory import InMemoryHost

__all__ = ["DocumentHost", "InMemoryHost"]
