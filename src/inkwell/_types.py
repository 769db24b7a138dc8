"""Shared type definitions for inkwell."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from inkwell.config import InkwellConfig

# Handler bound to a task name; returns a process exit status
type TaskHandler = Callable[[InkwellConfig], int]

# Kind of filesystem change seen by a watcher
type ChangeKind = Literal["created", "modified", "deleted"]

# SSE client identifier
type ClientID = str
