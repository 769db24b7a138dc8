"""Reactive layer — change propagation.

Source changes flow to the rebuild pipeline; output changes flow to the
broadcaster, which tells connected browsers to reload.
"""

from inkwell.reactive.broadcaster import Broadcaster, ReloadConnection
from inkwell.reactive.livereload import RELOAD_ENDPOINT, RELOAD_SCRIPT, OutputWatcher
from inkwell.reactive.pipeline import RebuildPipeline

__all__ = [
    "RELOAD_ENDPOINT",
    "RELOAD_SCRIPT",
    "Broadcaster",
    "OutputWatcher",
    "RebuildPipeline",
    "ReloadConnection",
]
