"""
scheduler.py
------------
"Run this again before the next redraw", as an explicit cancellable handle.

The controller asks a scheduler for one frame at a time; schedule() returns a
FrameHandle and handle.cancel() guarantees the callback will not run
afterwards. The Qt implementation lives next to the widget
(ui_components/wheel_widget.py) so the engine stays importable without a GUI.
"""


class FrameHandle:
    """Returned by schedule(). cancel() is idempotent."""

    def __init__(self, cancel_fn=None):
        self._cancel_fn = cancel_fn
        self.cancelled = False

    def cancel(self):
        if self.cancelled:
            return
        self.cancelled = True
        if self._cancel_fn is not None:
            self._cancel_fn()


class FrameScheduler:
    """Interface: schedule(callback) -> FrameHandle"""

    def schedule(self, callback):
        raise NotImplementedError
