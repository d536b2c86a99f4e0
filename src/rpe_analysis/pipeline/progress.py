"""Cooperative progress reporting and cancellation."""

from ..exceptions import AnalysisCancelled


class ProgressMonitor:
    """
    Progress sink and cancellation flag shared with a running analysis.

    Stages call :meth:`checkpoint` between cell chunks and folds. After
    :meth:`cancel` the next checkpoint raises :class:`AnalysisCancelled`,
    aborting the run before the current stage hands back any output.

    Parameters
    ----------
    callback : callable, optional
        ``callback(percent, message)`` invoked on every stage update
    verbose : bool, optional
        Print stage updates (default: False)
    """

    def __init__(self, callback=None, verbose=False):
        self.callback = callback
        self.verbose = verbose
        self.cancelled = False
        self.history = []

    def update(self, percent, message):
        self.checkpoint()
        self.history.append((percent, message))
        if self.verbose:
            print(f"[{percent:3d}%] {message}")
        if self.callback is not None:
            self.callback(percent, message)

    def cancel(self):
        self.cancelled = True

    def checkpoint(self):
        if self.cancelled:
            raise AnalysisCancelled("Analysis cancelled by caller")
