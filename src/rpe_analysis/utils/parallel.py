"""Chunked per-cell evaluation with optional process fan-out."""

import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm


def _chunks(n_items, chunk_size):
    return [(start, min(start + chunk_size, n_items))
            for start in range(0, n_items, chunk_size)]


def map_chunks(func, coords, *args, n_jobs=1, chunk_size=256, checkpoint=None,
               verbose=False, desc=None):
    """
    Evaluate ``func`` over contiguous chunks of ``coords`` and gather in order.

    Each chunk is independent, so chunks may be dispatched to joblib workers
    without synchronization. Results are concatenated in chunk order, which
    keeps output slots aligned with input rows.

    Parameters
    ----------
    func : callable
        ``func(coords_chunk, *args) -> sequence`` with one entry per row. Must
        be a module-level function when ``n_jobs != 1``.
    coords : ndarray of shape (n, 2)
        Cell coordinates [lat, lng]
    *args
        Extra read-only arguments passed to every chunk
    n_jobs : int, optional
        Number of joblib workers; 1 evaluates in-process (default: 1)
    chunk_size : int, optional
        Rows per chunk (default: 256)
    checkpoint : callable, optional
        Called before each chunk is dispatched; may raise to abort the stage
    verbose : bool, optional
        Show a tqdm progress bar (default: False)
    desc : str, optional
        Progress bar label

    Returns
    -------
    list
        Per-row results in input order
    """
    coords = np.asarray(coords, dtype=float)
    spans = _chunks(len(coords), chunk_size)
    if verbose:
        spans = tqdm(spans, desc=desc, unit='chunk')

    def tasks():
        for start, end in spans:
            if checkpoint is not None:
                checkpoint()
            yield start, end

    if n_jobs == 1:
        gathered = [func(coords[start:end], *args) for start, end in tasks()]
    else:
        gathered = Parallel(n_jobs=n_jobs)(
            delayed(func)(coords[start:end], *args) for start, end in tasks()
        )

    results = []
    for chunk in gathered:
        results.extend(chunk)
    return results
