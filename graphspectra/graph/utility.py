"""Helpers for inspecting compressed sparse matrices."""

import numpy as np
import scipy.sparse


def sprs_mat_outer_starts(matrix: scipy.sparse.spmatrix) -> list[int]:
    """Row start offsets (CSR indptr) of a sparse matrix."""
    return scipy.sparse.csr_matrix(matrix).indptr.tolist()


def sprs_mat_inner_indices(matrix: scipy.sparse.spmatrix) -> list[int]:
    """Column indices (CSR indices) of a sparse matrix."""
    return scipy.sparse.csr_matrix(matrix).indices.tolist()


def sprs_mat_values(matrix: scipy.sparse.spmatrix) -> list[float]:
    """Stored values (CSR data) of a sparse matrix."""
    return scipy.sparse.csr_matrix(matrix).data.tolist()


def is_symmetric(matrix: scipy.sparse.spmatrix) -> bool:
    """Check whether a sparse matrix equals its transpose exactly.

    The comparison is exact: entries that differ only by floating-point
    rounding make the matrix asymmetric.

    Args:
        matrix: Any scipy sparse matrix.

    Returns:
        True if the matrix is square and matrix[i, j] == matrix[j, i]
        for every i, j.
    """
    if matrix.shape[0] != matrix.shape[1]:
        return False
    csr = scipy.sparse.csr_matrix(matrix)
    difference = (csr - csr.T).tocsr()
    return not np.any(difference.data != 0)
