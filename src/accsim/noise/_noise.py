import numpy as np
from numba import njit, prange
from numpy.typing import ArrayLike, NDArray

from .._profile import _per_axis


def _rng(seed: int | np.random.Generator | None) -> np.random.Generator:
    """
    Random number generator from a seed. An existing generator is passed
    through, so that consecutive draws share its state.
    """
    return np.random.default_rng(seed)


def _standard_normal(
    n: int, seed: int | np.random.Generator | None = None
) -> NDArray[np.float64]:
    """
    Draw i.i.d. samples from a standard Normal distribution (mean=0, stdev=1), one
    column per axis.

    Parameters
    ----------
    n : int
        Number of samples to generate per axis.
    seed : int or numpy.random.Generator, optional
        Seed used to initialize a random number generator, or the generator to
        draw from.
    """
    return _rng(seed).standard_normal((n, 3))


def fixed_bias(
    bound: ArrayLike, n: int, seed: int | np.random.Generator | None = None
) -> NDArray[np.float64]:
    """
    Generates a constant bias per axis, drawn from a uniform distribution in
    ``[-bound, bound]``.

    Parameters
    ----------
    bound : float or array-like, shape (3,)
        Bias bound per axis.
    n : int
        Number of samples to generate.
    seed : int or numpy.random.Generator, optional
        Seed or random number generator.

    Return
    ------
    numpy.ndarray, shape (n, 3)
        The same bias for all samples of an axis.
    """
    bound = _per_axis(bound, "bound")
    bias = _rng(seed).uniform(-bound, bound)
    return np.tile(bias, (n, 1))


def white_noise(
    std: ArrayLike, n: int, seed: int | np.random.Generator | None = None
) -> NDArray[np.float64]:
    """
    Generates a discrete time Gaussian white noise sequence per axis.

    Parameters
    ----------
    std : float or array-like, shape (3,)
        Standard deviation per axis.
    n : int
        Number of samples to generate.
    seed : int or numpy.random.Generator, optional
        Seed or random number generator.

    Return
    ------
    numpy.ndarray, shape (n, 3)
        Discrete time white noise sequence.
    """
    std = _per_axis(std, "std")
    return std * _standard_normal(n, seed=seed)


@njit(parallel=True)  # type: ignore[misc]
def _gauss_markov_scan(
    a1: NDArray[np.float64], a2: NDArray[np.float64], epsilon: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Run the first-order Gauss-Markov recursion,
    ``x[j] = a1 * x[j - 1] + a2 * epsilon[j - 1]``, starting at zero.

    Each column is an independent process. The recursion is sequential in time,
    the columns are processed in parallel.

    Parameters
    ----------
    a1, a2 : numpy.ndarray, shape (m,)
        Recursion coefficients per column.
    epsilon : numpy.ndarray, shape (n - 1, m)
        Driving standard normal noise.
    """
    n = epsilon.shape[0] + 1
    m = epsilon.shape[1]
    x = np.zeros((n, m))
    for i in prange(m):
        for j in range(1, n):
            x[j, i] = a1[i] * x[j - 1, i] + a2[i] * epsilon[j - 1, i]
    return x


def _gauss_markov_coefficients(
    sigma: NDArray[np.float64], tau_c: NDArray[np.float64], fs: float
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    beta = (1.0 / fs) / tau_c
    a1 = np.exp(-beta)
    a2 = sigma * np.sqrt(1.0 - np.exp(-2.0 * beta))
    return a1, a2


def gauss_markov(
    sigma: ArrayLike,
    tau_c: ArrayLike,
    fs: float,
    n: int,
    seed: int | np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """
    Generates a discrete time first-order Gauss-Markov sequence per axis. The
    sequence starts always at 0.

    The process is discretized as::

        x[j] = exp(-beta) * x[j - 1] + sigma * sqrt(1 - exp(-2 * beta)) * w[j - 1]

    where ``beta = 1 / (fs * tau_c)`` and ``w`` is standard normal white noise.
    The steady-state standard deviation of the process is ``sigma``.

    Parameters
    ----------
    sigma : float or array-like, shape (3,)
        Steady-state standard deviation per axis.
    tau_c : float or array-like, shape (3,)
        Correlation time in seconds per axis. Must be finite.
    fs : float
        Sampling frequency in Hz.
    n : int
        Number of samples to generate.
    seed : int or numpy.random.Generator, optional
        Seed or random number generator.

    Return
    ------
    numpy.ndarray, shape (n, 3)
        Discrete time Gauss-Markov sequence.
    """
    sigma = _per_axis(sigma, "sigma")
    tau_c = _per_axis(tau_c, "tau_c")
    if not np.all(np.isfinite(tau_c)):
        raise ValueError("'tau_c' must be finite.")

    a1, a2 = _gauss_markov_coefficients(sigma, tau_c, fs)
    epsilon = _standard_normal(n - 1, seed=seed)
    return _gauss_markov_scan(a1, a2, epsilon)  # type: ignore[no-any-return]


def bias_instability(
    sigma: ArrayLike,
    tau_c: ArrayLike,
    fs: float,
    n: int,
    seed: int | np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """
    Generates the bias instability (dynamic bias) of each axis.

    Axes with a finite correlation time follow a first-order Gauss-Markov process
    (see :func:`gauss_markov`). Axes with an infinite correlation time get an
    uncorrelated sequence with standard deviation ``sigma``.

    Parameters
    ----------
    sigma : float or array-like, shape (3,)
        Standard deviation per axis.
    tau_c : float or array-like, shape (3,)
        Correlation time in seconds per axis. Use ``numpy.inf`` for no
        correlation.
    fs : float
        Sampling frequency in Hz.
    n : int
        Number of samples to generate.
    seed : int or numpy.random.Generator, optional
        Seed or random number generator.

    Return
    ------
    numpy.ndarray, shape (n, 3)
        Bias instability sequence.
    """
    sigma = _per_axis(sigma, "sigma")
    tau_c = _per_axis(tau_c, "tau_c")
    rng = _rng(seed)

    correlated = np.isfinite(tau_c)
    x = np.zeros((n, 3))

    if np.any(correlated):
        a1 = np.zeros(3)
        a2 = np.zeros(3)
        a1[correlated], a2[correlated] = _gauss_markov_coefficients(
            sigma[correlated], tau_c[correlated], fs
        )
        x_gm = _gauss_markov_scan(a1, a2, _standard_normal(n - 1, seed=rng))
        x[:, correlated] = x_gm[:, correlated]

    if not np.all(correlated):
        x_wn = sigma * _standard_normal(n, seed=rng)
        x[:, ~correlated] = x_wn[:, ~correlated]

    return x
