import numpy as np
from numpy.typing import ArrayLike, NDArray


def _per_axis(value: ArrayLike, name: str) -> NDArray[np.float64]:
    """
    Broadcast a scalar to three axes, or check that a vector has one entry per
    axis.
    """
    value = np.asarray(value, dtype=np.float64)
    if value.ndim == 0:
        return np.full(3, float(value))
    if value.shape != (3,):
        raise ValueError(f"'{name}' must be a scalar or have shape (3,).")
    return value.copy()


class AccelerometerProfile:
    """
    Error profile of an accelerometer triad.

    Each per-axis parameter is either a scalar, which applies to all three axes,
    or a vector with one entry per body axis.

    Parameters
    ----------
    sample_freq : float
        Sampling frequency in Hz.
    white_noise_std : float or array-like, shape (3,)
        Standard deviation of the white noise in m/s^2.
    fixed_bias_bound : float or array-like, shape (3,)
        Bound of the constant bias in m/s^2. One bias per axis is drawn uniformly
        in ``[-fixed_bias_bound, fixed_bias_bound]`` for each simulation.
    bias_corr_time : float or array-like, shape (3,), default ``inf``
        Correlation time of the bias instability in seconds. An infinite (or
        ``None``) correlation time gives an uncorrelated bias instability term
        for that axis, otherwise a first-order Gauss-Markov process is used.
    bias_drift_std : float or array-like, shape (3,), default 0.0
        Standard deviation of the bias instability in m/s^2. Steady-state
        standard deviation for Gauss-Markov axes, per-sample standard deviation
        for uncorrelated axes.
    """

    def __init__(
        self,
        sample_freq: float,
        white_noise_std: ArrayLike,
        fixed_bias_bound: ArrayLike,
        bias_corr_time: ArrayLike | None = np.inf,
        bias_drift_std: ArrayLike = 0.0,
    ) -> None:
        self._sample_freq = float(sample_freq)
        if not np.isfinite(self._sample_freq) or self._sample_freq <= 0.0:
            raise ValueError("'sample_freq' must be a positive, finite number.")

        if bias_corr_time is None:
            bias_corr_time = np.inf
        elif np.ndim(bias_corr_time) == 1:
            bias_corr_time = [
                np.inf if tau is None else tau
                for tau in bias_corr_time  # type: ignore[union-attr]
            ]

        self._white_noise_std = _per_axis(white_noise_std, "white_noise_std")
        self._fixed_bias_bound = _per_axis(fixed_bias_bound, "fixed_bias_bound")
        self._bias_corr_time = _per_axis(bias_corr_time, "bias_corr_time")
        self._bias_drift_std = _per_axis(bias_drift_std, "bias_drift_std")

        for name in ("white_noise_std", "fixed_bias_bound", "bias_drift_std"):
            if np.any(getattr(self, name) < 0.0):
                raise ValueError(f"'{name}' must be non-negative.")
        if np.isnan(self._bias_corr_time).any():
            raise ValueError("'bias_corr_time' must not be NaN.")
        if np.any(self._bias_corr_time <= 0.0):
            raise ValueError("'bias_corr_time' must be positive.")

    @classmethod
    def from_noise_params(
        cls,
        fs: float,
        N: ArrayLike,
        B: ArrayLike = 0.0,
        tau_cb: ArrayLike | None = None,
        bc: ArrayLike = 0.0,
    ) -> "AccelerometerProfile":
        """
        Create an error profile from noise parameters as found in datasheets or
        from an Allan variance analysis.

        The dicts in :mod:`accsim.constants` can be passed as keyword arguments,
        e.g. ``AccelerometerProfile.from_noise_params(100.0, **ERR_ACC_MOTION2)``.

        Parameters
        ----------
        fs : float
            Sampling frequency in Hz.
        N : float or array-like, shape (3,)
            White noise spectral density in (m/s^2)/sqrt(Hz).
        B : float or array-like, shape (3,), default 0.0
            Bias instability in m/s^2.
        tau_cb : float or array-like, shape (3,), optional
            Correlation time of the bias instability in seconds. ``None``
            (default) means no correlation.
        bc : float or array-like, shape (3,), default 0.0
            Bound of the constant bias in m/s^2.
        """
        sigma_wn = np.asarray(N, dtype=np.float64) * np.sqrt(fs)
        return cls(
            fs,
            white_noise_std=sigma_wn,
            fixed_bias_bound=bc,
            bias_corr_time=tau_cb,
            bias_drift_std=B,
        )

    @property
    def sample_freq(self) -> float:
        """Sampling frequency in Hz."""
        return self._sample_freq

    @property
    def dt(self) -> float:
        """Sampling period in seconds."""
        return 1.0 / self._sample_freq

    @property
    def white_noise_std(self) -> NDArray[np.float64]:
        return self._white_noise_std.copy()

    @property
    def fixed_bias_bound(self) -> NDArray[np.float64]:
        return self._fixed_bias_bound.copy()

    @property
    def bias_corr_time(self) -> NDArray[np.float64]:
        return self._bias_corr_time.copy()

    @property
    def bias_drift_std(self) -> NDArray[np.float64]:
        return self._bias_drift_std.copy()

    @property
    def correlated(self) -> NDArray[np.bool_]:
        """Per-axis mask of axes with a Gauss-Markov bias instability."""
        return np.isfinite(self._bias_corr_time)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sample_freq={self._sample_freq!r}, "
            f"white_noise_std={self._white_noise_std.tolist()!r}, "
            f"fixed_bias_bound={self._fixed_bias_bound.tolist()!r}, "
            f"bias_corr_time={self._bias_corr_time.tolist()!r}, "
            f"bias_drift_std={self._bias_drift_std.tolist()!r})"
        )
