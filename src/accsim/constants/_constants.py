import numpy as np

# WGS-84 ellipsoid
A_WGS84: float = 6_378_137.0  # equatorial radius in m
E_WGS84: float = 0.0818191908425  # first eccentricity

# Earth rotation rate in rad/s
OMEGA_IE: float = 7.292115e-5

# Standard gravity in m/s^2
G_0: float = 9.80665

# Savitzky-Golay smoothing of velocity-derived accelerations
SGOLAY_WINDOW: int = 45
SGOLAY_ORDER: int = 10

# Noise and bias parameters for SMS Motion Gen 2
ERR_ACC_MOTION2: dict[str, float] = {
    "N": 0.0007,  # (m/s^2)/sqrt(Hz)
    "B": 0.0005,  # m/s^2
    "tau_cb": 50.0,  # s
}

# Consumer grade MEMS accelerometer
ERR_ACC_MEMS: dict[str, float] = {
    "N": 0.002,  # (m/s^2)/sqrt(Hz)
    "B": 0.0015,  # m/s^2
    "tau_cb": 100.0,  # s
    "bc": 0.05,  # m/s^2
}

# Tactical grade accelerometer, bias instability without correlation time
ERR_ACC_TACTICAL: dict[str, float] = {
    "N": 0.0003,  # (m/s^2)/sqrt(Hz)
    "B": 0.0002,  # m/s^2
    "tau_cb": np.inf,  # s
    "bc": 0.002,  # m/s^2
}
