from ._constants import (
    A_WGS84,
    E_WGS84,
    ERR_ACC_MEMS,
    ERR_ACC_MOTION2,
    ERR_ACC_TACTICAL,
    G_0,
    OMEGA_IE,
    SGOLAY_ORDER,
    SGOLAY_WINDOW,
)

__all__ = [
    "A_WGS84",
    "E_WGS84",
    "ERR_ACC_MEMS",
    "ERR_ACC_MOTION2",
    "ERR_ACC_TACTICAL",
    "G_0",
    "OMEGA_IE",
    "SGOLAY_ORDER",
    "SGOLAY_WINDOW",
]
