from ._noise import bias_instability, fixed_bias, gauss_markov, white_noise

__all__ = [
    "bias_instability",
    "fixed_bias",
    "gauss_markov",
    "white_noise",
]
