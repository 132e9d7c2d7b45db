"""Derivation of instance parameters.

Each problem instance is defined by a set of
[`InstanceParameters`][landbench.config.InstanceParameters], derived
deterministically from the function identifier, the instance number and the
dimension. The parameters are either generated from a seed, using the
generators in this module, or read from static tables using a
[`StaticDataLoader`][landbench.instances.StaticDataLoader].
"""

from ._random import (
    gaussian,
    generate_bit_parameters,
    generate_parameters,
    random_bits,
    random_permutation,
    random_rotation,
    random_shift,
    seed_of,
    uniform,
)
from ._static import StaticDataLoader

__all__ = [
    "StaticDataLoader",
    "gaussian",
    "generate_bit_parameters",
    "generate_parameters",
    "random_bits",
    "random_permutation",
    "random_rotation",
    "random_shift",
    "seed_of",
    "uniform",
]
