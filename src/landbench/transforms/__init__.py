"""Transforms of candidate solutions and objective values.

Problems are built from a base landscape and two chains of transforms, held
by a [`ProblemTransforms`][landbench.transforms.ProblemTransforms] object:

- Variable transforms, derived from
  [`VariableTransform`][landbench.transforms.base.VariableTransform], map a
  candidate solution to the input of the landscape. Examples are the
  [`ShiftScaleRotate`][landbench.transforms.ShiftScaleRotate] transform of
  continuous problems, and the bit-level transforms of pseudo-Boolean
  problems.
- Objective transforms, derived from
  [`ObjectiveTransform`][landbench.transforms.base.ObjectiveTransform], map
  the value of the landscape to the reported objective value.

All transforms are pure, their results depend only on their input and on the
parameters given at construction. The module also provides the underlying
functions, which may be used directly.
"""

from ._continuous import (
    PermuteVariables,
    ShiftScaleRotate,
    compose,
    composition_weights,
    permute,
    shift_scale_rotate,
    split_by_proportions,
)
from ._discrete import (
    Epistasis,
    FlipBits,
    Neutrality,
    Ruggedness,
    SelectPositions,
    dummy_positions,
    epistasis,
    neutrality,
    permute_bits,
    ruggedness1,
    ruggedness2,
    ruggedness3_table,
    xor_bits,
)
from ._objective import ObjectiveBias, ObjectiveScaleShift
from ._transforms import ProblemTransforms

__all__ = [
    "Epistasis",
    "FlipBits",
    "Neutrality",
    "ObjectiveBias",
    "ObjectiveScaleShift",
    "PermuteVariables",
    "ProblemTransforms",
    "Ruggedness",
    "SelectPositions",
    "ShiftScaleRotate",
    "compose",
    "composition_weights",
    "dummy_positions",
    "epistasis",
    "neutrality",
    "permute",
    "permute_bits",
    "ruggedness1",
    "ruggedness2",
    "ruggedness3_table",
    "shift_scale_rotate",
    "split_by_proportions",
    "xor_bits",
]
