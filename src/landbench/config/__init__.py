"""The `landbench.config` module provides configuration classes.

These configuration classes are built using
[`pydantic`](https://docs.pydantic.dev/), which provides robust data validation
and parsing capabilities. Configuration objects are typically created from
dictionaries of configuration values using the `model_validate` method provided
by `pydantic`:

- [`InstanceParameters`][landbench.config.InstanceParameters]: The
  transformation parameters of a problem instance.
- [`StaticDataConfig`][landbench.config.StaticDataConfig]: Where and how to
  load static parameter tables.
- [`ScaleConfig`][landbench.config.ScaleConfig] and
  [`HistogramConfig`][landbench.config.HistogramConfig]: The discretization of
  the histogram logger.
"""

from ._data_config import StaticDataConfig
from ._histogram_config import HistogramConfig, ScaleConfig
from ._instance_parameters import InstanceParameters

__all__ = [
    "HistogramConfig",
    "InstanceParameters",
    "ScaleConfig",
    "StaticDataConfig",
]
