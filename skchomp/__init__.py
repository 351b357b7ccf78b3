# flake8: noqa

import importlib
import importlib.metadata


_SUBMODULES = [
    "constraints",
    "errors",
    "goal",
    "interpolation",
    "io",
    "model",
    "optimizer",
    "parameters",
    "planner",
    "recovery",
    "resample",
    "trajectory",
    "velocity",
]
__all__ = _SUBMODULES


def __getattr__(name):
    if name == "__version__":
        return importlib.metadata.version('scikit-chomp')
    if name in _SUBMODULES:
        return importlib.import_module("skchomp." + name)
    raise AttributeError(
        "module {} has no attribute {}".format(__name__, name))


def __dir__():
    return __all__ + ['__version__']
