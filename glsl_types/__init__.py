from glsl_types.extractor import extract_interface
from glsl_types.generator import generate_artifact, write_artifact
from glsl_types.imports import collect_interface, resolve_imports
from glsl_types.pipeline import CycleFailed, CycleSucceeded, run_cycle
from glsl_types.target import TargetType
from glsl_types.validator import validate_and_merge

__version__ = "0.1.0"


__all__ = [
    "CycleFailed",
    "CycleSucceeded",
    "TargetType",
    "collect_interface",
    "extract_interface",
    "generate_artifact",
    "resolve_imports",
    "run_cycle",
    "validate_and_merge",
    "write_artifact",
]
