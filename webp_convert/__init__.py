"""Batch WebP conversion and SVG optimization tools."""

from .batch import BatchDriver, BatchReport, FileOutcome
from .config import ConverterConfig, EncodeConfig, OptimizerConfig
from .file_resolver import filter_supported, resolve_files
from .geometry_utils import GeometryUtils
from .pipeline import TransformPipeline, output_path_for
from .svg_optimizer import SvgOptimizer

__all__ = [
    "BatchDriver",
    "BatchReport",
    "FileOutcome",
    "ConverterConfig",
    "EncodeConfig",
    "OptimizerConfig",
    "filter_supported",
    "resolve_files",
    "GeometryUtils",
    "TransformPipeline",
    "output_path_for",
    "SvgOptimizer",
]
