"""Sources for neighborhood parameter data."""

from .base import (
    DataSourceUnavailable,
    ParameterSource,
    SourceResult,
    parameters_from_dict,
    parameters_to_dict,
)
from .file import FileParameterSource
from .static import StaticParameterSource

__all__ = [
    "DataSourceUnavailable",
    "ParameterSource",
    "SourceResult",
    "FileParameterSource",
    "StaticParameterSource",
    "parameters_from_dict",
    "parameters_to_dict",
]
