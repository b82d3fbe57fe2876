"""Spay service creator -- scaffolds Spring Boot services from the Spay template.

Validates and derives a ``ServiceConfig`` from a handful of answers, clones
the template repository, substitutes its placeholders, adds the generated
source and config files, and commits the result.
"""

from .config import Settings
from .materializer import MaterializeError, MaterializeResult, ProjectMaterializer
from .naming import InvalidFormatError
from .service_config import ConfigBuilder, ServiceConfig, placeholder_map

__version__ = "0.1.0"

__all__ = [
    "ConfigBuilder",
    "InvalidFormatError",
    "MaterializeError",
    "MaterializeResult",
    "ProjectMaterializer",
    "ServiceConfig",
    "Settings",
    "placeholder_map",
]
