"""Template registries and directory loading on top of kida."""

from strata.templating.loading import load_directory
from strata.templating.registry import TemplateSet, TemplateSource, create_environment

__all__ = [
    "TemplateSet",
    "TemplateSource",
    "create_environment",
    "load_directory",
]
