"""Project bootstrap domain exports."""

from .project_bootstrap import BootstrapError, bootstrap_project_environment

__all__ = ["BootstrapError", "bootstrap_project_environment"]
