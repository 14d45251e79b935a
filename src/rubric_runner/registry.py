# src/rubric_runner/registry.py
import importlib
import logging
import pkgutil
from typing import List

from .core import CheckGroup

logger = logging.getLogger(__name__)


class RubricRegistry:
    """
    Central registry for rubric check groups.

    Dynamically discovers the modules of the 'rubric_runner.checks' package
    that expose a ``DEFINITION`` (instance of `CheckGroup`).
    """

    _groups: List[CheckGroup] = []
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Imports every checks module once and registers its group.
        Groups are kept in their declared order (syntax, structure, style).
        """
        if cls._loaded:
            return

        import rubric_runner.checks as checks_pkg

        groups = []
        for _, name, _ in pkgutil.iter_modules(checks_pkg.__path__):
            full_name = f"rubric_runner.checks.{name}"
            try:
                module = importlib.import_module(full_name)
            except ImportError as e:
                logger.error(f"Error loading check module {name}: {e}")
                raise

            definition = getattr(module, "DEFINITION", None)
            if isinstance(definition, CheckGroup):
                groups.append(definition)
                logger.debug(f"Check group loaded: {definition.category} ({len(definition.checks)} checks)")

        cls._groups = sorted(groups, key=lambda g: g.order)
        cls._loaded = True

    @classmethod
    def get_groups(cls) -> List[CheckGroup]:
        """Returns the registered groups in evaluation order."""
        return cls._groups

    @classmethod
    def get_all_codes(cls) -> List[str]:
        """Returns every check code in evaluation order."""
        return [code for group in cls._groups for code in group.codes]
