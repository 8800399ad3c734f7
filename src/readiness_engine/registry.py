"""Rule registry with auto-discovery of StatusRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from readiness_engine.rules.base import StatusRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Discovers and manages all StatusRule implementations.

    Auto-discovers rules by scanning the rules/ package tree for any
    concrete subclasses of StatusRule. A new cascade step is added by
    placing a .py file in the appropriate subdirectory and giving it a
    stage and order.
    """

    def __init__(self) -> None:
        self._rules: dict[str, StatusRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all StatusRule subclasses."""
        import readiness_engine.rules as rules_pkg

        rules_path = Path(rules_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(rules_pkg.__name__, str(rules_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Recursively import all modules under a package and register rules."""
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                logger.warning("Skipping rule module %s: import failed", module_name, exc_info=True)
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, StatusRule)
                    and attr is not StatusRule
                    and not getattr(attr, "__abstractmethods__", set())
                    and attr.__module__ == module.__name__
                ):
                    self.register(attr())

    def register(self, rule: StatusRule) -> None:
        """Register a rule instance by its rule_id."""
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> StatusRule | None:
        """Retrieve a rule by its rule_id."""
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[StatusRule]:
        """Return all registered rules in cascade order: (stage, order)."""
        return sorted(self._rules.values(), key=lambda r: (r.stage, r.order))

    def cascade_ids(self) -> list[str]:
        """Rule IDs in the order the engine evaluates them."""
        return [rule.rule_id for rule in self.get_all_rules()]

    @property
    def rule_ids(self) -> list[str]:
        """List all registered rule IDs."""
        return list(self._rules.keys())
