"""Variable substitution for location templates.

Locations may contain ``${name}`` or ``${name:argument}`` references:

- ``${env_var:NAME}``: environment variable
- ``${system_property:KEY}``: one of ``user.home``, ``user.dir``, ``os.name``, ``file.separator``
- ``${user_home}``, ``${workspace_loc}`` and any configured name (e.g. ``${eclipse_home}``)
"""

import logging
import os
import platform
import re
from collections.abc import Mapping
from pathlib import Path

from target_platform.errors import InvalidLocationError

logger = logging.getLogger(__name__)

_VARIABLE = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


class VariableSubstitution:
    """Expand variable references in location templates.

    Args:
        variables: Named values, merged over the built-in ``user_home`` and ``workspace_loc``
        environ: Environment used by ``env_var`` (default: ``os.environ``)
    """

    def __init__(self, variables: Mapping[str, str] | None = None, environ: Mapping[str, str] | None = None):
        self._variables = {
            "user_home": str(Path.home()),
            "workspace_loc": str(Path.cwd()),
        }
        if variables:
            self._variables.update({name: str(value) for name, value in variables.items()})
        self._environ = environ if environ is not None else os.environ

    def expand(self, template: str) -> str:
        """Replace every variable reference in ``template``.

        Raises:
            InvalidLocationError: A reference is unknown or cannot be resolved
        """
        return _VARIABLE.sub(lambda match: self._value(match.group(1), match.group(2), template), template)

    def expand_path(self, template: str) -> Path:
        """Expand ``template`` and return it as an absolute path (``~`` expanded)."""
        return Path(self.expand(template)).expanduser().absolute()

    def _value(self, name: str, argument: str | None, template: str) -> str:
        if name == "env_var":
            if not argument:
                raise InvalidLocationError(f"Variable env_var requires an argument in '{template}'")
            value = self._environ.get(argument)
            if value is None:
                raise InvalidLocationError(f"Environment variable '{argument}' is not set (in '{template}')")
            return value

        if name == "system_property":
            value = self._system_property(argument)
            if value is None:
                raise InvalidLocationError(f"Unknown system property '{argument}' in '{template}'")
            return value

        if name in self._variables:
            if argument:
                logger.debug(f"Ignoring argument '{argument}' of variable '{name}'")
            return self._variables[name]

        raise InvalidLocationError(f"Unknown variable '{name}' in '{template}'")

    def _system_property(self, key: str | None) -> str | None:
        properties = {
            "user.home": str(Path.home()),
            "user.dir": str(Path.cwd()),
            "os.name": platform.system(),
            "file.separator": os.sep,
        }
        return properties.get(key or "")
