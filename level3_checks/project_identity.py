"""Declared project identity.

A deliverable declares who it is through ``PRODUCT_ID`` in one of its
environment files, or failing that through the ``name`` in package.json.
A malformed or unreadable source is treated as if the value were absent.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from dotenv import dotenv_values

from utils import get_logger

logger = get_logger(__name__)

_COLLAPSIBLE = re.compile(r"[-_\s]")


def collapse_identifier(value: str) -> str:
    """Lowercase and drop hyphens, underscores and whitespace."""
    return _COLLAPSIBLE.sub("", value.lower())


@dataclass(frozen=True)
class ProjectIdentity:
    """Identifiers a project declares about itself."""

    product_id: Optional[str] = None
    found_in: Optional[str] = None
    package_name: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        """Preferred identifier: PRODUCT_ID, else the package name."""
        return self.product_id or self.package_name

    @property
    def identifiers(self) -> tuple[str, ...]:
        """Every declared identifier."""
        return tuple(v for v in (self.product_id, self.package_name) if v)

    def refers_to(self, codename: str) -> bool:
        """True if one of this project's identifiers collapses to contain ``codename``."""
        target = collapse_identifier(codename)
        if not target:
            return False
        return any(target in collapse_identifier(value) for value in self.identifiers)


def read_declared_identifier(
    root: Path,
    env_files: Iterable[str],
    key: str = "PRODUCT_ID",
) -> tuple[Optional[str], Optional[str]]:
    """Read the declared identifier from the first env file that has one.

    An exact ``key`` wins; a prefixed variant such as ``NEXT_PUBLIC_PRODUCT_ID``
    is accepted as well.

    Returns:
        Tuple of (identifier, env file name) or (None, None)
    """
    for env_file in env_files:
        env_path = Path(root) / env_file
        if not env_path.is_file():
            continue
        try:
            values = dotenv_values(env_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Ignoring unreadable env file {env_path}: {e}")
            continue

        candidates = [values.get(key)]
        candidates.extend(v for k, v in values.items() if k.endswith(f"_{key}"))
        for value in candidates:
            if value and value.strip():
                return value.strip(), env_file

    return None, None


def read_package_name(root: Path) -> Optional[str]:
    """Read ``name`` from package.json, if present and well-formed."""
    package_path = Path(root) / "package.json"
    if not package_path.is_file():
        return None
    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug(f"Ignoring malformed {package_path}: {e}")
        return None

    name = package.get("name") if isinstance(package, dict) else None
    return name.strip() if isinstance(name, str) and name.strip() else None


def load_project_identity(
    root: Path,
    env_files: Iterable[str] = (".env", ".env.local", ".env.production"),
    key: str = "PRODUCT_ID",
) -> ProjectIdentity:
    """Collect the identifiers a project declares about itself."""
    product_id, found_in = read_declared_identifier(root, env_files, key)
    return ProjectIdentity(
        product_id=product_id,
        found_in=found_in,
        package_name=read_package_name(root),
    )
