"""Resolve import specifiers to project-relative file paths.

Only two kinds of specifier are ever resolved: relative ones (``./x``,
``../x``) and ones rewritten by a configured alias (``@/lib/x``).  Anything
else is treated as an external package and yields ``None``.  Resolution probes
the filesystem, so it must run after the project tree is stable.
"""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Sequence

DEFAULT_ALIASES: dict[str, str] = {
    "@": "src",
    "@/": "src/",
    "~": "src",
    "~/": "src/",
}

DEFAULT_EXTENSIONS: list[str] = [".ts", ".tsx", ".js", ".jsx"]


def substitute_alias(specifier: str, aliases: Mapping[str, str]) -> str:
    """Rewrite *specifier* with the first alias that matches, else return it as-is."""
    for alias, target in aliases.items():
        if specifier == alias:
            return target
        if specifier.startswith(alias + "/"):
            return target + specifier[len(alias):]
    return specifier


def resolve_import(
    specifier: str,
    importer: str,
    root: Path,
    aliases: Mapping[str, str] = MappingProxyType(DEFAULT_ALIASES),
    extensions: Sequence[str] = tuple(DEFAULT_EXTENSIONS),
) -> str | None:
    """Return the project-relative POSIX path *specifier* points at, or None.

    *importer* is the project-relative path of the importing file.
    """
    substituted = substitute_alias(specifier, aliases)

    if substituted.startswith(("./", "../")):
        importer_dir = os.path.dirname(importer.replace("\\", "/"))
        target = os.path.normpath(os.path.join(str(root), importer_dir, substituted))
    elif substituted != specifier:
        target = os.path.normpath(os.path.join(str(root), substituted))
    else:
        return None

    found = _probe(target, extensions)
    if found is None:
        return None
    return Path(os.path.relpath(found, str(root))).as_posix()


def _probe(target: str, extensions: Sequence[str]) -> str | None:
    """First existing file among: exact path, path+ext, path/index+ext."""
    if os.path.isfile(target):
        return target

    for ext in extensions:
        candidate = target + ext
        if os.path.isfile(candidate):
            return candidate

    if os.path.isdir(target):
        for ext in extensions:
            candidate = os.path.join(target, "index" + ext)
            if os.path.isfile(candidate):
                return candidate

    return None


class DependencyResolver:
    """Bind an alias map and extension list to :func:`resolve_import`.

    Usage::

        resolver = DependencyResolver({"@": "src"})
        resolver.resolve("@/lib/x", "src/app/page.tsx", Path("/proj"))
        # "src/lib/x.ts" when /proj/src/lib/x.ts exists
    """

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        extensions: Sequence[str] | None = None,
    ) -> None:
        self._aliases = MappingProxyType(
            dict(DEFAULT_ALIASES if aliases is None else aliases)
        )
        self._extensions = tuple(DEFAULT_EXTENSIONS if extensions is None else extensions)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def resolve(self, specifier: str, importer: str, root: Path) -> str | None:
        return resolve_import(specifier, importer, root, self._aliases, self._extensions)
