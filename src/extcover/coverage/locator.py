"""Resolve profile file identifiers to source files on disk.

Profiles name files by import path (``example.com/svc/handler.go``), the way
``go test`` reports them. Resolution mirrors the lookups ``go/build`` makes:

1. The identifier itself, if it already names an existing file
2. The main module: ``<module path>/<rel>`` -> ``<module root>/<rel>``
3. The module's vendor directory
4. Each GOPATH entry: ``<gopath>/src/<import path>``
5. GOROOT: ``<goroot>/src/<import path>``
6. Extra search paths: ``<search path>/<import path>``
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from extcover.config.models import SourceConfig
from extcover.core.errors import SourceResolutionError
from extcover.core.logging import get_logger

log = get_logger("coverage.locator")

GO_MOD = "go.mod"
_MODULE_DIRECTIVE = re.compile(r'^\s*module\s+"?([^"\s]+)"?', re.MULTILINE)


def find_module_root(start: Path) -> Path | None:
    """Walk up from start to the nearest directory holding go.mod."""
    current = start.resolve()
    while True:
        if (current / GO_MOD).is_file():
            return current
        if current == current.parent:
            return None
        current = current.parent


def read_module_path(module_root: Path) -> str | None:
    """Return the module path declared in go.mod, if any."""
    try:
        content = (module_root / GO_MOD).read_text()
    except OSError:
        return None
    match = _MODULE_DIRECTIVE.search(content)
    return match.group(1) if match else None


@dataclass
class SourceLocator:
    """Maps profile file identifiers to readable paths.

    Usage::

        locator = SourceLocator.from_config(config.source)
        path = locator.find_file("example.com/svc/handler.go")
    """

    module_root: Path | None = None
    module_path: str | None = None
    gopaths: list[Path] = field(default_factory=list)
    goroot: Path | None = None
    search_paths: list[Path] = field(default_factory=list)
    cwd: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_config(cls, config: SourceConfig, *, cwd: Path | None = None) -> SourceLocator:
        cwd = cwd or Path.cwd()
        module_root = (
            Path(config.module_root).expanduser()
            if config.module_root
            else find_module_root(cwd)
        )
        if module_root is not None and not module_root.is_absolute():
            module_root = cwd / module_root

        module_path = read_module_path(module_root) if module_root else None
        gopaths = [Path(p) for p in (config.gopath or "").split(os.pathsep) if p]

        locator = cls(
            module_root=module_root,
            module_path=module_path,
            gopaths=gopaths,
            goroot=Path(config.goroot) if config.goroot else None,
            search_paths=[Path(p) for p in config.search_paths],
            cwd=cwd,
        )
        log.debug(
            "locator_configured",
            module_root=str(module_root) if module_root else None,
            module_path=module_path,
            gopaths=[str(p) for p in gopaths],
            search_paths=config.search_paths,
        )
        return locator

    def candidates(self, name: str) -> list[Path]:
        """All paths tried for name, in lookup order."""
        found: list[Path] = []
        direct = Path(name)
        found.append(direct if direct.is_absolute() else self.cwd / direct)

        if self.module_root is not None:
            if self.module_path and (
                name == self.module_path or name.startswith(self.module_path + "/")
            ):
                rel = name[len(self.module_path) :].lstrip("/")
                found.append(self.module_root / rel)
            found.append(self.module_root / "vendor" / name)

        found.extend(gopath / "src" / name for gopath in self.gopaths)
        if self.goroot is not None:
            found.append(self.goroot / "src" / name)
        found.extend(root / name for root in self.search_paths)
        return found

    def find_file(self, name: str) -> Path:
        """Resolve a profile file identifier.

        Raises:
            SourceResolutionError: If no candidate location holds the file.
        """
        tried = self.candidates(name)
        for path in tried:
            if path.is_file():
                log.debug("source_resolved", file=name, path=str(path))
                return path
        raise SourceResolutionError.not_found(name, [str(p) for p in tried])
