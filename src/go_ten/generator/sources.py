"""Read-only template sources.

A template source maps a template set identifier (e.g. ``web-api-stdlib``)
to an ordered list of entries. The materializer only depends on the
``TemplateSource`` protocol, so tests can use ``InMemoryTemplateSource``
instead of the bundled templates.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Protocol

from go_ten.generator.errors import TemplateNotFoundError
from go_ten.generator.placeholders import is_template_path

_SET_ID = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class TemplateEntry:
    """A single file or directory inside a template set.

    Attributes:
        path: POSIX-style path relative to the template set root
        content: File bytes (empty for directories)
        is_template: True if the file carries the ``.tmpl`` marker
        is_dir: True for directory markers
    """

    path: str
    content: bytes = b""
    is_template: bool = False
    is_dir: bool = False

    @classmethod
    def file(cls, path: str, content: bytes) -> TemplateEntry:
        return cls(path=path, content=content, is_template=is_template_path(path))

    @classmethod
    def directory(cls, path: str) -> TemplateEntry:
        return cls(path=path, is_dir=True)


class TemplateSource(Protocol):
    """Protocol for read-only template storage."""

    def available_sets(self) -> list[str]:
        """Return the identifiers of all template sets, sorted."""
        ...

    def list_files(self, set_id: str) -> list[TemplateEntry]:
        """Return every entry of a template set in lexical path order.

        Raises:
            TemplateNotFoundError: If no set matches ``set_id``.
        """
        ...


class InMemoryTemplateSource:
    """Template source backed by a ``{set_id: {path: bytes}}`` mapping.

    Directory markers are derived from the file paths.
    """

    def __init__(self, sets: Mapping[str, Mapping[str, bytes | str]]) -> None:
        self._sets: dict[str, dict[str, bytes]] = {}
        for set_id, files in sets.items():
            self._sets[set_id] = {
                path.strip("/"): data.encode("utf-8") if isinstance(data, str) else data
                for path, data in files.items()
            }

    def available_sets(self) -> list[str]:
        return sorted(self._sets)

    def list_files(self, set_id: str) -> list[TemplateEntry]:
        if set_id not in self._sets:
            raise TemplateNotFoundError(set_id, self.available_sets())

        files = self._sets[set_id]
        directories: set[str] = set()
        for path in files:
            parts = path.split("/")[:-1]
            for i in range(1, len(parts) + 1):
                directories.add("/".join(parts[:i]))

        entries = [TemplateEntry.directory(d) for d in directories]
        entries.extend(TemplateEntry.file(p, data) for p, data in files.items())
        return sorted(entries, key=lambda e: e.path)


class PackageTemplateSource:
    """Template source reading the template sets bundled with go-ten.

    Each immediate subdirectory of the ``templates`` resource directory is
    one template set.
    """

    def __init__(self, package: str = "go_ten", directory: str = "templates") -> None:
        self.package = package
        self.directory = directory

    def _root(self) -> Traversable:
        return resources.files(self.package).joinpath(self.directory)

    def available_sets(self) -> list[str]:
        root = self._root()
        if not root.is_dir():
            return []
        return sorted(
            child.name
            for child in root.iterdir()
            if child.is_dir() and not child.name.startswith(("_", "."))
        )

    def list_files(self, set_id: str) -> list[TemplateEntry]:
        set_root = self._root().joinpath(set_id)
        if not _SET_ID.match(set_id) or not set_root.is_dir():
            raise TemplateNotFoundError(set_id, self.available_sets())

        entries: list[TemplateEntry] = []
        self._walk(set_root, "", entries)
        return sorted(entries, key=lambda e: e.path)

    def _walk(self, node: Traversable, prefix: str, entries: list[TemplateEntry]) -> None:
        for child in node.iterdir():
            if child.name == "__pycache__":
                continue
            path = f"{prefix}{child.name}"
            if child.is_dir():
                entries.append(TemplateEntry.directory(path))
                self._walk(child, f"{path}/", entries)
            else:
                entries.append(TemplateEntry.file(path, child.read_bytes()))
