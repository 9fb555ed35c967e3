"""Build-fatal error taxonomy: every failure names the offending source"""

from pathlib import Path


class BuildError(Exception):
    """Base class for errors that abort a build."""


class ParseError(BuildError):
    """Front-matter is missing, unterminated, or has bad required fields."""

    def __init__(self, path: Path | str, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class RenderError(BuildError):
    """Body markup is structurally unterminated, or a template failed."""

    def __init__(self, path: Path | str, message: str, line: int | None = None):
        self.path = str(path)
        self.message = message
        self.line = line
        where = f"{self.path}:{line}" if line is not None else self.path
        super().__init__(f"{where}: {message}")


class CollisionError(BuildError):
    """Two or more posts resolve to the same slug."""

    def __init__(self, slug: str, paths: list[str]):
        self.slug = slug
        self.paths = sorted(paths)
        super().__init__(f"{self.paths[0]}: slug '{slug}' is also produced by {', '.join(self.paths[1:])}")
