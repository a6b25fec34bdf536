from __future__ import annotations

import os
from pathlib import Path

__all__: list[str] = [
    "FileUtils",
    "InvalidFileTypeError",
]


class FileUtils:
    """Path helpers shared by the configuration loader and the translation cache."""

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Convert a user-supplied path to an absolute path.

        Expands environment variables (e.g., $HOME, %APPDATA%) and ``~``, and resolves relative
        paths against the current working directory.

        Args:
            path (str | Path): The input path (e.g., "~/greeter/$APP_ENV/cache.json").
            strict (bool): Raise if the path does not exist. Defaults to False.

        Returns:
            Path: The absolute path.
        """
        expanded: str = os.path.expandvars(str(path))
        user_expanded: Path = Path(expanded).expanduser()

        if user_expanded.is_absolute():
            return user_expanded.resolve(strict=strict)
        return (Path.cwd() / user_expanded).resolve(strict=strict)

    @staticmethod
    def read_bytes(file_path: Path) -> bytes | None:
        """Read a whole file.

        Returns:
            bytes | None: File contents, or None if the file does not exist.

        Raises:
            InvalidFileTypeError: If the path is a directory.
            OSError: If the file exists but cannot be read.
        """
        if not file_path.exists():
            return None
        if file_path.is_dir():
            msg = f"Invalid file type (directory): {file_path}"
            raise InvalidFileTypeError(msg)
        return file_path.read_bytes()

    @staticmethod
    def overwrite(file_path: Path, data: bytes) -> None:
        """Replace the contents of a file, creating it if needed.

        The write is not atomic; a crash part-way through leaves a truncated file.

        Raises:
            OSError: If the file cannot be opened or written.
        """
        with file_path.open("wb") as fp:
            fp.write(data)


class InvalidFileTypeError(OSError):
    """The path names something other than a regular file."""
