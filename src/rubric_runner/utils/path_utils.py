# src/rubric_runner/utils/path_utils.py
from pathlib import Path


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed rubric_runner package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def directory_url(directory: Path) -> str:
        """
        Returns the file:// URL of a directory, with a trailing slash so that
        relative references resolve inside it.
        """
        uri = directory.resolve().as_uri()
        return uri if uri.endswith("/") else uri + "/"
