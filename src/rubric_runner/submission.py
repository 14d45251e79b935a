# src/rubric_runner/submission.py
import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import SubmissionError
from .managers.config_manager import config_manager
from .utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class Submission(BaseModel):
    """
    One student submission: the HTML document and its stylesheet.

    Both texts are read once and never change afterwards; every tree the
    runner builds is derived from ``html``.
    """
    model_config = ConfigDict(frozen=True)

    directory: Path
    html_path: Path
    css_path: Path
    html: str
    css: str

    @property
    def digest(self) -> str:
        """sha256 of the HTML document, used to prove both trees share one snapshot."""
        return hashlib.sha256(self.html.encode("utf-8")).hexdigest()

    @property
    def base_url(self) -> str:
        """file:// URL of the submission directory for resolving relative references."""
        return PathUtils.directory_url(self.directory)


def _read(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as e:
        raise SubmissionError(f"Required file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SubmissionError(f"Could not read {path}: {e}") from e


def load_submission(
        directory: Union[str, Path],
        html_name: Optional[str] = None,
        css_name: Optional[str] = None
) -> Submission:
    """
    Loads the document and stylesheet of a submission directory.

    Args:
        directory: The submission root (holding index.html, css/ and img/).
        html_name: Relative path of the HTML document; defaults to 'paths.html'.
        css_name: Relative path of the stylesheet; defaults to 'paths.css'.

    Raises:
        SubmissionError: If the directory or one of the files cannot be read.
    """
    root = Path(directory)
    if not root.is_dir():
        raise SubmissionError(f"Submission directory not found: {root}")

    html_path = root / (html_name or config_manager.settings.paths.html)
    css_path = root / (css_name or config_manager.settings.paths.css)

    submission = Submission(
        directory=root.resolve(),
        html_path=html_path,
        css_path=css_path,
        html=_read(html_path),
        css=_read(css_path),
    )
    logger.debug("Loaded submission from %s (html sha256=%s)", root, submission.digest[:12])
    return submission
