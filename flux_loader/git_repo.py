"""Helpers for locating the local git repo that holds the manifests.

Source labels of resources are relative to a base directory. When loading from
inside a git repo the natural base is the repo root, so that the same file has
the same label no matter which directory the tool was started from.
"""

from functools import cache
import logging
import os
from pathlib import Path

import git

__all__ = [
    "repo_root",
    "default_base",
]

_LOGGER = logging.getLogger(__name__)


@cache
def repo_root(path: Path) -> Path | None:
    """Return the root of the git repo containing `path`, if any."""
    search = path if path.is_dir() else path.parent
    try:
        repo = git.repo.Repo(str(search), search_parent_directories=True)
    except (git.GitError, OSError) as err:
        _LOGGER.debug("No git repo found for %s: %s", path, err)
        return None
    if repo.working_tree_dir is None:
        return None
    return Path(repo.working_tree_dir)


def default_base(path: Path) -> Path:
    """Return the base directory for source labels of resources under `path`."""
    if (root := repo_root(path.resolve())) is not None:
        return root
    return Path(os.getcwd())
