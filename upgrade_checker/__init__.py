"""
git-upgrade-checker: compare the files changed by the last update of a git
tree against a second directory tree.
"""

__version__ = "0.0.32"
