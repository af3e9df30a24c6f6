"""Shared pytest fixtures for cmdpal tests."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from cmdpal.ui.command_palette import CommandDescriptor


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path):
    """Keep settings and log files out of the real config directory."""
    config_dir = tmp_path / "config"
    with (
        patch("cmdpal.config.palette_config.CMDPAL_CONFIG_DIR", config_dir),
        patch("cmdpal.error_handling.CMDPAL_CONFIG_DIR", config_dir),
    ):
        yield config_dir


@pytest.fixture(autouse=True)
def reset_cmdpal_logger():
    """Drop handlers installed by setup_logging during CLI tests."""
    yield
    logger = logging.getLogger("cmdpal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def make_command(command_id, label, description=None, category=None, shortcut=None, action=None):
    """Build a descriptor with a mock action unless one is given."""
    return CommandDescriptor(
        id=command_id,
        label=label,
        description=description,
        category=category,
        shortcut=shortcut,
        action=action if action is not None else MagicMock(name=f"action:{command_id}"),
    )


@pytest.fixture
def sample_catalog():
    """A small catalog covering several categories."""
    return [
        make_command("go-to-file", "Go to File", "Quickly open any file", "navigation", "⌘P"),
        make_command("find-in-files", "Find in Files", "Search across all files", "search", "⌘⇧F"),
        make_command("new-file", "New File", "Create a new file", "file", "⌘N"),
        make_command("toggle-sidebar", "Toggle Sidebar", "Show or hide the sidebar", "view", "⌘B"),
        make_command("save-all", "Save All", "Save all open files", "file"),
    ]


@pytest.fixture
def catalog_yaml(tmp_path):
    """Write a catalog file and return its path."""
    path = tmp_path / "commands.yaml"
    path.write_text(
        """
categories:
  git:
    label: Git
    icon: "🌿"
  file:
    label: Files
    icon: "🗂"
commands:
  - id: git-commit
    label: Commit Changes
    description: Commit staged changes
    category: git
    shortcut: "⌘K"
  - id: git-push
    label: Push
    description: Push to the remote
    category: git
  - id: open-file
    label: Open File
    category: file
""",
        encoding="utf-8",
    )
    return path
