import logging

import pytest

from toolcmd.cli_utils import CONSOLE_HANDLER_NAME


@pytest.fixture(autouse=True)
def detach_console_handler():
    """Remove the console handler main() installs so it never outlives capsys."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
