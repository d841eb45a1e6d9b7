"""Test configuration and fixtures for context-generator."""

from pathlib import Path

import pytest

from context_generator.cli.signal_handler import signal_handler

# Minimal headers that the content sniffer recognizes as binary
PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
ELF_HEADER = b"\x7fELF\x02\x01\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00"


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a small project with a mix of included and excluded entries.

    Layout::

        project/
        ├── .git/config
        ├── __pycache__/main.cpython-312.pyc
        ├── node_modules/left-pad/index.js
        ├── src/
        │   ├── main.py
        │   └── utils/helpers.py
        ├── README.md
        ├── app.log
        ├── go.sum
        └── logo.png
    """
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "config").write_text("[core]\n")
    (root / "__pycache__").mkdir()
    (root / "__pycache__" / "main.cpython-312.pyc").write_bytes(b"\x00\x01\x02")
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = leftPad;\n")
    (root / "src" / "utils").mkdir(parents=True)
    (root / "src" / "main.py").write_text('print("hello")\n')
    (root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 42\n")
    (root / "README.md").write_text("# Project\n")
    (root / "app.log").write_text("started\n")
    (root / "go.sum").write_text("example.com/mod v1.0.0 h1:abc=\n")
    (root / "logo.png").write_bytes(PNG_HEADER)
    return root


@pytest.fixture
def reset_signal_handler():
    """Clear the flags of the process-wide signal handler before and after a test."""
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
    yield signal_handler
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
