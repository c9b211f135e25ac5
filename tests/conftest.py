"""
mos6502-asm - Test Configuration
================================

Shared pytest fixtures for the assembler test suite.

It provides:
- A factory for writing source files into a temporary directory
- A fixture that clears assembler environment variables so tests do not
  depend on the developer's shell
"""

from pathlib import Path
from typing import Callable

import pytest


ENV_VARS = ("M6502ASM_OUTPUT_EXT", "M6502ASM_ORIGIN", "M6502ASM_JOBS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Fixture: remove M6502ASM_* variables for every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_source(tmp_path) -> Callable[[str, str], Path]:
    """
    Fixture: write assembly source to tmp_path and return its path.

    Usage:
        path = write_source("prog.s", "LDA #$01\\n")
    """
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
