"""Shared fixtures: fake Wine installations whose bin/wine64 is a little shell script, so real processes get launched without needing Wine"""

import stat
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from winelauncher.config import reset_config


def write_script(path: Path, body: str) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(f'#!/bin/sh\n{body}\n', encoding='utf-8')
	path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
	return path


@pytest.fixture
def make_wine_install(tmp_path: Path) -> Callable[..., Path]:
	"""Returns a function that makes a Wine installation folder whose wine64 runs the given shell script body"""
	def _make(body: str = 'exit 0', name: str = 'wine') -> Path:
		install = tmp_path / name
		write_script(install / 'bin' / 'wine64', body)
		return install
	return _make


@pytest.fixture
def prefix(tmp_path: Path) -> Path:
	path = tmp_path / 'prefix'
	path.mkdir()
	return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
	"""Don't read the config file or environment of whoever is running the tests"""
	config_dir = tmp_path / 'config'
	config_dir.mkdir()
	monkeypatch.setattr('winelauncher.settings.settings.config_dir', config_dir)
	for name in ('WINELAUNCHER_WINE_PATH', 'WINELAUNCHER_WINEPREFIX', 'WINELAUNCHER_VERBOSITY', 'WINELAUNCHER_IS_PROTON', 'WINELAUNCHER_TERMINAL', 'WINELAUNCHER_LOGGING_LEVEL', 'LOG_LEVEL'):
		monkeypatch.delenv(name, raising=False)
	reset_config()
	yield config_dir
	reset_config()
