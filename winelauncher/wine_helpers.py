"""Checks that a directory is actually a Wine installation or a Wine prefix. Wine objects use these by default, but you can give them something else"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

wine_executable_subpath = Path('bin', 'wine64')
"""Where the executable lives, relative to the Wine installation path"""

_prefix_markers = ('system.reg', 'drive_c')


def wine_executable(wine_path: Path) -> Path:
	return wine_path / wine_executable_subpath


def validate_wine_path(wine_path: Path) -> bool:
	"""Returns true if wine_path has an executable bin/wine64 in it"""
	exe = wine_executable(wine_path)
	if not exe.is_file():
		logger.debug('%s does not exist or is not a file', exe)
		return False
	return os.access(exe, os.X_OK)


def is_wineprefix(path: Path) -> bool:
	"""Returns true if path looks like a prefix that Wine has already set up"""
	return any(path.joinpath(marker).exists() for marker in _prefix_markers)


def validate_prefix_path(prefix_path: Path) -> bool:
	"""Returns true if prefix_path is an existing prefix or an empty directory that Wine can set up as one, or creates it if it doesn't exist yet
	A non-empty directory that isn't a prefix is not valid, so we don't go and dump a C: drive over the top of someone's stuff"""
	if prefix_path.is_dir():
		if is_wineprefix(prefix_path):
			return True
		if next(prefix_path.iterdir(), None) is None:
			return True
		logger.debug('%s is not empty and does not look like a Wine prefix', prefix_path)
		return False
	if prefix_path.exists():
		logger.debug('%s exists but is not a directory', prefix_path)
		return False

	try:
		prefix_path.mkdir(parents=True)
	except OSError:
		logger.exception('Could not create Wine prefix at %s', prefix_path)
		return False
	logger.info('Created new Wine prefix directory at %s', prefix_path)
	return True
