import copy
import logging
import os
from collections.abc import Callable
from pathlib import Path

from .exceptions import InvalidPrefixError, InvalidRuntimeLayoutError
from .runtime_types import Terminal, VerbosityLevel
from .wine_helpers import (validate_prefix_path, validate_wine_path,
                           wine_executable)

logger = logging.getLogger(__name__)

PathValidator = Callable[[Path], bool]

proton_subdirectories = ('dist', 'files')
"""Where the actual Wine tree lives inside a Proton/compatibility tool bundle, in the order we look for them"""


def resolve_proton_path(proton_path: Path) -> Path:
	""":raises InvalidRuntimeLayoutError: if none of proton_subdirectories exist in there"""
	for subdirectory in proton_subdirectories:
		candidate = proton_path / subdirectory
		if candidate.is_dir():
			return candidate
	raise InvalidRuntimeLayoutError(f'Proton path {proton_path} is not valid, it has no {" or ".join(proton_subdirectories)} directory')


class Wine():
	"""A Wine installation and the prefix it runs with. Validated once when created, and after that it's just configuration and doesn't hold onto anything, so it can be used for as many commands as you like
	terminal is the only thing that can be changed afterwards; treat one Wine as belonging to one place in your code if you change it, or use with_terminal to get your own copy"""

	def __init__(
		self,
		wine_path: os.PathLike[str] | str,
		prefix_path: os.PathLike[str] | str,
		verbosity: VerbosityLevel = VerbosityLevel.Silent,
		*,
		is_proton: bool = False,
		terminal: Terminal = Terminal.Nothing,
		wine_path_validator: PathValidator = validate_wine_path,
		prefix_path_validator: PathValidator = validate_prefix_path,
	) -> None:
		""":raises InvalidRuntimeLayoutError: if wine_path (or the Proton subdirectory in it) is not a valid Wine installation
		:raises InvalidPrefixError: if prefix_path is not a prefix and could not be created as one"""
		path = Path(wine_path)
		if is_proton:
			path = resolve_proton_path(path)

		if not wine_path_validator(path):
			raise InvalidRuntimeLayoutError(f'{"Proton" if is_proton else "Wine"} path {path} is not valid')

		prefix = Path(prefix_path)
		if not prefix_path_validator(prefix):
			raise InvalidPrefixError(f'Wine prefix path {prefix} is invalid and creation failed')

		self._wine_path = path
		self._prefix_path = prefix
		self._verbosity = verbosity
		self._is_proton = is_proton
		self.terminal = terminal

	@property
	def wine_path(self) -> Path:
		return self._wine_path

	@property
	def prefix_path(self) -> Path:
		return self._prefix_path

	@property
	def verbosity(self) -> VerbosityLevel:
		return self._verbosity

	@property
	def is_proton(self) -> bool:
		return self._is_proton

	@property
	def executable(self) -> Path:
		return wine_executable(self._wine_path)

	def with_terminal(self, terminal: Terminal) -> 'Wine':
		"""Returns a copy of this that uses another terminal, without validating everything again"""
		other = copy.copy(self)
		other.terminal = terminal
		return other

	def __repr__(self) -> str:
		return f'{type(self).__name__}({str(self._wine_path)!r}, {str(self._prefix_path)!r}, {self._verbosity}, terminal={self.terminal})'
