from pathlib import Path
from typing import Any

from pydantic import field_validator

from .exceptions import InvalidRuntimeLayoutError
from .runtime_types import Terminal, VerbosityLevel, enum_from_name_or_value
from .settings.settings import Settings
from .wine import Wine


class WineConfig(Settings):
	"""Which Wine to use and how to run it"""

	@classmethod
	def section(cls) -> str:
		return 'Wine'

	@classmethod
	def prefix(cls) -> str:
		return 'wine'

	wine_path: Path | None = None
	"""Path to the Wine installation (the folder that has bin/wine64 in it, or the Proton folder if is_proton)"""

	wineprefix: Path = Path('~/.wine').expanduser()
	"""WINEPREFIX to run things in, created if it doesn't exist"""

	verbosity: VerbosityLevel = VerbosityLevel.Silent
	"""How much debug output Wine should produce"""

	is_proton: bool = False
	"""wine_path is a Proton/compatibility tool folder with Wine inside dist or files"""

	terminal: Terminal = Terminal.Nothing
	"""Terminal emulator to show commands in when asked to"""

	@field_validator('verbosity', mode='before')
	@classmethod
	def parse_verbosity(cls, value: Any) -> Any:
		return enum_from_name_or_value(VerbosityLevel, value)

	@field_validator('terminal', mode='before')
	@classmethod
	def parse_terminal(cls, value: Any) -> Any:
		return enum_from_name_or_value(Terminal, value)

	@field_validator('wine_path', 'wineprefix', mode='after')
	@classmethod
	def expand_user(cls, value: Path | None) -> Path | None:
		return value.expanduser() if value else value

	def make_wine(self) -> Wine:
		""":raises InvalidRuntimeLayoutError: if wine_path is not set or not valid
		:raises InvalidPrefixError: if wineprefix is not valid"""
		if not self.wine_path:
			raise InvalidRuntimeLayoutError('wine_path is not set')
		return Wine(self.wine_path, self.wineprefix, self.verbosity, is_proton=self.is_proton, terminal=self.terminal)
