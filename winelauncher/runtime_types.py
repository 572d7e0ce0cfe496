#Enums describing how Wine gets run, and the command line bits they turn into

from dataclasses import dataclass
from enum import Enum


class VerbosityLevel(Enum):
	"""How much Wine should spew to stderr, value is what WINEDEBUG gets set to"""
	Silent = '-all'
	WarnAll = '-warn+all'
	FixmeOnly = 'fixme-all'
	Full = '+all'

	@property
	def debug_channels(self) -> str:
		return self.value


@dataclass(frozen=True)
class TerminalCommand():
	"""How to get a terminal emulator to run something inside it"""
	binary: str
	exec_flag: str
	takes_single_argument: bool = False
	"""If true, exec_flag wants the whole command as one string (like --command "wine64 blah.exe") instead of the rest of argv"""


class Terminal(Enum):
	"""Terminal emulators that a Wine command can be shown in"""
	Nothing = None
	XTerm = TerminalCommand('xterm', '-e')
	Konsole = TerminalCommand('konsole', '-e')
	GnomeTerminal = TerminalCommand('gnome-terminal', '--')
	XFCE4Terminal = TerminalCommand('xfce4-terminal', '--command', takes_single_argument=True)
	MATETerminal = TerminalCommand('mate-terminal', '--command', takes_single_argument=True)

	@property
	def command(self) -> TerminalCommand | None:
		return self.value


class BootState(Enum):
	"""Things that wineboot can do to a prefix"""
	EndSession = '--end-session'
	Force = '--force'
	Init = '--init'
	Kill = '--kill'
	Restart = '--restart'
	Shutdown = '--shutdown'
	Update = '--update'

	@property
	def flag(self) -> str:
		return self.value


def enum_from_name_or_value(enum_type: type[Enum], value: object) -> object:
	"""Lets config values be specified as the member name in any case (full, gnometerminal, GnomeTerminal) or the actual value (+all), anything else is passed through for pydantic to complain about"""
	if not isinstance(value, str):
		return value
	folded = value.casefold().replace('_', '').replace('-', '')
	for member in enum_type:
		if member.name.casefold() == folded:
			return member
		if isinstance(member.value, str) and member.value == value:
			return member
		if isinstance(member.value, TerminalCommand) and member.value.binary == value:
			return member
	if folded == 'none':
		return next((member for member in enum_type if member.value is None), value)
	return value
