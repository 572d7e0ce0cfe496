from enum import Enum, auto


class WineLauncherError(Exception):
	"""Base class for everything that goes wrong in here"""

class InvalidRuntimeLayoutError(WineLauncherError):
	"""Wine (or Proton) path does not point to a usable Wine installation"""

class InvalidPrefixError(WineLauncherError):
	"""Wine prefix path is not a valid prefix and could not be created either"""


class LaunchStage(Enum):
	"""Where in the lifecycle of a launched process something broke"""
	Building = auto()
	Starting = auto()
	Feeding = auto()
	Waiting = auto()


class LaunchFailure(WineLauncherError):
	"""Something went wrong at some stage of running a process. The original exception is kept as __cause__
	This is not raised out of execute, it's returned inside Completed.failure instead"""

	def __init__(self, stage: LaunchStage, message: str) -> None:
		self.stage = stage
		super().__init__(message)

	def __str__(self) -> str:
		cause = self.__cause__
		if cause is None:
			return super().__str__()
		return f'{super().__str__()}: {cause}'
