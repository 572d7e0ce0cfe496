from .executor import execute
from .launch_result import LaunchResult
from .runtime_types import BootState
from .wine import Wine


def boot(wine: Wine, state: BootState=BootState.Init, *, get_output: bool=False, use_terminal: bool=False) -> LaunchResult:
	"""Runs wineboot in the prefix, e.g. BootState.Init to set up a freshly created one, or BootState.Kill to get rid of anything still running in there"""
	return execute(wine, 'wineboot', (state.flag, ), get_output=get_output, use_terminal=use_terminal)
