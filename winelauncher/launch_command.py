import shlex
from collections.abc import Mapping, Sequence
from pathlib import PurePath

from .runtime_types import TerminalCommand


class LaunchCommand():
	"""An executable and its arguments, kept as a list and never squished into one string except for showing to humans, so nothing needs to go through a shell"""
	def __init__(self, exe_name: PurePath | str, exe_args: Sequence[str], env_vars: Mapping[str, str] | None=None, working_directory: PurePath | None=None):
		self._exe_name = exe_name
		self._exe_args = tuple(exe_args)
		self._env_vars = {} if env_vars is None else dict(env_vars)
		self.working_directory = working_directory

	@property
	def exe_name(self) -> PurePath | str:
		return self._exe_name

	@property
	def exe_args(self) -> Sequence[str]:
		return self._exe_args

	@property
	def env_vars(self) -> Mapping[str, str]:
		return self._env_vars

	@property
	def argv(self) -> Sequence[str]:
		return (str(self._exe_name), *self._exe_args)

	def make_linux_command_string(self) -> str:
		exe_args_quoted = ' '.join(shlex.quote(arg) for arg in self.exe_args)
		exe_name_quoted = shlex.quote(str(self.exe_name))
		if self.env_vars:
			environment_vars = ' '.join(shlex.quote(k + '=' + v) for k, v in self.env_vars.items())
			return f'env {environment_vars} {exe_name_quoted} {exe_args_quoted}'.rstrip()
		return f'{exe_name_quoted} {exe_args_quoted}'.rstrip()

	def wrap_in_terminal(self, terminal: TerminalCommand) -> 'LaunchCommand':
		"""Uses the terminal as the executable which then has this command as arguments, keeping env vars and working directory"""
		if terminal.takes_single_argument:
			inner: Sequence[str] = (shlex.join(self.argv), )
		else:
			inner = self.argv
		return LaunchCommand(terminal.binary, (terminal.exec_flag, *inner), dict(self._env_vars), self.working_directory)

	def __repr__(self) -> str:
		return f'{type(self).__name__}({self.make_linux_command_string()!r})'
