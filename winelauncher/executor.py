"""Runs commands with a Wine. Each call to execute is completely separate from every other call, the only thing they share is the Wine they are given

Lifecycle of each call: build the LaunchCommand, start it, write the input lines (if there are any) from another thread while reading all of stdout, then wait for it to exit. Anything going wrong ends up as a LaunchFailure inside the returned Completed, rather than being raised"""

import contextlib
import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from threading import Thread
from typing import IO

from .exceptions import LaunchFailure, LaunchStage
from .launch_command import LaunchCommand
from .launch_result import Captured, Completed, LaunchResult
from .wine import Wine

logger = logging.getLogger(__name__)

reserved_env_vars = ('WINEPREFIX', 'WINEDEBUG')
"""These always come from the Wine, and overriding them in env_vars is ignored (in any case)"""
_reserved_env_vars_folded = frozenset(name.casefold() for name in reserved_env_vars)

_launch_errors = (OSError, ValueError, subprocess.SubprocessError)

Arguments = str | Sequence[str]


def make_env_vars(wine: Wine, env_vars: Mapping[str, str] | None=None) -> dict[str, str]:
	"""Environment variables to set on top of the inherited environment: WINEPREFIX and WINEDEBUG from wine, then env_vars except for anything trying to replace those two"""
	env = {
		'WINEPREFIX': str(wine.prefix_path),
		'WINEDEBUG': wine.verbosity.debug_channels,
	}
	if env_vars:
		for k, v in env_vars.items():
			if k.casefold() in _reserved_env_vars_folded:
				logger.debug('Ignoring %s=%s as that is set by the Wine', k, v)
				continue
			env[k] = v
	return env


def make_environment(wine: Wine, env_vars: Mapping[str, str] | None=None, base: Mapping[str, str] | None=None) -> dict[str, str]:
	"""The whole environment a command gets run with, base defaults to the environment of this process"""
	env = dict(os.environ if base is None else base)
	env.update(make_env_vars(wine, env_vars))
	return env


def uses_terminal(wine: Wine, *, get_output: bool=False, use_terminal: bool=False) -> bool:
	"""Output can't be captured if it's going to a terminal window, so get_output wins over use_terminal"""
	return use_terminal and wine.terminal.command is not None and not get_output


def _split_arguments(arguments: Arguments | None) -> Sequence[str]:
	""":raises ValueError: if arguments is a string with a quote that is never closed"""
	if not arguments:
		return ()
	if isinstance(arguments, str):
		#Backslashes are path separators as far as Windows programs are concerned, so only quotes are special here
		lexer = shlex.shlex(arguments, posix=True)
		lexer.whitespace_split = True
		lexer.escape = ''
		lexer.commenters = ''
		return tuple(lexer)
	return tuple(arguments)


def make_launch_command(wine: Wine, command: str, arguments: Arguments | None=None, env_vars: Mapping[str, str] | None=None, *, get_output: bool=False, use_terminal: bool=False, working_directory: os.PathLike[str] | str | None=None) -> LaunchCommand:
	"""Works out what would be run by execute with the same arguments, without running anything
	arguments can be a string, in which case it is split on whitespace outside of quotes (backslashes are left alone), but passing a list is better if anything has spaces in it

	:raises ValueError: if arguments is a string that can't be split"""
	launch = LaunchCommand(
		wine.executable,
		(command, *_split_arguments(arguments)),
		make_env_vars(wine, env_vars),
		Path(working_directory) if working_directory else wine.prefix_path,
	)
	terminal_command = wine.terminal.command
	if terminal_command and uses_terminal(wine, get_output=get_output, use_terminal=use_terminal):
		launch = launch.wrap_in_terminal(terminal_command)
	return launch


def _feed(stdin: IO[str], sequence: Sequence[str], errors: list[Exception]) -> None:
	"""Runs in its own thread, so a child that writes a lot before reading everything doesn't block on a full stdout pipe while we block on a full stdin pipe"""
	try:
		for line in sequence:
			stdin.write(f'{line}\n')
		stdin.close()
	except _launch_errors as ex:
		errors.append(ex)
		#Otherwise closing proc would try flushing to the broken pipe again
		with contextlib.suppress(OSError):
			stdin.close()


def _run(launch: LaunchCommand, sequence: Sequence[str] | None, *, redirect_stdout: bool) -> tuple[int, str | None]:
	""":raises LaunchFailure: if anything goes wrong"""
	try:
		proc = subprocess.Popen(
			launch.argv,
			stdin=subprocess.PIPE if sequence is not None else None,
			stdout=subprocess.PIPE if redirect_stdout else None,
			env=os.environ | dict(launch.env_vars),
			cwd=launch.working_directory,
			encoding='utf-8',
			errors='replace',
		)
	except _launch_errors as ex:
		raise LaunchFailure(LaunchStage.Starting, f'Could not start {launch.exe_name}') from ex

	with proc:
		feed_errors: list[Exception] = []
		feeder = None
		if sequence is not None and proc.stdin:
			feeder = Thread(target=_feed, args=(proc.stdin, sequence, feed_errors), name=f'stdin for {launch.exe_name}', daemon=True)
			feeder.start()

		try:
			output = proc.stdout.read() if proc.stdout else None
			if feeder:
				feeder.join()
			returncode = proc.wait()
		except _launch_errors as ex:
			raise LaunchFailure(LaunchStage.Waiting, f'Could not wait for {launch.exe_name}') from ex

		if feed_errors:
			raise LaunchFailure(LaunchStage.Feeding, f'Could not write input to {launch.exe_name}') from feed_errors[0]
	return returncode, output


def execute(wine: Wine, command: str, arguments: Arguments | None=None, env_vars: Mapping[str, str] | None=None, sequence: Sequence[str] | None=None, *, get_output: bool=False, use_terminal: bool=False, working_directory: os.PathLike[str] | str | None=None) -> LaunchResult:
	"""Runs command (something Wine understands, like an exe path or "winecfg") with wine, blocking until it exits

	:param arguments: Arguments to command, preferably a list
	:param env_vars: Extra environment variables, except WINEPREFIX and WINEDEBUG which are ignored
	:param sequence: Lines to write to stdin, one by one, while output is being read; if None, stdin is not redirected at all
	:param get_output: Return Captured with whatever was written to stdout
	:param use_terminal: Show it in wine.terminal, unless that is Terminal.Nothing or get_output is true
	:param working_directory: Where to run it, defaults to the prefix
	:return: Captured if get_output and it worked, Completed otherwise (check .success or just use it as a bool)"""
	in_terminal = uses_terminal(wine, get_output=get_output, use_terminal=use_terminal)
	try:
		try:
			launch = make_launch_command(wine, command, arguments, env_vars, get_output=get_output, use_terminal=use_terminal, working_directory=working_directory)
		except ValueError as ex:
			raise LaunchFailure(LaunchStage.Building, f'Could not make a command line out of {arguments!r}') from ex

		logger.info('Executing: %s', launch.make_linux_command_string())
		returncode, output = _run(launch, sequence, redirect_stdout=not in_terminal)
	except LaunchFailure as failure:
		logger.error('Could not run %s', command, exc_info=failure)
		return Completed(False, failure=failure)

	if returncode:
		logger.debug('%s exited with status %d', command, returncode)
	if get_output and output is not None:
		return Captured(output, returncode)
	return Completed(True, returncode)
