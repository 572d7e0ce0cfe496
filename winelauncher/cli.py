"""Command line frontend: run one thing with the configured Wine and exit"""

import logging
import sys
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from winelauncher.config import apply_arguments, current_config, make_argument_parser
from winelauncher.exceptions import InvalidPrefixError, InvalidRuntimeLayoutError
from winelauncher.executor import execute
from winelauncher.launch_result import Captured
from winelauncher.runtime_types import BootState, enum_from_name_or_value
from winelauncher.settings.settings import MainConfig
from winelauncher.util.utils import LaunchFailureFormatter
from winelauncher.wine_config import WineConfig
from winelauncher.wineboot import boot

logger = logging.getLogger(__name__)

exit_launch_failed = 1
exit_bad_config = 2


def _setup_logging(level: str) -> None:
	stream_handler = logging.StreamHandler()
	stream_handler.setFormatter(
		LaunchFailureFormatter(
			fmt='%(asctime)s:%(name)s:%(funcName)s:%(levelname)s:%(message)s'
		)
	)
	package_logger = logging.getLogger('winelauncher')
	package_logger.handlers.clear()
	package_logger.addHandler(stream_handler)
	package_logger.setLevel(level)


def _parse_env_vars(pairs: Sequence[str]) -> Mapping[str, str]:
	""":raises ValueError: if something is not NAME=VALUE"""
	env_vars = {}
	for pair in pairs:
		name, sep, value = pair.partition('=')
		if not sep or not name:
			raise ValueError(f'{pair} should be in the form NAME=VALUE')
		env_vars[name] = value
	return env_vars


def _parse_boot_state(value: str) -> BootState:
	state = enum_from_name_or_value(BootState, value)
	if not isinstance(state, BootState):
		raise ValueError(value)
	return state


def main(argv: Sequence[str] | None=None) -> int:
	parser = make_argument_parser(prog=f'python -m {__package__}')
	parser.add_argument('command', nargs='?', help='Thing for Wine to run, e.g. an exe path or winecfg')
	parser.add_argument('arguments', nargs='*', help='Arguments to the command')
	parser.add_argument('--get-output', action='store_true', help='Print what the command writes to stdout once it has finished')
	parser.add_argument('--use-terminal', action='store_true', help='Show the command in the configured terminal (ignored with --get-output)')
	parser.add_argument('--working-directory', help='Run in this directory instead of the prefix')
	parser.add_argument('--env', action='append', default=[], metavar='NAME=VALUE', help='Set an environment variable for the command, can be used more than once')
	parser.add_argument('--input-line', action='append', dest='input_lines', metavar='LINE', help='Write this line to stdin of the command, can be used more than once')
	parser.add_argument('--boot', type=_parse_boot_state, metavar='STATE', help=f'Run wineboot instead of a command (one of: {", ".join(state.name for state in BootState)})')
	args = parser.parse_intermixed_args(argv)

	try:
		apply_arguments(args)
		_setup_logging(current_config(MainConfig).logging_level.upper())
		env_vars = _parse_env_vars(args.env)
	except (ValidationError, ValueError) as ex:
		parser.error(str(ex))

	if not args.command and not args.boot:
		parser.error('a command or --boot is required')

	try:
		wine = current_config(WineConfig).make_wine()
	except (InvalidRuntimeLayoutError, InvalidPrefixError) as ex:
		logger.error('Cannot use the configured Wine: %s', ex)
		return exit_bad_config

	if args.boot:
		result = boot(wine, args.boot, get_output=args.get_output, use_terminal=args.use_terminal)
	else:
		result = execute(
			wine,
			args.command,
			args.arguments,
			env_vars,
			args.input_lines,
			get_output=args.get_output,
			use_terminal=args.use_terminal,
			working_directory=args.working_directory,
		)

	if isinstance(result, Captured):
		sys.stdout.write(result.output)
	return 0 if result else exit_launch_failed
