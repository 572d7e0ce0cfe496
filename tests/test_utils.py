import logging

from winelauncher.exceptions import LaunchFailure, LaunchStage
from winelauncher.util.utils import LaunchFailureFormatter, NoNonsenseConfigParser


def _record(msg: str, args: tuple, exc: BaseException | None) -> logging.LogRecord:
	exc_info = (type(exc), exc, exc.__traceback__) if exc else None
	return logging.LogRecord('winelauncher.executor', logging.ERROR, __file__, 1, msg, args, exc_info)


def _failure() -> LaunchFailure:
	try:
		try:
			raise FileNotFoundError(2, 'No such file or directory')
		except FileNotFoundError as ex:
			raise LaunchFailure(LaunchStage.Starting, 'Could not start /opt/100%/wine64') from ex
	except LaunchFailure as failure:
		return failure


def test_launch_failure_on_one_line() -> None:
	formatted = LaunchFailureFormatter('%(message)s').format(_record('Could not run %s', ('notepad.exe', ), _failure()))
	assert 'Traceback' not in formatted
	assert '\n' not in formatted
	assert 'Could not run notepad.exe because Could not start /opt/100%/wine64' in formatted


def test_other_exceptions_keep_traceback() -> None:
	try:
		raise ValueError('oh no')
	except ValueError as ex:
		formatted = LaunchFailureFormatter('%(message)s').format(_record('Something broke', (), ex))
	assert 'Traceback' in formatted


def test_config_parser_keeps_case() -> None:
	parser = NoNonsenseConfigParser()
	parser.read_string('[Wine]\nWine_Path = /opt/wine\n')
	assert parser.get('Wine', 'Wine_Path') == '/opt/wine'
	assert not parser.has_option('Wine', 'wine_path')
