import logging
from collections.abc import Mapping
from configparser import RawConfigParser

import termcolor

from winelauncher.exceptions import LaunchFailure


class ColouredFormatter(logging.Formatter):
	"""Formats stuff as different colours with termcolor depending on log level"""

	default_mapping: Mapping[int, str] = {
		logging.WARNING: 'yellow',
		logging.ERROR: 'red',
		logging.DEBUG: 'green',
	}

	def __init__(
		self, fmt: str | None = None, colour_mapping: Mapping[int, str] | None = None
	) -> None:
		""":param fmt: Logging format string, as per logging.Formatter
		:param colour_mapping: Mapping of logging levels to termcolor values"""
		self.colour_mapping = colour_mapping if colour_mapping is not None else self.default_mapping
		super().__init__(fmt)

	def format(self, record: logging.LogRecord) -> str:
		message = super().format(record)
		return termcolor.colored(message, self.colour_mapping.get(record.levelno))


class LaunchFailureFormatter(ColouredFormatter):
	"""Puts LaunchFailure on one line as to read more naturally, instead of a whole traceback for what is usually just "that exe doesn't exist\""""

	def format(self, record: logging.LogRecord) -> str:
		if record.exc_info and isinstance(record.exc_info[1], LaunchFailure):
			# Avoid super().format putting it on a new line
			because = str(record.exc_info[1])
			if record.args:
				because = because.replace('%', '%%')
			record.msg = f'{record.msg} because {because}'
			record.exc_text = None
			record.exc_info = None
		return super().format(record)


class NoNonsenseConfigParser(RawConfigParser):
	"""No "interpolation", no using : as a delimiter, no lowercasing every option, that's all silly"""

	def __init__(
		self,
		defaults=None,
		*,
		allow_no_value=False,
		strict=True,
		empty_lines_in_values=True,
		comment_prefixes='#',
	):
		super().__init__(
			defaults=defaults,
			allow_no_value=allow_no_value,
			delimiters='=',
			comment_prefixes=comment_prefixes,
			strict=strict,
			empty_lines_in_values=empty_lines_in_values,
		)

	def optionxform(self, optionstr: str) -> str:
		#If you just create a RawConfigParser and then set configparser.optionxform = str, type checkers and linters will grouch at you, so we do it their way by making a whole ass class
		return optionstr
