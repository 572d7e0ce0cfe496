"""Base class for config, and the options that aren't specific to anything"""

import logging
from abc import abstractmethod
from argparse import ArgumentParser, BooleanOptionalAction
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, get_args

from class_doc import extract_docs_from_cls_obj
from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings.sources import PydanticBaseSettingsSource

from winelauncher.common_paths import config_dir
from winelauncher.util.utils import NoNonsenseConfigParser

if TYPE_CHECKING:
	from argparse import _ArgumentGroup

	from pydantic.fields import FieldInfo

logger = logging.getLogger(__name__)


def _remove_optional(annotation: type | None):
	if not annotation:
		return None
	args = get_args(annotation)
	if len(args) == 2 and args[1] == type(None):
		return args[0]
	return annotation


def _field_name_to_cli_arg(s: str, prefix: str | None = None):
	option = s.replace('_', '-')
	if prefix:
		option = f'{prefix}:{option}'
	return f'--{option}'


class IniSettingsSource(PydanticBaseSettingsSource):
	"""Reads a section of an ini file in config_dir, which is the least important place settings come from other than the default values"""
	def __init__(
		self, settings_cls: type[BaseSettings], section_name: str, options_file_name: str | Path
	):
		self.section_name = section_name
		self.options_path = (
			options_file_name
			if isinstance(options_file_name, Path) and options_file_name.is_absolute()
			else config_dir / f'{options_file_name}.ini'
		)
		self.config_parser = NoNonsenseConfigParser(allow_no_value=True)
		self.config_parser.read(self.options_path, encoding='utf-8')
		super().__init__(settings_cls)

	def get_field_value(self, field: 'FieldInfo', field_name: str) -> tuple[Any, str, bool]:
		field_value = self.config_parser.get(self.section_name, field_name, fallback=None)
		if field_value is None and field.alias:
			field_value = self.config_parser.get(self.section_name, field.alias, fallback=None)
		return field_value, field_name, self.field_is_complex(field)

	def __call__(self) -> dict[str, Any]:
		d: dict[str, Any] = {}

		for field_name, field in self.settings_cls.model_fields.items():
			field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
			field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
			if field_value is not None:
				d[field_key] = field_value

		return d


sentinel = object()


class Settings(BaseSettings):
	"""Base class for instances of configuration. Implement section and ideally prefix, and config_file_name if you need to; put it in winelauncher.config settings_classes and that should take care of it

	Loads from stuff in this order (from least to highest priority):
	default value
	config_file_name
	environment variables
	Command line arguments
	"""

	model_config = {
		'env_file_encoding': 'utf-8',
		'env_prefix': 'WINELAUNCHER_',
		'validate_assignment': True,
		'populate_by_name': True,
	}

	@classmethod
	def settings_customise_sources(
		cls,
		settings_cls: type[BaseSettings],
		init_settings: PydanticBaseSettingsSource,
		env_settings: PydanticBaseSettingsSource,
		dotenv_settings: PydanticBaseSettingsSource,
		file_secret_settings: PydanticBaseSettingsSource,
	) -> tuple[PydanticBaseSettingsSource, ...]:
		return (
			init_settings,
			env_settings,
			dotenv_settings,
			IniSettingsSource(settings_cls, cls.section(), cls.config_file_name()),
			file_secret_settings,
		)

	@classmethod
	@abstractmethod
	def section(cls) -> str:
		"""Section that should be used for reading this from options_file_name."""

	@classmethod
	def section_help(cls) -> str | None:
		"""Help text to be added to argument group"""
		return cls.__doc__

	@classmethod
	def prefix(cls) -> str | None:
		"""Prefix to be added to command line arguments for these options."""
		return None

	@classmethod
	def config_file_name(cls) -> str | Path:
		"""Name of the file to load config from. Defaults to config.ini"""
		return 'config'

	@classmethod
	def add_argparser_group(cls, argparser: ArgumentParser) -> 'ArgumentParser | _ArgumentGroup':
		"""Adds a group for this config to an ArgumentParser. See config for how to parse it - to avoid namespace collisions, the qualified name of this class is added"""
		group = (
			argparser
			if cls.section() == MainConfig.section()
			else argparser.add_argument_group(cls.section(), description=cls.section_help())
		)
		prefix = cls.prefix()
		docstrings = extract_docs_from_cls_obj(cls)

		for k, v in cls.model_fields.items():
			names = (k, v.alias) if v.alias else (k,)
			options = [_field_name_to_cli_arg(name, prefix) for name in names]

			description = v.description or (docstrings[k][0] if k in docstrings else None)
			destination_in_namespace = f'{cls.__qualname__}.{k}'

			default = sentinel  # It's not particularly useful to just have everything in the Namespace regardless of if it was provided or not
			t = _remove_optional(v.annotation)
			if t == bool:
				group.add_argument(
					*options,
					action=BooleanOptionalAction,
					help=description,
					default=default,
					dest=destination_in_namespace,
				)
			elif isinstance(t, type) and issubclass(t, Enum):
				# Validators on the settings class turn this into the right member
				choices = ', '.join(member.name for member in t)
				group.add_argument(
					*options,
					type=str,
					help=f'{description} (one of: {choices})' if description else description,
					default=default,
					dest=destination_in_namespace,
					metavar=k,
				)
			else:
				if not t:
					logger.warning('%s in %s has no type annotation, defaulting to str', k, cls)
				# Let Pydantic convert it to whatever fancy type for us
				group.add_argument(
					*options,
					type=str,
					help=description,
					default=default,
					dest=destination_in_namespace,
					metavar=k,
				)
		return group


class MainConfig(Settings):
	"""General options not specific to anything else"""

	@classmethod
	def section(cls) -> str:
		return 'General'

	logging_level: str = Field(default='INFO', alias='log_level')
	"""Logging level (e.g. INFO, DEBUG, WARNING, etc)"""
