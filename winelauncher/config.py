"""Instances of Settings are stored here"""

from argparse import ArgumentParser, Namespace
from collections.abc import Collection
from typing import TypeVar

from winelauncher.settings.settings import MainConfig, Settings, sentinel
from winelauncher.version import __version__
from winelauncher.wine_config import WineConfig

SettingsType_co = TypeVar('SettingsType_co', bound=Settings, covariant=True)

settings_classes: Collection[type[Settings]] = (MainConfig, WineConfig)

__current_config: dict[type, Settings] = {}


def make_argument_parser(prog: str | None=None) -> ArgumentParser:
	"""ArgumentParser with an option for everything in settings_classes, add whatever else you need and pass what it parses to apply_arguments"""
	parser = ArgumentParser(prog=prog)
	parser.add_argument('--version', action='version', version=__version__)
	for cls in settings_classes:
		cls.add_argparser_group(parser)
	return parser


def apply_arguments(args: Namespace) -> None:
	"""Sets config from anything in args that came from the options make_argument_parser added, anything else in there is ignored
	:raises pydantic.ValidationError: if something given is not valid for that option"""
	option_to_config = {
		f'{cls.__qualname__}.{k}': (cls, k) for cls in settings_classes for k in cls.model_fields
	}
	for k, v in vars(args).items():
		if v is sentinel or k not in option_to_config:
			continue
		cls, option_name = option_to_config[k]
		setattr(current_config(cls), option_name, v)


def current_config(cls: type[SettingsType_co]) -> SettingsType_co:
	if cls not in __current_config:
		__current_config[cls] = cls()
	config = __current_config[cls]
	assert isinstance(config, cls)
	return config


def reset_config() -> None:
	"""Forget everything loaded so far, so it will be loaded again from the config file and environment next time"""
	__current_config.clear()
