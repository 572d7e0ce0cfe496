from pathlib import Path
from unittest.mock import MagicMock

import pytest

from winelauncher.exceptions import InvalidPrefixError, InvalidRuntimeLayoutError
from winelauncher.runtime_types import Terminal, VerbosityLevel
from winelauncher.wine import Wine, resolve_proton_path


def _always_valid(_path: Path) -> bool:
	return True


def test_construction_keeps_inputs() -> None:
	wine = Wine(
		'/opt/wine',
		'/home/u/.wine-app',
		VerbosityLevel.Full,
		wine_path_validator=_always_valid,
		prefix_path_validator=_always_valid,
	)
	assert wine.wine_path == Path('/opt/wine')
	assert wine.prefix_path == Path('/home/u/.wine-app')
	assert wine.verbosity is VerbosityLevel.Full
	assert wine.terminal is Terminal.Nothing
	assert not wine.is_proton
	assert wine.executable == Path('/opt/wine/bin/wine64')


def test_defaults_to_silent() -> None:
	wine = Wine('/opt/wine', '/tmp/prefix', wine_path_validator=_always_valid, prefix_path_validator=_always_valid)
	assert wine.verbosity is VerbosityLevel.Silent


def test_only_terminal_can_change() -> None:
	wine = Wine('/opt/wine', '/tmp/prefix', wine_path_validator=_always_valid, prefix_path_validator=_always_valid)
	wine.terminal = Terminal.Konsole
	assert wine.terminal is Terminal.Konsole
	with pytest.raises(AttributeError):
		wine.wine_path = Path('/somewhere/else')  # type: ignore[misc]
	with pytest.raises(AttributeError):
		wine.prefix_path = Path('/somewhere/else')  # type: ignore[misc]
	with pytest.raises(AttributeError):
		wine.verbosity = VerbosityLevel.Full  # type: ignore[misc]


def test_with_terminal_is_a_copy() -> None:
	wine = Wine('/opt/wine', '/tmp/prefix', wine_path_validator=_always_valid, prefix_path_validator=_always_valid)
	other = wine.with_terminal(Terminal.XTerm)
	assert other.terminal is Terminal.XTerm
	assert wine.terminal is Terminal.Nothing
	assert other.wine_path == wine.wine_path
	assert other.prefix_path == wine.prefix_path


def test_real_validators(make_wine_install, prefix: Path) -> None:
	install = make_wine_install()
	wine = Wine(install, prefix)
	assert wine.wine_path == install
	assert wine.prefix_path == prefix


def test_invalid_wine_path_leaves_prefix_alone(tmp_path: Path) -> None:
	prefix = tmp_path / 'prefix'
	with pytest.raises(InvalidRuntimeLayoutError, match='Wine path'):
		Wine(tmp_path / 'not_wine', prefix)
	assert not prefix.exists()


def test_invalid_wine_path_does_not_check_prefix() -> None:
	prefix_validator = MagicMock(return_value=True)
	with pytest.raises(InvalidRuntimeLayoutError):
		Wine('/opt/wine', '/tmp/prefix', wine_path_validator=lambda _: False, prefix_path_validator=prefix_validator)
	prefix_validator.assert_not_called()


def test_invalid_prefix() -> None:
	with pytest.raises(InvalidPrefixError):
		Wine('/opt/wine', '/tmp/prefix', wine_path_validator=_always_valid, prefix_path_validator=lambda _: False)


def test_prefix_created(make_wine_install, tmp_path: Path) -> None:
	prefix = tmp_path / 'new_prefix'
	Wine(make_wine_install(), prefix)
	assert prefix.is_dir()


def test_proton_dist(make_wine_install, prefix: Path) -> None:
	proton = make_wine_install(name='proton/dist').parent
	wine = Wine(proton, prefix, is_proton=True)
	assert wine.wine_path == proton / 'dist'
	assert wine.is_proton


def test_proton_files(make_wine_install, prefix: Path) -> None:
	proton = make_wine_install(name='proton/files').parent
	wine = Wine(proton, prefix, is_proton=True)
	assert wine.wine_path == proton / 'files'


def test_proton_prefers_dist(tmp_path: Path) -> None:
	(tmp_path / 'files').mkdir()
	(tmp_path / 'dist').mkdir()
	assert resolve_proton_path(tmp_path) == tmp_path / 'dist'


def test_proton_neither(tmp_path: Path) -> None:
	prefix = tmp_path / 'prefix'
	proton = tmp_path / 'proton'
	proton.mkdir()
	with pytest.raises(InvalidRuntimeLayoutError, match='Proton'):
		Wine(proton, prefix, is_proton=True)
	assert not prefix.exists()


def test_proton_subdirectory_not_wine(tmp_path: Path) -> None:
	(tmp_path / 'dist').mkdir()
	with pytest.raises(InvalidRuntimeLayoutError, match='Proton path'):
		Wine(tmp_path, tmp_path / 'prefix', is_proton=True)
