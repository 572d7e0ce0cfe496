"""Where config files live, following the XDG base directory layout"""
import os
from pathlib import Path

config_dir = Path(os.environ.get('XDG_CONFIG_HOME', Path('~/.config').expanduser()), 'winelauncher')
