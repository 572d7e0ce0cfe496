#!/usr/bin/env python3

import sys

from winelauncher.cli import main

sys.exit(main())
