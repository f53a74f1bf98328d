"""config_loading.py

Builds the option parser of a broker node from `options.yaml`.

    python config_loading.py -w 8 --backend tcp://*:5556
"""

import sys
from pathlib import Path
from types import SimpleNamespace

from optbind import ParserSettings
from optbind.config import loader
from optbind.console import console

parser = loader(Path(__file__).parent / "options.yaml")

if __name__ == "__main__":
    options = SimpleNamespace()
    outcome = parser.parse(sys.argv[1:], options, ParserSettings(help_writer=console))
    if outcome.success:
        console.print(vars(options))
