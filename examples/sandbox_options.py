"""sandbox_options.py

Parses sandbox node options into a plain dictionary, with case-insensitive
names and unknown options ignored.

    python sandbox_options.py -C tcp://localhost:5555 --SWITCH dealer extra.txt
"""

import logging
import sys

from optbind import OptionParser, parse
from optbind.console import console
from optbind.utils import setup_logging

parser = OptionParser(program="nd-sandbox", version="1.0")
parser.add_option("-c", "--connect", help="Connection socket endpoint.")
parser.add_option("-b", "--bind", help="Bind socket endpoint.")
parser.add_option("-s", "--switch", help="Selects which nodelets the sandbox starts.")
parser.add_value_list("files", max_elements=2, help="Extra input files.")
parser.add_help_option(short_name="h")


if __name__ == "__main__":
    setup_logging(console_log_level=logging.DEBUG)
    options: dict = {}
    outcome = parse(
        sys.argv[1:],
        options,
        parser,
        case_sensitive=False,
        ignore_unknown_arguments=True,
        help_writer=console,
    )
    if outcome.success:
        console.print(options)
