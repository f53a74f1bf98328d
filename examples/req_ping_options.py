"""req_ping_options.py

Declares the options of a request/ping node and parses `sys.argv` into a
dataclass.

    python req_ping_options.py -c tcp://localhost:5555 -n 3
    python req_ping_options.py --help
"""

import sys
from dataclasses import dataclass, field

from optbind import OptionParser, ParserSettings
from optbind.console import console
from optbind.help_text import copyright_text


@dataclass
class Options:
    socket_connection: str = ""
    count: int = 0
    interval: float = 0.0
    tags: list[str] = field(default_factory=list)
    quiet: bool = False
    verbose: bool = False


parser = OptionParser(
    program="nd-req-ping",
    version="1.0",
    copyright=copyright_text("rtj.dev LLC", 2025),
    help_text="Sends ping requests to a responder and prints the replies.",
)
parser.add_option(
    "-c",
    "--connect",
    dest="socket_connection",
    required=True,
    help="Connection socket endpoint to ping.",
)
parser.add_option("-n", "--count", type=int, default=10, help="Number of pings to send.")
parser.add_option(
    "-i", "--interval", type=float, default="0.5", help="Seconds between pings."
)
parser.add_option("-t", "--tags", arity="list", help="Colon separated message tags.")
parser.add_option(
    "-q", "--quiet", type=bool, mutually_exclusive_set="verbosity", help="Print nothing."
)
parser.add_option(
    "-v",
    "--verbose",
    type=bool,
    mutually_exclusive_set="verbosity",
    help="Print every reply.",
)
parser.add_help_option()


if __name__ == "__main__":
    options = Options()
    outcome = parser.parse(
        sys.argv[1:],
        options,
        ParserSettings(enforce_mutual_exclusivity=True, help_writer=console),
    )
    if outcome.success:
        console.print(options)
