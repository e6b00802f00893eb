import sys

from rich.pretty import pprint

from flagpole import *

__version__ = "1.2.3"

parser = Parser(shell=True)

want_help = parser.bool("h", "help", descr="Display command line help and exit")
quiet = parser.bool("q", "quiet", descr="Do not print intermediate errors to stderr")
limit = parser.int("l", "limit", default=-1, descr="Limit output to specified number of lines")
verbose = parser.bool("v", "verbose", descr="Print verbose output to stderr")
want_version = parser.bool("V", "version", descr="Print version to stderr and exit")
servers = parser.string("s", "servers", default="host1,host2", descr="Some string")
text = parser.string("t", default="host3,host4", descr="Another string")
flubbers = parser.string("flubbers", default="host5", descr="Yet another string")
timeout = parser.duration("timeout", default=parse_duration("30s"), descr="How long to wait for the servers")


if __name__ == '__main__':
    parser.parse()

    if want_help.value or want_version.value:
        print(f"{parser.prog} version {__version__}", file=sys.stderr)
        if want_help.value:
            print("\texample program to demonstrate library usage\n", file=sys.stderr)
            parser.print_usage()
        sys.exit(0)

    pprint(parser)
    pprint({
        "args": parser.args,
        "narg": parser.narg(),
        "arg(0)": parser.arg(0),
        "limit": limit.value,
        "quiet": quiet.value,
        "verbose": verbose.value,
        "servers": servers.value,
        "text": text.value,
        "flubbers": flubbers.value,
        "timeout": format_duration(timeout.value),
    })
