# Part of DynamicProxy. See LICENSE file for full copyright and licensing details.
import sys
from pathlib import Path

commands = {}
class Command:
    name = None
    def __init_subclass__(cls):
        cls.name = cls.name or cls.__name__.lower()
        commands[cls.name] = cls

DYNAMICPROXY_HELP = """\
DynamicProxy CLI, use '{dynamicproxy_bin} --help' for this help.

Available commands:
    {command_list}

Use '{dynamicproxy_bin} <command> --help' for individual command help."""

class Help(Command):
    """ Display list of available commands """
    def run(self, args):
        padding = max([len(cmd) for cmd in commands]) + 2
        command_list = "\n    ".join([
            "    {}{}".format(name.ljust(padding), (command.__doc__ or "").strip())
            for name, command in sorted(commands.items())
        ])
        print(DYNAMICPROXY_HELP.format(
            dynamicproxy_bin=Path(sys.argv[0]).name,
            command_list=command_list
        ))

def main(args=None):
    if args is None:
        args = sys.argv[1:]

    # ? if no args, or only options, default to `help`
    command = "help"

    if len(args) and not args[0].startswith("-"):
        command = args[0]
        args = args[1:]

    if command in commands:
        i = commands[command]()
        i.run(args)
    else:
        sys.exit('Unknown command %r' % (command,))
